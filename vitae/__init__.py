"""
VITAE - Visual Interactive Typesetting And Export for resumes

A resume builder that turns structured resume data into a paginated PDF
through a deterministic layout engine.

Architecture:
- Editing Context: Resume document model, JSON schema, storage and form edits
- Layout Context: Date formatting, section ordering and page layout
- Rendering Context: PDF drawing, debounced previews and output validation
"""

__version__ = "0.1.0"
