"""
Editing Context

Responsibilities:
- Owns the resume document model (contacts, education, experience, tags)
- Reads and writes the JSON document schema, migrating legacy form keys
- Persists the working document to a local file store
- Applies form saves and deletes, then requests a preview update

Owns: Resume document representation, document schema, form field names
Never: Decides page layout or draws anything
"""

from vitae.contexts.editing.editor import (
    ResumeEditor,
    derive_contact_name,
    reconcile_end_date,
)
from vitae.contexts.editing.exceptions import (
    EntryNotFoundError,
    InvalidResumeStructureError,
    ResumeLoadError,
)
from vitae.contexts.editing.persistence import (
    ResumeStore,
    dumps_resume,
    load_resume_file,
    loads_resume,
    save_resume_file,
)
from vitae.contexts.editing.resume_data_structure import (
    SCHEMA_VERSION,
    Contact,
    EducationRecord,
    ExperienceRecord,
    ResumeDocument,
    Tag,
)

__all__ = [
    # Document model
    "SCHEMA_VERSION",
    "Contact",
    "EducationRecord",
    "ExperienceRecord",
    "ResumeDocument",
    "Tag",
    # Persistence
    "ResumeStore",
    "dumps_resume",
    "load_resume_file",
    "loads_resume",
    "save_resume_file",
    # Editing session
    "ResumeEditor",
    "derive_contact_name",
    "reconcile_end_date",
    # Errors
    "EntryNotFoundError",
    "InvalidResumeStructureError",
    "ResumeLoadError",
]
