"""
Rendering Context

Responsibilities:
- Draws layout instructions into a PDF
- Writes PDFs to the results directory
- Schedules debounced preview regeneration
- Validates rendered PDFs against their layout

Owns: PDF generation, preview artifacts, output management
Never: Changes layout decisions or the resume document
"""

from vitae.contexts.rendering.pdf_renderer import (
    PDFRenderer,
    RenderResult,
    pdf_filename,
    render_resume,
    render_resume_bytes,
)
from vitae.contexts.rendering.preview import PreviewArtifact, PreviewScheduler
from vitae.contexts.rendering.validator import ValidationResult, validate_rendered_pdf

__all__ = [
    "PDFRenderer",
    "RenderResult",
    "pdf_filename",
    "render_resume",
    "render_resume_bytes",
    "PreviewArtifact",
    "PreviewScheduler",
    "ValidationResult",
    "validate_rendered_pdf",
]
