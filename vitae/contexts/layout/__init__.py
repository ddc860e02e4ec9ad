"""
Layout Context

Responsibilities:
- Formats entry dates and decides graduated vs. recent education status
- Orders education and experience entries
- Measures and wraps text with the PDF backend's font metrics
- Lays out the resume into positioned draw instructions across pages

Owns: Page layout, typography constants, pagination
Never: Reads or writes documents, or produces PDF bytes
"""

from vitae.contexts.layout.date_formatter import (
    education_date_label,
    format_date,
    format_date_range,
    is_older_than_threshold,
)
from vitae.contexts.layout.draw_instructions import (
    DrawInstruction,
    DrawLine,
    DrawText,
    LayoutResult,
    LinkRegion,
    PageBreak,
)
from vitae.contexts.layout.layout_engine import PageLayoutEngine, layout_resume
from vitae.contexts.layout.section_sorter import (
    category_priority,
    sort_education,
    sort_experience,
)
from vitae.contexts.layout.settings import (
    DEFAULT_LAYOUT_SETTINGS,
    LayoutSettings,
    load_layout_settings,
)
from vitae.contexts.layout.text_metrics import TextMetrics, line_height_mm

__all__ = [
    # Layout
    "PageLayoutEngine",
    "layout_resume",
    "LayoutResult",
    "DrawInstruction",
    "DrawText",
    "DrawLine",
    "PageBreak",
    "LinkRegion",
    # Settings
    "DEFAULT_LAYOUT_SETTINGS",
    "LayoutSettings",
    "load_layout_settings",
    # Helpers
    "TextMetrics",
    "line_height_mm",
    "format_date",
    "format_date_range",
    "education_date_label",
    "is_older_than_threshold",
    "category_priority",
    "sort_education",
    "sort_experience",
]
