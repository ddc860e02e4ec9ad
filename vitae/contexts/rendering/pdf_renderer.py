"""
PDF Rendering Module

Executes layout draw instructions with fpdf2 and writes the resulting PDF.
"""

import os
import re
import time
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from fpdf import FPDF

from vitae.contexts.editing.resume_data_structure import ResumeDocument
from vitae.contexts.layout.draw_instructions import DrawLine, DrawText, LayoutResult
from vitae.contexts.layout.layout_engine import PageLayoutEngine
from vitae.contexts.layout.settings import DEFAULT_LAYOUT_SETTINGS, LayoutSettings
from vitae.contexts.layout.text_metrics import CORE_FONT_ENCODING, printable
from vitae.contexts.rendering.logger import _log_debug, log_render_result, log_render_start
from vitae.utils import timestamp

load_dotenv()

RESULTS_PATH = Path(os.getenv("VITAE_RESULTS_PATH", "outs/results"))

# Stroke width for underlines (mm)
LINE_WIDTH = 0.2


@dataclass
class RenderResult:
    """
    Result of rendering a resume to PDF.

    Attributes:
        success: Whether the PDF was written
        pdf_path: Path to the written PDF (None if failed)
        page_count: Number of pages in the layout
        link_count: Number of link regions in the layout
        errors: Error messages for a failed render
        layout: The layout that was rendered
    """

    success: bool
    pdf_path: Optional[Path] = None
    page_count: Optional[int] = None
    link_count: int = 0
    errors: List[str] = field(default_factory=list)
    layout: Optional[LayoutResult] = None


def pdf_filename(resume_name: str) -> str:
    """Download file name for a resume, e.g. 'Jane Doe.pdf' ('resume.pdf' if unnamed)."""
    stem = re.sub(r'[\\/:*?"<>|]+', "_", (resume_name or "").strip()) or "resume"
    return f"{stem}.pdf"


class PDFRenderer:
    """
    Draws LayoutResults onto PDF pages.

    Args:
        settings: Layout settings the instructions were produced with (page size, font family)

    Example:
        >>> renderer = PDFRenderer()
        >>> pdf_bytes = renderer.render(layout, title="Jane Doe")
    """

    def __init__(self, settings: LayoutSettings = DEFAULT_LAYOUT_SETTINGS):
        self.settings = settings

    def _new_document(self, title: str) -> FPDF:
        pdf = FPDF(orientation="P", unit="mm", format=(self.settings.page_width, self.settings.page_height))
        pdf.core_fonts_encoding = CORE_FONT_ENCODING
        pdf.set_auto_page_break(auto=False)
        pdf.set_creator("VITAE")
        if title:
            pdf.set_title(printable(title))
        pdf.set_line_width(LINE_WIDTH)
        return pdf

    def _draw_text(self, pdf: FPDF, instruction: DrawText) -> None:
        pdf.set_font(self.settings.font_family, style=instruction.style, size=instruction.font_size)
        pdf.set_text_color(*instruction.color)
        pdf.text(instruction.x, instruction.y, printable(instruction.text))

        region = instruction.hyperlink
        if region is not None:
            pdf.link(region.x, region.y, region.width, region.height, region.url)

    def _draw_line(self, pdf: FPDF, instruction: DrawLine) -> None:
        pdf.set_draw_color(*instruction.color)
        pdf.line(instruction.x1, instruction.y1, instruction.x2, instruction.y2)

    def render(self, layout: LayoutResult, title: str = "") -> bytes:
        """
        Render a layout to PDF bytes, one PDF page per layout page.

        Args:
            layout: Draw instructions from the layout engine
            title: Document title metadata

        Returns:
            PDF file contents
        """
        pdf = self._new_document(title)
        for page in layout.pages:
            pdf.add_page()
            for instruction in page:
                if isinstance(instruction, DrawText):
                    self._draw_text(pdf, instruction)
                elif isinstance(instruction, DrawLine):
                    self._draw_line(pdf, instruction)
        return bytes(pdf.output())


def render_resume_bytes(
    resume: ResumeDocument,
    settings: LayoutSettings = DEFAULT_LAYOUT_SETTINGS,
    today: Optional[date] = None,
) -> bytes:
    """Lay out and render a resume in memory (used for previews)."""
    layout = PageLayoutEngine(settings).layout(resume, today=today)
    return PDFRenderer(settings).render(layout, title=resume.name)


def render_resume(
    resume: ResumeDocument,
    output_path: Optional[Union[str, Path]] = None,
    settings: LayoutSettings = DEFAULT_LAYOUT_SETTINGS,
    today: Optional[date] = None,
) -> RenderResult:
    """
    Lay out a resume, render it and write the PDF.

    Args:
        resume: Document to render
        output_path: Where to write the PDF (default: VITAE_RESULTS_PATH/YYYY-MM-DD/<name>.pdf)
        settings: Layout settings
        today: Reference date for the graduation threshold (defaults to today)

    Returns:
        RenderResult; write failures are reported in errors, not raised
    """
    resume_name = resume.name or "resume"
    if output_path is None:
        output_path = RESULTS_PATH / timestamp.today() / pdf_filename(resume.name)
    output_path = Path(output_path)

    log_render_start(resume_name, output_path)
    start_time = time.time()

    engine = PageLayoutEngine(settings)
    layout = engine.layout(resume, today=today)
    pdf_bytes = PDFRenderer(settings).render(layout, title=resume.name)
    _log_debug(f"Rendered {len(pdf_bytes)} bytes")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(pdf_bytes)
    except OSError as e:
        result = RenderResult(success=False, errors=[f"Could not write PDF to {output_path}: {e}"], layout=layout)
    else:
        result = RenderResult(
            success=True,
            pdf_path=output_path,
            page_count=layout.page_count,
            link_count=len(layout.links),
            layout=layout,
        )

    log_render_result(resume_name, result, time.time() - start_time)
    return result
