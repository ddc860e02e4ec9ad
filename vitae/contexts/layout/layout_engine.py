"""
Page Layout Engine

Turns a ResumeDocument into a LayoutResult: positioned text runs, underline
strokes, link regions and page breaks for a single-column A4 resume.

Page structure (top to bottom):
    1. Name, centered, bold
    2. Contact line: phone | email | contacts..., centered, linked parts in blue
    3. Additional text, wrapped and centered
    4. "Education and Certification", most recent first
    5. "Work History/Projects/Internships", by category then most recent start

Pagination: after each education entry, each experience bullet and each
experience entry, a cursor below the overflow threshold starts a new page at
the top margin with the section font size re-applied.

Layout is total over its input. Missing fields render as empty text and
malformed dates are shown as typed; nothing in here raises on document content.
"""

import re
import time
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from vitae.contexts.editing.resume_data_structure import (
    EducationRecord,
    ExperienceRecord,
    ResumeDocument,
    as_text,
)
from vitae.contexts.layout.date_formatter import education_date_label, format_date_range
from vitae.contexts.layout.draw_instructions import (
    RGB,
    DrawLine,
    DrawText,
    LayoutResult,
    LinkRegion,
    PageBreak,
)
from vitae.contexts.layout.logger import log_layout_result, log_page_break
from vitae.contexts.layout.section_sorter import sort_education, sort_experience
from vitae.contexts.layout.settings import DEFAULT_LAYOUT_SETTINGS, LayoutSettings
from vitae.contexts.layout.text_metrics import TextMetrics, line_height_mm, printable


@dataclass(frozen=True)
class ContactPart:
    """One item of the contact line; link is empty when the text is not clickable."""

    text: str
    link: str = ""


def contact_parts(resume: ResumeDocument) -> List[ContactPart]:
    """Contact line items in display order: phone, email, then named contacts."""
    parts = []
    phone = as_text(resume.phone)
    email = as_text(resume.email)
    if phone:
        parts.append(ContactPart(phone, "tel:" + re.sub(r"\s+", "", phone)))
    if email:
        parts.append(ContactPart(email, f"mailto:{email}"))
    for contact in resume.contacts:
        name = as_text(contact.name)
        if name:
            parts.append(ContactPart(name, as_text(contact.url)))
    return parts


def education_line(record: EducationRecord, marker: str = "•") -> str:
    """Left-hand text of an education entry."""
    if record.is_certificate:
        return f"{marker} {as_text(record.name)}"

    location = ", ".join(part for part in (as_text(record.city), as_text(record.state)) if part)
    location = f", {location}" if location else ""
    return (
        f"{marker} {as_text(record.degree_type)} in {as_text(record.category)} "
        f"| {as_text(record.name)}{location}"
    )


def experience_bullets(record: ExperienceRecord) -> List[str]:
    """Summary (if any) followed by the non-empty detail lines, all trimmed."""
    bullets = []
    summary = as_text(record.summary).strip()
    if summary:
        bullets.append(summary)
    bullets.extend(
        line.strip() for line in as_text(record.details).split("\n") if line.strip()
    )
    return bullets


class _PageCursor:
    """Vertical cursor plus current font state; collects instructions."""

    def __init__(self, settings: LayoutSettings, metrics: TextMetrics):
        self.settings = settings
        self.metrics = metrics
        self.y = settings.top
        self.font_size = settings.name_font_size
        self.style = ""
        self.page_number = 1
        self.instructions = []

    def set_font(self, size: Optional[float] = None, style: Optional[str] = None) -> None:
        if size is not None:
            self.font_size = size
        if style is not None:
            self.style = style

    def width(self, text: str) -> float:
        return self.metrics.text_width(printable(text), self.font_size, self.style)

    def text(
        self,
        text: str,
        x: float,
        y: Optional[float] = None,
        align: str = "left",
        color: Optional[RGB] = None,
        link: str = "",
    ) -> float:
        """Draw a line of text anchored at x; returns its width."""
        text = printable(as_text(text))
        if not text:
            return 0.0

        y = self.y if y is None else y
        width = self.width(text)
        if align == "center":
            x -= width / 2
        elif align == "right":
            x -= width

        hyperlink = None
        if link:
            hyperlink = LinkRegion(
                x=x,
                y=y - self.settings.link_rise,
                width=width,
                height=self.settings.link_height,
                url=link,
            )

        self.instructions.append(
            DrawText(
                text=text,
                x=x,
                y=y,
                font_size=self.font_size,
                style=self.style,
                color=color or self.settings.text_color,
                align=align,
                hyperlink=hyperlink,
            )
        )
        return width

    def line(self, x1: float, y1: float, x2: float, y2: float, color: RGB) -> None:
        self.instructions.append(DrawLine(x1=x1, y1=y1, x2=x2, y2=y2, color=color))

    def advance(self, dy: float) -> None:
        self.y += dy

    def check_overflow(self) -> None:
        if self.y > self.settings.overflow_threshold:
            self.page_number += 1
            log_page_break(self.page_number, self.y)
            self.instructions.append(PageBreak(font_size=self.font_size))
            self.y = self.settings.top


class PageLayoutEngine:
    """
    Lays out resume documents with fixed settings.

    The engine holds no document state; each layout() call is independent and
    returns a fresh LayoutResult.

    Args:
        settings: Page geometry and typography
        metrics: Text measurement (one is created for the settings' font if None)

    Example:
        >>> engine = PageLayoutEngine()
        >>> result = engine.layout(resume, today=date(2025, 11, 1))
        >>> result.page_count
        1
    """

    def __init__(
        self,
        settings: LayoutSettings = DEFAULT_LAYOUT_SETTINGS,
        metrics: Optional[TextMetrics] = None,
    ):
        self.settings = settings
        self.metrics = metrics or TextMetrics(settings.font_family)

    def line_height(self, font_size: float, spacing: float) -> float:
        return line_height_mm(font_size, spacing, self.settings.pt_to_mm)

    def layout(self, resume: ResumeDocument, today: Optional[date] = None) -> LayoutResult:
        """
        Lay out a resume.

        Args:
            resume: Document to lay out (read only)
            today: Reference date for the graduation threshold (defaults to today)

        Returns:
            LayoutResult with every page's draw instructions
        """
        start_time = time.time()
        cursor = _PageCursor(self.settings, self.metrics)

        self._layout_header(cursor, resume)
        self._layout_education(cursor, resume.education, today or date.today())
        self._layout_experience(cursor, resume.experience)

        result = LayoutResult(instructions=cursor.instructions)
        log_layout_result(as_text(resume.name), result, time.time() - start_time)
        return result

    def _layout_header(self, cursor: _PageCursor, resume: ResumeDocument) -> None:
        s = self.settings
        center = s.page_width / 2

        cursor.set_font(s.name_font_size, "B")
        cursor.text(resume.name, center, align="center")
        cursor.advance(self.line_height(s.name_font_size, s.name_spacing))

        cursor.set_font(s.header_font_size, "")
        header_line_height = self.line_height(s.header_font_size, s.header_spacing)

        parts = contact_parts(resume)
        if parts:
            widths = [cursor.width(part.text) for part in parts]
            separator_width = cursor.width(s.contact_separator)
            total_width = sum(widths) + separator_width * (len(parts) - 1)

            x = (s.page_width - total_width) / 2
            for i, part in enumerate(parts):
                color = s.link_color if part.link else s.text_color
                cursor.text(part.text, x, color=color, link=part.link)
                x += widths[i]
                if i < len(parts) - 1:
                    cursor.text(s.contact_separator, x, color=s.text_color)
                    x += separator_width
            cursor.advance(header_line_height)

        additional_text = printable(as_text(resume.additional_text).strip())
        if additional_text:
            lines = self.metrics.split_text(additional_text, s.content_width, s.header_font_size)
            for i, line in enumerate(lines):
                cursor.text(line, center, y=cursor.y + i * header_line_height, align="center")
            cursor.advance(len(lines) * header_line_height)

        cursor.advance(s.section_gap)

    def _layout_education(
        self, cursor: _PageCursor, education: List[EducationRecord], today: date
    ) -> None:
        s = self.settings
        section_line_height = self.line_height(s.section_font_size, s.section_spacing)
        indent_x = s.margin + s.bullet_indent
        right_x = s.page_width - s.margin

        cursor.set_font(s.section_font_size, "B")
        cursor.text(s.education_heading, s.margin)
        cursor.advance(section_line_height)

        cursor.set_font(style="")
        for record in sort_education(education):
            cursor.text(education_line(record, s.bullet_marker), indent_x)
            if not record.is_certificate:
                label = education_date_label(
                    as_text(record.date),
                    today,
                    years=s.graduation_threshold_years,
                    graduated_label=s.graduated_label,
                )
                cursor.text(label, right_x, align="right")
            cursor.advance(section_line_height)
            cursor.check_overflow()

    def _layout_experience(self, cursor: _PageCursor, experience: List[ExperienceRecord]) -> None:
        s = self.settings
        section_line_height = self.line_height(s.section_font_size, s.section_spacing)
        bullet_pitch = section_line_height * s.bullet_spacing
        indent_x = s.margin + s.bullet_indent
        bullet_width = s.content_width - s.bullet_indent
        right_x = s.page_width - s.margin

        cursor.advance(s.section_gap)
        cursor.set_font(s.section_font_size, "B")
        cursor.text(s.experience_heading, s.margin)
        cursor.advance(section_line_height)

        for record in sort_experience(experience):
            title = as_text(record.title)
            url = as_text(record.url)

            cursor.set_font(style="I")
            x = s.margin
            title_linked = False
            if title:
                color = s.link_color if url else s.text_color
                title_width = cursor.text(title, x, color=color, link=url)
                if url:
                    underline_y = cursor.y + s.underline_offset
                    cursor.line(x, underline_y, x + title_width, underline_y, s.link_color)
                    title_linked = True
                x += title_width

            remaining = [part for part in (as_text(record.company), as_text(record.location)) if part]
            if remaining:
                cursor.text((", " if title else "") + ", ".join(remaining), x)

            date_range = format_date_range(as_text(record.start_date), as_text(record.end_date))
            cursor.text(date_range, right_x, align="right")
            cursor.advance(section_line_height)
            if title_linked:
                cursor.advance(s.underline_clearance)

            cursor.set_font(style="")
            for bullet in experience_bullets(record)[: s.max_bullets]:
                lines = self.metrics.split_text(
                    printable(f"{s.bullet_marker} {bullet}"), bullet_width, s.section_font_size
                )
                for i, line in enumerate(lines):
                    cursor.text(line, indent_x, y=cursor.y + i * bullet_pitch)
                cursor.advance(len(lines) * bullet_pitch)
                cursor.check_overflow()

            cursor.advance(section_line_height / s.entry_gap_divisor)
            cursor.check_overflow()


def layout_resume(
    resume: ResumeDocument,
    settings: LayoutSettings = DEFAULT_LAYOUT_SETTINGS,
    today: Optional[date] = None,
) -> LayoutResult:
    """Lay out a resume with a one-off engine. See PageLayoutEngine.layout()."""
    return PageLayoutEngine(settings).layout(resume, today=today)
