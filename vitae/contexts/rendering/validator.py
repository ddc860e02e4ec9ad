"""
Rendered PDF validation.

Reads a rendered PDF back and checks it against the layout it was drawn from:
page count, the text of every run on its page, and the link annotations.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from vitae.contexts.layout.draw_instructions import DrawText, LayoutResult
from vitae.contexts.rendering.logger import log_validation_result
from vitae.utils.pdf_processing import PDFDocument, normalize_for_matching

# Characters shown in issue messages for a missing text run
SNIPPET_LENGTH = 40


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    PDF_NOT_FOUND = "PDF not found: {path}"
    PAGE_COUNT_MISMATCH = "Page count mismatch: {actual} (expected {intended})"
    TEXT_NOT_FOUND = "Page {page}: text not found: '{snippet}'"
    LINK_NOT_FOUND = "Page {page}: link not found: {url}"


@dataclass
class ValidationResult:
    """
    Result of validating a rendered PDF.

    Attributes:
        page_count: Pages in the PDF
        expected_page_count: Pages in the layout
        issues: Problems found (empty when valid)
    """

    page_count: int
    expected_page_count: int
    issues: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.issues) == 0


def _snippet(text: str) -> str:
    return text if len(text) <= SNIPPET_LENGTH else text[:SNIPPET_LENGTH] + "..."


def validate_rendered_pdf(pdf_path: Union[str, Path], layout: LayoutResult) -> ValidationResult:
    """
    Validate a rendered PDF against its layout.

    Args:
        pdf_path: Path to the rendered PDF
        layout: Layout the PDF was rendered from

    Returns:
        ValidationResult; a missing PDF is reported as an issue
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        result = ValidationResult(
            page_count=0,
            expected_page_count=layout.page_count,
            issues=[IssueTemplates.PDF_NOT_FOUND.format(path=pdf_path)],
        )
        log_validation_result(pdf_path, result)
        return result

    pdf = PDFDocument(pdf_path)
    result = ValidationResult(page_count=pdf.page_count, expected_page_count=layout.page_count)

    if result.page_count != result.expected_page_count:
        result.issues.append(
            IssueTemplates.PAGE_COUNT_MISMATCH.format(
                actual=result.page_count, intended=result.expected_page_count
            )
        )

    for page_number, page in enumerate(layout.pages, start=1):
        if page_number > result.page_count:
            break

        page_stream = pdf.get_character_stream(page_number)
        for instruction in page:
            if not isinstance(instruction, DrawText):
                continue
            expected = normalize_for_matching(instruction.text)
            if expected and expected not in page_stream:
                result.issues.append(
                    IssueTemplates.TEXT_NOT_FOUND.format(
                        page=page_number, snippet=_snippet(instruction.text)
                    )
                )

    for page_number, region in layout.links:
        if region.url not in pdf.get_link_uris(page_number):
            result.issues.append(IssueTemplates.LINK_NOT_FOUND.format(page=page_number, url=region.url))

    log_validation_result(pdf_path, result)
    return result
