"""
PDF processing utilities for reading rendered resumes back.

Main class:
    PDFDocument: Parsed PDF with per-page text lines and link targets.

Helper functions:
    page_count: Quick page count without full extraction.
    link_uris: URI link annotations per page.
    normalize_for_matching: Text normalization for fuzzy matching.
    cluster_by_y_tolerance: Y-coordinate clustering for line detection.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pdfplumber
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except (OSError, PdfReadError):
        return None


def link_uris(pdf_path: Path) -> List[List[str]]:
    """URI targets of link annotations, one list per page in page order."""
    reader = PdfReader(str(pdf_path))
    pages = []
    for page in reader.pages:
        uris = []
        for annotation in page.get("/Annots") or []:
            annotation = annotation.get_object()
            if annotation.get("/Subtype") != "/Link":
                continue
            action = annotation.get("/A")
            if action is None:
                continue
            uri = action.get_object().get("/URI")
            if uri is not None:
                uris.append(str(uri))
        pages.append(uris)
    return pages


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())


def cluster_by_y_tolerance(chars: List, tolerance: float = 3.0) -> List[List]:
    """
    Group characters into lines by Y-coordinate proximity.

    Handles baseline shifts between bold/regular text that would otherwise split lines.
    """
    if not chars:
        return []

    sorted_chars = sorted(chars, key=lambda c: c["top"])

    lines = []
    current_line = [sorted_chars[0]]
    current_y = sorted_chars[0]["top"]

    for char in sorted_chars[1:]:
        if abs(char["top"] - current_y) <= tolerance:
            current_line.append(char)
        else:
            lines.append(current_line)
            current_line = [char]
            current_y = char["top"]

    if current_line:
        lines.append(current_line)

    return lines


class PDFDocument:
    """
    Parsed PDF with line-based text extraction.

    Page data is lazily loaded and cached on first access.

    Args:
        pdf_path: Path to PDF file
        y_tolerance: Max Y-distance (points) to group characters as same line.

    Example:
        >>> pdf = PDFDocument(Path("resume.pdf"))
        >>> for line in pdf.get_lines(page=1):
        ...     print(line)
    """

    def __init__(self, pdf_path: Union[str, Path], y_tolerance: float = 3.0):
        pdf_path = Path(pdf_path)
        if not pdf_path.exists():
            raise FileNotFoundError(f"PDF not found: {pdf_path}")

        self.pdf_path = pdf_path
        self.y_tolerance = y_tolerance
        self._lines_cache: Optional[Dict[int, List[str]]] = None
        self._links_cache: Optional[List[List[str]]] = None

    @property
    def page_count(self) -> int:
        self._ensure_loaded()
        return len(self._lines_cache)

    def _extract_lines(self) -> Dict[int, List[str]]:
        """Text lines per page (1-indexed), top to bottom, characters ordered by x."""
        pages: Dict[int, List[str]] = {}
        with pdfplumber.open(self.pdf_path) as pdf:
            for page_num, page in enumerate(pdf.pages, start=1):
                lines = []
                for char_objs in cluster_by_y_tolerance(page.chars, tolerance=self.y_tolerance):
                    char_objs.sort(key=lambda c: c["x0"])
                    lines.append("".join(c["text"] for c in char_objs))
                pages[page_num] = lines
        return pages

    def _ensure_loaded(self) -> None:
        if self._lines_cache is None:
            self._lines_cache = self._extract_lines()

    def get_lines(self, page: int) -> List[str]:
        """Text lines of a page (1-indexed); empty if the page does not exist."""
        self._ensure_loaded()
        return self._lines_cache.get(page, [])

    def get_character_stream(self, page: int) -> str:
        """Normalized text of a whole page for substring matching."""
        return normalize_for_matching("".join(self.get_lines(page)))

    def get_link_uris(self, page: int) -> List[str]:
        """URI link targets on a page (1-indexed)."""
        if self._links_cache is None:
            self._links_cache = link_uris(self.pdf_path)
        if not 1 <= page <= len(self._links_cache):
            return []
        return self._links_cache[page - 1]

    def find(self, text: str) -> Optional[Tuple[int, int]]:
        """(page, line_index) of the first line containing text (normalized), or None."""
        self._ensure_loaded()
        text_norm = normalize_for_matching(text)
        for page_num in sorted(self._lines_cache):
            for line_idx, line in enumerate(self._lines_cache[page_num]):
                if text_norm in normalize_for_matching(line):
                    return page_num, line_idx
        return None
