"""
Text measurement for page layout.

Widths come from the PDF backend's core Helvetica metrics, so a line measured
here occupies exactly the same width once drawn. Text is limited to the
Windows-1252 repertoire the core fonts can encode; anything else is replaced
with "?" by printable() before it is measured or drawn.
"""

from functools import lru_cache
from typing import List

from fpdf import FPDF

CORE_FONT_ENCODING = "windows-1252"


def printable(text: str) -> str:
    """Replace characters the core fonts cannot encode with '?'."""
    return text.encode(CORE_FONT_ENCODING, errors="replace").decode(CORE_FONT_ENCODING)


def line_height_mm(font_size: float, spacing: float, pt_to_mm: float = 0.352778) -> float:
    """Line height in mm for a font size in points and a line spacing factor."""
    return font_size * pt_to_mm * spacing


class TextMetrics:
    """
    Measures and wraps text for a core font family.

    Args:
        font_family: Core font family name (e.g., "helvetica")

    Example:
        >>> metrics = TextMetrics()
        >>> width = metrics.text_width("Jane Doe", 14, "B")
        >>> lines = metrics.split_text(summary, max_width=170, font_size=12)
    """

    def __init__(self, font_family: str = "helvetica"):
        self.font_family = font_family
        self._pdf = FPDF(unit="mm", format="A4")
        self._pdf.core_fonts_encoding = CORE_FONT_ENCODING
        # Widths are a pure function of (text, size, style); cache per instance
        self._width = lru_cache(maxsize=4096)(self._measure)

    def _measure(self, text: str, font_size: float, style: str) -> float:
        self._pdf.set_font(self.font_family, style=style, size=font_size)
        return self._pdf.get_string_width(printable(text))

    def text_width(self, text: str, font_size: float, style: str = "") -> float:
        """Width of a single line of text in mm."""
        if not text:
            return 0.0
        return self._width(text, font_size, style)

    def split_text(self, text: str, max_width: float, font_size: float, style: str = "") -> List[str]:
        """
        Wrap text into lines no wider than max_width.

        Explicit newlines always break. Words are packed greedily; a word
        wider than max_width on its own is broken between characters.

        Returns:
            Wrapped lines (at least one, possibly empty)
        """
        lines: List[str] = []
        for paragraph in text.split("\n"):
            current = ""
            for word in paragraph.split(" "):
                candidate = f"{current} {word}" if current else word
                if self.text_width(candidate, font_size, style) <= max_width:
                    current = candidate
                    continue

                if current:
                    lines.append(current)
                current = word
                while len(current) > 1 and self.text_width(current, font_size, style) > max_width:
                    cut = self._fit_prefix(current, max_width, font_size, style)
                    lines.append(current[:cut])
                    current = current[cut:]
            lines.append(current)
        return lines

    def _fit_prefix(self, word: str, max_width: float, font_size: float, style: str) -> int:
        """Length of the longest prefix of word that fits max_width (at least 1)."""
        cut = 1
        while cut < len(word) and self.text_width(word[: cut + 1], font_size, style) <= max_width:
            cut += 1
        return cut
