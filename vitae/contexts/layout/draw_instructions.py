"""
Draw instructions produced by the layout engine.

A LayoutResult is a flat, ordered stream of instructions. PageBreak separates
pages; everything between two breaks belongs to one page. Coordinates are in
mm from the top-left corner of the page, and text y is the baseline.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class LinkRegion:
    """Clickable rectangle the renderer turns into a link annotation."""

    x: float
    y: float
    width: float
    height: float
    url: str


@dataclass(frozen=True)
class DrawText:
    """
    Single line of text.

    Attributes:
        text: Text to draw
        x: Left edge of the text (already resolved for centered/right alignment)
        y: Baseline
        font_size: Size in points
        style: "" (normal), "B" (bold) or "I" (italic)
        color: RGB text color
        align: Alignment the x position was resolved from ("left", "center", "right")
        hyperlink: Clickable region over the text, if any
    """

    text: str
    x: float
    y: float
    font_size: float
    style: str = ""
    color: RGB = (0, 0, 0)
    align: str = "left"
    hyperlink: Optional[LinkRegion] = None


@dataclass(frozen=True)
class DrawLine:
    """Straight line, used to underline linked titles."""

    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB = (0, 0, 0)


@dataclass(frozen=True)
class PageBreak:
    """Start of a new page; font_size is the size re-applied on the new page."""

    font_size: float


DrawInstruction = Union[DrawText, DrawLine, PageBreak]


@dataclass
class LayoutResult:
    """Ordered draw instructions for a whole document."""

    instructions: List[DrawInstruction] = field(default_factory=list)

    @property
    def pages(self) -> List[List[DrawInstruction]]:
        """Instructions grouped by page (PageBreak markers removed)."""
        pages: List[List[DrawInstruction]] = [[]]
        for instruction in self.instructions:
            if isinstance(instruction, PageBreak):
                pages.append([])
            else:
                pages[-1].append(instruction)
        return pages

    @property
    def page_count(self) -> int:
        return 1 + sum(1 for i in self.instructions if isinstance(i, PageBreak))

    @property
    def texts(self) -> List[DrawText]:
        return [i for i in self.instructions if isinstance(i, DrawText)]

    @property
    def links(self) -> List[Tuple[int, LinkRegion]]:
        """Every hyperlink region with its 1-indexed page number."""
        links = []
        for page_number, page in enumerate(self.pages, start=1):
            for instruction in page:
                if isinstance(instruction, DrawText) and instruction.hyperlink is not None:
                    links.append((page_number, instruction.hyperlink))
        return links

    def lines_at(self, y: float, page: int = 1, tolerance: float = 0.01) -> List[DrawText]:
        """Text runs drawn on a baseline, left to right."""
        runs = [
            i
            for i in self.pages[page - 1]
            if isinstance(i, DrawText) and abs(i.y - y) <= tolerance
        ]
        return sorted(runs, key=lambda run: run.x)
