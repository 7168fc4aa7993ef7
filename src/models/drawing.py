"""
Drawing instructions produced by the document layouts.

Layouts emit an ordered list of these; services.pdf turns them into bytes.
Coordinates are PDF points with the origin at the bottom-left of the page.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    font: str = "Helvetica"
    size: float = 10
    align: str = "left"  # "left" or "right"


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class NewPage:
    pass


DrawInstruction = Text | Line | Rect | NewPage


@dataclass(frozen=True)
class PageGeometry:
    """Page size and spacing used by the layouts (US Letter by default)."""

    width: float = 612.0
    height: float = 792.0
    margin: float = 50.0
    # Minimum vertical space left before a block forces a new page
    bottom_threshold: float = 100.0
    line_height: float = 14.0

    @property
    def top(self) -> float:
        return self.height - self.margin

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin
