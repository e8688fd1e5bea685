"""Typed scene records for the map overlay.

The layout engine produces these; the serializer turns them into SVG markup.
All coordinates are absolute pixels on the target canvas.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class RoundedRect:
    x: float
    y: float
    width: float
    height: float
    rx: float = 0.0
    fill: str = "#FFFFFF"
    fill_opacity: float = 1.0
    stroke: str | None = None
    stroke_width: float = 0.0


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    fill: str


@dataclass(frozen=True)
class TextSpan:
    """A run of characters inside a text line. ``fill=None`` inherits the line color."""

    text: str
    fill: str | None = None


@dataclass(frozen=True)
class TextRun:
    x: float
    y: float
    font_size: int
    spans: tuple[TextSpan, ...]
    style: str = "text"  # title | text | muted

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


Shape = Union[RoundedRect, Circle, TextRun]


@dataclass(frozen=True)
class OverlayBox:
    """One panel of the overlay: its shadow + background rect and its content."""

    name: str
    frame: RoundedRect
    shadow: RoundedRect
    shapes: tuple[Shape, ...] = ()

    @property
    def texts(self) -> list[TextRun]:
        return [s for s in self.shapes if isinstance(s, TextRun)]

    @property
    def markers(self) -> list[Circle]:
        return [s for s in self.shapes if isinstance(s, Circle)]


@dataclass(frozen=True)
class OverlayScene:
    width: int
    height: int
    scale: float
    boxes: tuple[OverlayBox, ...] = field(default_factory=tuple)

    def box(self, name: str) -> OverlayBox | None:
        for b in self.boxes:
            if b.name == name:
                return b
        return None
