"""Overlay layout engine: annotation bundle + canvas size -> vector scene.

Pure computation, no network or disk. Every size below is a base value at
scale 1.0; the scale factor grows with the canvas so the overlay stays
legible on large static maps and never shrinks below base size on small ones.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from mapcomposer.models.annotations import AnnotationBundle, ClosestPOI
from mapcomposer.overlay.primitives import (
    Circle,
    OverlayBox,
    OverlayScene,
    RoundedRect,
    TextRun,
    TextSpan,
)

# ── Scaling ──

# Canvas edge (px) drawn at base size; larger canvases scale up linearly.
_REFERENCE_EDGE_PX = 1000.0
_MIN_SCALE = 1.0

# ── Base sizes (px at scale 1.0) ──

_PADDING = 12
_BOX_PADDING = 10
_TITLE_FONT = 14
_TEXT_FONT = 11
_SMALL_FONT = 10
_DOT = 8
_LINE_HEIGHT = 16
_CORNER_RADIUS = 6
_LABEL_GAP = 6
_SHADOW_OFFSET = 1
_RADIUS_BASELINE_INSET = 2

_ADDRESS_BOX = (240, 65)
_AMENITIES_BOX = (160, 115)
_CLOSEST_BOX = (200, 95)

# Second address line sits tighter than a full line height.
_ADDRESS_LINE2_FACTOR = 0.85

# ── Text limits ──

_ELLIPSIS = "..."
_ADDRESS_MAX_CHARS = 40
_ADDRESS_LINE_CHARS = 30
_POI_NAME_MAX_CHARS = 22
_MAX_CLOSEST = 4
_BULLET = "●"

# ── Palette / box style ──

LISTING_COLOR = "#1E40AF"
FALLBACK_COLOR = "#666666"
CATEGORY_COLORS: dict[str, str] = {
    "restaurants": "#F97316",
    "grocery": "#92400E",
    "shopping": "#A855F7",
    "parks": "#22C55E",
}
# POI search results tag places with singular types.
_CATEGORY_ALIASES = {
    "restaurant": "restaurants",
    "park": "parks",
}

_BOX_FILL = "#FFFFFF"
_BOX_FILL_OPACITY = 0.92
_BOX_STROKE = "#E5E7EB"
_BOX_STROKE_WIDTH = 1
_SHADOW_FILL = "#000000"
_SHADOW_OPACITY = 0.15

ADDRESS_BOX = "address"
AMENITIES_BOX = "amenities"
CLOSEST_BOX = "closest"


def compute_scale(width: int, height: int) -> float:
    """``max(1.0, max(width, height) / 1000)``."""
    if width <= 0 or height <= 0:
        raise ValueError(f"canvas dimensions must be positive, got {width}x{height}")
    return max(_MIN_SCALE, max(width, height) / _REFERENCE_EDGE_PX)


def scaled(base: float, scale: float) -> int:
    """Scale a base size and round half up to a whole pixel."""
    return int(math.floor(base * scale + 0.5))


@dataclass(frozen=True)
class LayoutMetrics:
    scale: float
    padding: int
    box_padding: int
    title_font: int
    text_font: int
    small_font: int
    dot: int
    line_height: int
    corner_radius: int
    label_gap: int
    shadow_offset: int
    radius_inset: int
    address_box: tuple[int, int]
    amenities_box: tuple[int, int]
    closest_box: tuple[int, int]

    @classmethod
    def for_scale(cls, scale: float) -> LayoutMetrics:
        return cls(
            scale=scale,
            padding=scaled(_PADDING, scale),
            box_padding=scaled(_BOX_PADDING, scale),
            title_font=scaled(_TITLE_FONT, scale),
            text_font=scaled(_TEXT_FONT, scale),
            small_font=scaled(_SMALL_FONT, scale),
            dot=scaled(_DOT, scale),
            line_height=scaled(_LINE_HEIGHT, scale),
            corner_radius=scaled(_CORNER_RADIUS, scale),
            label_gap=scaled(_LABEL_GAP, scale),
            shadow_offset=scaled(_SHADOW_OFFSET, scale),
            radius_inset=scaled(_RADIUS_BASELINE_INSET, scale),
            address_box=(scaled(_ADDRESS_BOX[0], scale), scaled(_ADDRESS_BOX[1], scale)),
            amenities_box=(scaled(_AMENITIES_BOX[0], scale), scaled(_AMENITIES_BOX[1], scale)),
            closest_box=(scaled(_CLOSEST_BOX[0], scale), scaled(_CLOSEST_BOX[1], scale)),
        )


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def truncate(text: str, max_chars: int) -> str:
    """Cut ``text`` to ``max_chars`` total, ending in an ellipsis when cut."""
    if len(text) <= max_chars:
        return text
    return text[: max_chars - len(_ELLIPSIS)] + _ELLIPSIS


def address_lines(address: str) -> tuple[str, str]:
    """Split the (possibly ellipsized) address at the line break column."""
    display = truncate(address, _ADDRESS_MAX_CHARS)
    return display[:_ADDRESS_LINE_CHARS], display[_ADDRESS_LINE_CHARS:]


def radius_label(radius: float) -> str:
    value = str(int(radius)) if float(radius).is_integer() else str(float(radius))
    unit = "mile" if radius == 1 else "miles"
    return f"Radius: {value} {unit}"


def category_color(category: str) -> str:
    key = category.strip().lower()
    key = _CATEGORY_ALIASES.get(key, key)
    return CATEGORY_COLORS.get(key, FALLBACK_COLOR)


def poi_line(poi: ClosestPOI) -> tuple[TextSpan, ...]:
    name = truncate(poi.name, _POI_NAME_MAX_CHARS)
    return (
        TextSpan(_BULLET, fill=category_color(poi.category)),
        TextSpan(f" {name} ({poi.distance:.1f}mi)"),
    )


# ---------------------------------------------------------------------------
# Boxes
# ---------------------------------------------------------------------------


def _panel(x: float, y: float, size: tuple[int, int], m: LayoutMetrics) -> tuple[RoundedRect, RoundedRect]:
    """Background frame and its drop shadow."""
    w, h = size
    frame = RoundedRect(
        x=x, y=y, width=w, height=h,
        rx=m.corner_radius,
        fill=_BOX_FILL,
        fill_opacity=_BOX_FILL_OPACITY,
        stroke=_BOX_STROKE,
        stroke_width=_BOX_STROKE_WIDTH,
    )
    shadow = RoundedRect(
        x=x, y=y + m.shadow_offset, width=w, height=h,
        rx=m.corner_radius,
        fill=_SHADOW_FILL,
        fill_opacity=_SHADOW_OPACITY,
    )
    return frame, shadow


def _address_box(bundle: AnnotationBundle, m: LayoutMetrics) -> OverlayBox:
    x0 = y0 = m.padding
    frame, shadow = _panel(x0, y0, m.address_box, m)
    text_x = x0 + m.box_padding
    line1_y = y0 + m.box_padding + m.title_font

    line1, line2 = address_lines(bundle.address)
    shapes: list = [TextRun(text_x, line1_y, m.title_font, (TextSpan(line1),), style="title")]
    if line2:
        shapes.append(TextRun(
            text_x, line1_y + m.line_height * _ADDRESS_LINE2_FACTOR,
            m.title_font, (TextSpan(line2),), style="title",
        ))
    shapes.append(TextRun(
        text_x, y0 + m.address_box[1] - m.box_padding - m.radius_inset,
        m.small_font, (TextSpan(radius_label(bundle.radius)),), style="muted",
    ))
    return OverlayBox(ADDRESS_BOX, frame, shadow, tuple(shapes))


def _amenities_box(bundle: AnnotationBundle, width: int, m: LayoutMetrics) -> OverlayBox:
    x0 = width - m.amenities_box[0] - m.padding
    y0 = m.padding
    frame, shadow = _panel(x0, y0, m.amenities_box, m)
    text_x = x0 + m.box_padding
    title_y = y0 + m.box_padding + m.title_font

    stats = bundle.stats
    entries = [
        ("Your Listing", LISTING_COLOR),
        (f"Restaurants: {stats.restaurants}", CATEGORY_COLORS["restaurants"]),
        (f"Grocery: {stats.grocery}", CATEGORY_COLORS["grocery"]),
        (f"Shopping: {stats.shopping}", CATEGORY_COLORS["shopping"]),
        (f"Parks: {stats.parks}", CATEGORY_COLORS["parks"]),
    ]

    shapes: list = [TextRun(text_x, title_y, m.title_font, (TextSpan("Nearby Amenities"),), style="title")]
    for row, (label, color) in enumerate(entries, start=1):
        row_y = title_y + m.line_height * row
        shapes.append(Circle(
            cx=text_x + m.dot / 2,
            cy=row_y + m.dot / 4,
            r=m.dot / 2,
            fill=color,
        ))
        shapes.append(TextRun(
            text_x + m.dot + m.label_gap, row_y + m.dot / 2,
            m.text_font, (TextSpan(label),),
        ))
    return OverlayBox(AMENITIES_BOX, frame, shadow, tuple(shapes))


def _closest_box(pois: tuple[ClosestPOI, ...], height: int, m: LayoutMetrics) -> OverlayBox:
    x0 = m.padding
    y0 = height - m.closest_box[1] - m.padding
    frame, shadow = _panel(x0, y0, m.closest_box, m)
    text_x = x0 + m.box_padding
    title_y = y0 + m.box_padding + m.title_font

    shapes: list = [TextRun(text_x, title_y, m.title_font, (TextSpan("Closest Locations"),), style="title")]
    for row, poi in enumerate(pois[:_MAX_CLOSEST], start=1):
        shapes.append(TextRun(text_x, title_y + m.line_height * row, m.small_font, poi_line(poi)))
    return OverlayBox(CLOSEST_BOX, frame, shadow, tuple(shapes))


def build_overlay(width: int, height: int, bundle: AnnotationBundle) -> OverlayScene:
    """Lay out the address, amenities and closest-locations panels for a W×H canvas."""
    scale = compute_scale(width, height)
    m = LayoutMetrics.for_scale(scale)

    boxes = [_address_box(bundle, m), _amenities_box(bundle, width, m)]
    if bundle.closest_pois:
        boxes.append(_closest_box(bundle.closest_pois, height, m))

    return OverlayScene(width=width, height=height, scale=scale, boxes=tuple(boxes))
