"""Rasterize overlay SVG into a transparent Pillow layer."""

from __future__ import annotations

import io
import logging

import cairosvg
from PIL import Image

from mapcomposer.errors import CompositionError

logger = logging.getLogger(__name__)


def rasterize_svg(svg: str, width: int, height: int) -> Image.Image:
    """Render SVG markup to an RGBA image of exactly ``width``×``height``.

    Areas the SVG does not paint stay fully transparent.
    """
    try:
        png_bytes = cairosvg.svg2png(
            bytestring=svg.encode("utf-8"),
            output_width=width,
            output_height=height,
        )
        layer = Image.open(io.BytesIO(png_bytes)).convert("RGBA")
    except Exception as e:
        logger.warning("Failed to rasterize overlay SVG (%dx%d): %s", width, height, e)
        raise CompositionError("overlay rasterization failed", phase="rasterize") from e

    if layer.size != (width, height):
        layer = layer.resize((width, height))
    return layer
