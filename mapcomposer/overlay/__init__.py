"""Overlay pipeline: layout -> SVG -> transparent raster.

  1. Layout -- ``build_overlay`` turns canvas size + annotations into a typed scene
  2. Serialize -- ``serialize_scene`` writes escaped SVG markup
  3. Rasterize -- ``rasterize_svg`` renders it with CairoSVG into an RGBA layer
"""

from __future__ import annotations

from mapcomposer.overlay.layout import build_overlay, compute_scale
from mapcomposer.overlay.rasterizer import rasterize_svg
from mapcomposer.overlay.serializer import serialize_scene

__all__ = ["build_overlay", "compute_scale", "rasterize_svg", "serialize_scene"]
