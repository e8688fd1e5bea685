"""Composite the annotation overlay onto a fetched static map image.

Fetch (async, httpx) -> measure -> layout -> rasterize -> alpha-composite at
(0, 0) -> PNG -> base64. The output always has the base image's pixel size.
"""

from __future__ import annotations

import asyncio
import base64
import io
import logging

import httpx
from PIL import Image

from mapcomposer.errors import CompositionError, FetchError
from mapcomposer.models.annotations import AnnotationBundle
from mapcomposer.overlay import build_overlay, rasterize_svg, serialize_scene

logger = logging.getLogger(__name__)

# Layout size used when the decoded image reports no usable size.
DEFAULT_CANVAS_SIZE = (1280, 960)

DEFAULT_FETCH_TIMEOUT = 15.0


async def fetch_base_image(
    url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> bytes:
    """Download the base map image. Any failure is a ``FetchError``; no retry."""
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
                resp = await own_client.get(url)
        else:
            resp = await client.get(url)
    except httpx.TimeoutException as e:
        raise FetchError("Timed out fetching map image") from e
    except httpx.HTTPError as e:
        raise FetchError(f"Failed to fetch map image: {e}") from e

    if not resp.is_success:
        raise FetchError(f"Failed to fetch map image: {resp.status_code}", status_code=resp.status_code)
    return resp.content


def measure_canvas(image: Image.Image) -> tuple[int, int]:
    """Canvas size for the overlay layout: the decoded image size.

    Falls back to ``DEFAULT_CANVAS_SIZE`` when the image reports no usable
    size. The fallback only sizes the layout; ``merge_overlay`` clips the
    overlay to the real base canvas.
    """
    try:
        width, height = image.size
    except Exception as e:
        logger.warning("Could not read map image size, using %s: %s", DEFAULT_CANVAS_SIZE, e)
        return DEFAULT_CANVAS_SIZE

    if width <= 0 or height <= 0:
        logger.warning("Map image reports size %sx%s, using %s", width, height, DEFAULT_CANVAS_SIZE)
        return DEFAULT_CANVAS_SIZE
    return width, height


def merge_overlay(base: Image.Image, overlay: Image.Image) -> Image.Image:
    """Alpha-composite ``overlay`` at the origin, clipped to the base canvas."""
    base = base.convert("RGBA")
    layer = Image.new("RGBA", base.size, (0, 0, 0, 0))
    layer.paste(overlay.crop((0, 0, *base.size)), (0, 0))
    return Image.alpha_composite(base, layer)


def encode_png_base64(image: Image.Image) -> str:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


def render_composite(data: bytes, bundle: AnnotationBundle) -> str:
    """CPU-bound half of the call: decode, lay out, rasterize, merge, encode."""
    try:
        base = Image.open(io.BytesIO(data))
        base.load()
    except Exception as e:
        raise CompositionError("map image could not be decoded", phase="decode") from e

    width, height = measure_canvas(base)

    scene = build_overlay(width, height, bundle)
    overlay = rasterize_svg(serialize_scene(scene), width, height)
    merged = merge_overlay(base, overlay)

    try:
        return encode_png_base64(merged)
    except Exception as e:
        raise CompositionError("composited image could not be encoded", phase="encode") from e


async def compose_map_image(
    map_url: str,
    bundle: AnnotationBundle,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> str:
    """Fetch ``map_url``, draw the annotation overlay on it, return base64 PNG.

    Raises ``FetchError`` when the image cannot be downloaded and
    ``CompositionError`` for every later failure.
    """
    data = await fetch_base_image(map_url, client=client, timeout=timeout)
    logger.debug("Fetched map image: %d bytes", len(data))

    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, render_composite, data, bundle)
    except CompositionError:
        raise
    except Exception as e:
        raise CompositionError(f"composition failed: {e}") from e
