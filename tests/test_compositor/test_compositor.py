"""Tests for fetching, measuring and compositing the annotated map."""

from __future__ import annotations

import asyncio
import base64
import io
from types import SimpleNamespace

import httpx
import pytest
from PIL import Image

from mapcomposer.compositor import (
    DEFAULT_CANVAS_SIZE,
    compose_map_image,
    encode_png_base64,
    measure_canvas,
    merge_overlay,
)
from mapcomposer.errors import CompositionError, FetchError
from mapcomposer.overlay import build_overlay, rasterize_svg, serialize_scene
from tests.conftest import BASE_COLOR, MAP_URL, image_handler, make_bundle, make_png


def _compose(handler, bundle, url: str = MAP_URL) -> str:
    async def _run() -> str:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await compose_map_image(url, bundle, client=client, timeout=5.0)

    return asyncio.run(_run())


def _decode(image_b64: str) -> Image.Image:
    return Image.open(io.BytesIO(base64.b64decode(image_b64)))


class TestCompose:
    @pytest.mark.parametrize("size", [(640, 480), (800, 600), (1280, 1280), (2048, 1536), (300, 200)])
    def test_output_dimensions_match_base(self, bundle, size):
        result = _compose(image_handler(make_png(*size)), bundle)
        image = _decode(result)
        assert image.format == "PNG"
        assert image.size == size

    def test_overlay_drawn_and_map_untouched_elsewhere(self, bundle):
        image = _decode(_compose(image_handler(make_png(800, 600)), bundle)).convert("RGBA")
        assert image.getpixel((400, 300)) == (*BASE_COLOR, 255)
        # address panel whitens the map
        r, g, b, _ = image.getpixel((16, 45))
        assert r > 240 and g > 240

    def test_requests_given_url(self, bundle):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, content=make_png(400, 300))

        _compose(handler, bundle)
        assert seen == [MAP_URL]

    def test_jpeg_base_image(self, bundle):
        buf = io.BytesIO()
        Image.new("RGB", (720, 540), BASE_COLOR).save(buf, format="JPEG")
        image = _decode(_compose(image_handler(buf.getvalue()), bundle))
        assert image.size == (720, 540)

    def test_without_closest_pois(self):
        image = _decode(_compose(image_handler(make_png(800, 600)), make_bundle(closest_pois=())))
        # bottom-left panel area stays plain map
        assert image.convert("RGBA").getpixel((16, 560)) == (*BASE_COLOR, 255)


class TestFetchFailures:
    @pytest.mark.parametrize("status", [404, 500, 403])
    def test_non_success_status(self, bundle, status):
        with pytest.raises(FetchError) as exc_info:
            _compose(image_handler(b"nope", status_code=status), bundle)
        assert exc_info.value.phase == "fetch"
        assert exc_info.value.status_code == status

    def test_transport_error(self, bundle):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError):
            _compose(handler, bundle)

    def test_timeout(self, bundle):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(FetchError, match="Timed out") as exc_info:
            _compose(handler, bundle)
        # the caller-supplied client owns the timeout, so no number is reported
        assert "5.0" not in str(exc_info.value)

    def test_fetch_error_is_a_composition_error(self):
        assert issubclass(FetchError, CompositionError)


def test_undecodable_image_is_composition_error(bundle):
    with pytest.raises(CompositionError) as exc_info:
        _compose(image_handler(b"definitely not an image"), bundle)
    assert not isinstance(exc_info.value, FetchError)
    assert exc_info.value.phase == "decode"


class TestMeasure:
    def test_reads_decoded_size(self):
        assert measure_canvas(Image.open(io.BytesIO(make_png(1024, 512)))) == (1024, 512)

    def test_empty_size_falls_back_to_default(self):
        assert measure_canvas(SimpleNamespace(size=(0, 0))) == DEFAULT_CANVAS_SIZE == (1280, 960)

    def test_unreadable_size_falls_back_to_default(self):
        assert measure_canvas(SimpleNamespace()) == DEFAULT_CANVAS_SIZE

    def test_fallback_layout_clipped_to_base(self, bundle):
        base = Image.new("RGB", (300, 200), BASE_COLOR)
        scene = build_overlay(*DEFAULT_CANVAS_SIZE, bundle)
        overlay = rasterize_svg(serialize_scene(scene), *DEFAULT_CANVAS_SIZE)
        assert merge_overlay(base, overlay).size == (300, 200)


class TestMerge:
    def test_overlay_clipped_to_base(self):
        base = Image.new("RGB", (100, 80), BASE_COLOR)
        overlay = Image.new("RGBA", (200, 200), (255, 0, 0, 255))
        merged = merge_overlay(base, overlay)
        assert merged.size == (100, 80)
        assert merged.getpixel((99, 79)) == (255, 0, 0, 255)

    def test_transparent_overlay_keeps_base(self):
        base = Image.new("RGB", (50, 50), BASE_COLOR)
        overlay = Image.new("RGBA", (50, 50), (0, 0, 0, 0))
        assert merge_overlay(base, overlay).getpixel((25, 25)) == (*BASE_COLOR, 255)

    def test_encode_is_lossless_png(self):
        image = Image.new("RGBA", (10, 10), (1, 2, 3, 255))
        decoded = _decode(encode_png_base64(image))
        assert decoded.format == "PNG"
        assert decoded.convert("RGBA").getpixel((5, 5)) == (1, 2, 3, 255)
