"""Shared test fixtures."""

from __future__ import annotations

import io

import httpx
import pytest
from PIL import Image

from mapcomposer.config import Settings
from mapcomposer.models.annotations import AnnotationBundle, CategoryStats, ClosestPOI

BASE_COLOR = (200, 220, 240)
MAP_URL = "https://maps.example.test/static/base.png"


def make_png(width: int, height: int, color: tuple[int, int, int] = BASE_COLOR) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def image_handler(data: bytes, status_code: int = 200):
    """MockTransport handler serving ``data`` for every request."""

    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=data, headers={"content-type": "image/png"})

    return _handler


def make_bundle(**overrides) -> AnnotationBundle:
    fields = {
        "address": "1600 Amphitheatre Pkwy, Mountain View, CA",
        "radius": 1.5,
        "stats": CategoryStats(restaurants=12, grocery=3, shopping=7, parks=2),
        "closest_pois": (
            ClosestPOI(name="Blue Bottle Coffee", category="restaurant", distance=0.24),
            ClosestPOI(name="Safeway", category="grocery", distance=0.61),
        ),
    }
    fields.update(overrides)
    return AnnotationBundle(**fields)


def make_settings(**overrides) -> Settings:
    fields = {
        "google_places_api_key": "",
        "mapbox_access_token": "",
        "mapcomposer_log_level": "debug",
    }
    fields.update(overrides)
    return Settings(_env_file=None, **fields)


@pytest.fixture
def bundle() -> AnnotationBundle:
    return make_bundle()


@pytest.fixture
def base_png() -> bytes:
    return make_png(800, 600)
