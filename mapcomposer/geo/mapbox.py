"""Mapbox Static Images URL builder."""

from __future__ import annotations

from urllib.parse import urlencode

from mapcomposer.errors import ServiceNotConfiguredError
from mapcomposer.models.requests import MapMarker, StaticMapRequest

STATIC_BASE_URL = "https://api.mapbox.com/styles/v1/mapbox/streets-v12/static"

# Mapbox rejects overlays with more markers than this.
MAX_MARKERS = 100

# The listing itself gets the large pin.
_HOME_LABEL = "home"


def marker_overlay(marker: MapMarker) -> str:
    """``pin-{size}[-{label}]+{color}({lng},{lat})``."""
    size = "l" if marker.label == _HOME_LABEL else "m"
    label = f"-{marker.label}" if marker.label else ""
    color = marker.color.lstrip("#")
    return f"pin-{size}{label}+{color}({marker.lng},{marker.lat})"


def build_static_map_url(req: StaticMapRequest, access_token: str) -> str:
    if not access_token:
        raise ServiceNotConfiguredError("Mapbox access token not configured")

    overlays = ",".join(marker_overlay(m) for m in req.markers[:MAX_MARKERS])
    position = f"{req.lng},{req.lat},{req.zoom:g}"
    size = f"{req.width}x{req.height}@2x"

    parts = [STATIC_BASE_URL]
    if overlays:
        parts.append(overlays)
    parts.extend([position, size])
    return "/".join(parts) + "?" + urlencode({"access_token": access_token})
