"""Error taxonomy shared by the compositor and the geo gateway."""

from __future__ import annotations


class MapComposerError(Exception):
    """Base class for all service errors."""


class CompositionError(MapComposerError):
    """Compositing failed. ``phase`` names the step that broke."""

    def __init__(self, message: str, phase: str = "compose") -> None:
        super().__init__(message)
        self.phase = phase


class FetchError(CompositionError):
    """Base map image could not be retrieved (bad status, transport error, timeout)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message, phase="fetch")
        self.status_code = status_code


class GeoServiceError(MapComposerError):
    """Failure talking to a geospatial upstream."""


class ServiceNotConfiguredError(GeoServiceError):
    """Required API key or token is missing."""


class UpstreamError(GeoServiceError):
    """Upstream answered, but not with something usable."""
