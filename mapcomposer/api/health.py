"""Health check + configuration status endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from mapcomposer.config import Settings
from mapcomposer.dependencies import get_settings
from mapcomposer.models.responses import ConfigStatusResponse, HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc).isoformat())


@router.get("/config/status", response_model=ConfigStatusResponse)
async def config_status(settings: Settings = Depends(get_settings)) -> ConfigStatusResponse:
    """Which upstream credentials are present. Never returns the secrets themselves."""
    return ConfigStatusResponse(
        google_places_configured=settings.google_places_configured,
        mapbox_configured=settings.mapbox_configured,
    )
