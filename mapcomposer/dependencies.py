"""FastAPI dependency injection."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from fastapi import Depends, Request

from mapcomposer.config import Settings
from mapcomposer.geo.google_places import GooglePlacesClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_map_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client used to download base map images."""
    async with httpx.AsyncClient(
        timeout=settings.map_fetch_timeout_seconds,
        follow_redirects=True,
    ) as client:
        yield client


async def get_places_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[GooglePlacesClient]:
    async with httpx.AsyncClient(timeout=settings.upstream_timeout_seconds) as client:
        yield GooglePlacesClient(settings.google_places_api_key, client)
