"""/api/maps: static map URLs and annotated map composites."""

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException

from mapcomposer.compositor import compose_map_image
from mapcomposer.config import Settings
from mapcomposer.dependencies import get_map_client, get_settings
from mapcomposer.errors import CompositionError, FetchError, ServiceNotConfiguredError
from mapcomposer.geo.mapbox import build_static_map_url
from mapcomposer.models.requests import CompositeMapRequest, StaticMapRequest
from mapcomposer.models.responses import CompositeMapResponse, StaticMapResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/maps", tags=["maps"])


@router.post("/static-url", response_model=StaticMapResponse)
async def static_url(
    req: StaticMapRequest,
    settings: Settings = Depends(get_settings),
) -> StaticMapResponse:
    try:
        url = build_static_map_url(req, settings.mapbox_access_token)
    except ServiceNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    return StaticMapResponse(url=url)


@router.post("/composite", response_model=CompositeMapResponse)
async def composite(
    req: CompositeMapRequest,
    client: httpx.AsyncClient = Depends(get_map_client),
    settings: Settings = Depends(get_settings),
) -> CompositeMapResponse:
    try:
        image_b64 = await compose_map_image(
            req.map_url,
            req.to_bundle(),
            client=client,
            timeout=settings.map_fetch_timeout_seconds,
        )
    except FetchError as e:
        logger.error("Map fetch error: %s", e, exc_info=True)
        raise HTTPException(status_code=502, detail="Failed to fetch map image") from e
    except CompositionError as e:
        logger.error("Image composition error (%s): %s", e.phase, e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to compose map image") from e

    return CompositeMapResponse(image_base64=image_b64)
