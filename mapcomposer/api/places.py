"""/api/places: address autocomplete, geocoding, nearby POI search."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from mapcomposer.dependencies import get_places_client
from mapcomposer.errors import ServiceNotConfiguredError, UpstreamError
from mapcomposer.geo.google_places import GooglePlacesClient
from mapcomposer.models.requests import GeocodeRequest, NearbySearchRequest
from mapcomposer.models.responses import AddressSuggestion, Coordinates, Place

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/places", tags=["places"])


@router.get("/autocomplete", response_model=list[AddressSuggestion])
async def autocomplete(
    input: str = Query(..., description="Partial address typed by the user"),
    places: GooglePlacesClient = Depends(get_places_client),
) -> list[AddressSuggestion]:
    return await places.autocomplete(input)


@router.post("/geocode", response_model=Coordinates)
async def geocode(
    req: GeocodeRequest,
    places: GooglePlacesClient = Depends(get_places_client),
) -> Coordinates:
    try:
        return await places.geocode(req.address)
    except ServiceNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except UpstreamError as e:
        logger.error("Geocoding error for %r: %s", req.address, e)
        raise HTTPException(status_code=502, detail=str(e)) from e


@router.post("/nearby", response_model=list[Place])
async def nearby(
    req: NearbySearchRequest,
    places: GooglePlacesClient = Depends(get_places_client),
) -> list[Place]:
    try:
        return await places.nearby_search(req.lat, req.lng, req.radius, req.type)
    except ServiceNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except UpstreamError as e:
        logger.error("Nearby search error (%s at %s,%s): %s", req.type, req.lat, req.lng, e)
        raise HTTPException(status_code=502, detail=str(e)) from e
