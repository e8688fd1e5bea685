"""Google Places / Geocoding API client.

Upstream JSON is parsed into pydantic models here so nothing past this module
handles raw response dicts.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from mapcomposer.errors import ServiceNotConfiguredError, UpstreamError
from mapcomposer.models.responses import AddressSuggestion, Coordinates, Place

logger = logging.getLogger(__name__)

AUTOCOMPLETE_URL = "https://maps.googleapis.com/maps/api/place/autocomplete/json"
GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
NEARBY_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"

# Autocomplete is not worth a billed request below this many characters.
MIN_AUTOCOMPLETE_CHARS = 3


# ── Upstream response shapes ──


class _Location(BaseModel):
    lat: float
    lng: float


class _Geometry(BaseModel):
    location: _Location


class _Prediction(BaseModel):
    place_id: str
    description: str


class _AutocompleteResponse(BaseModel):
    status: str = "OK"
    predictions: list[_Prediction] = Field(default_factory=list)


class _GeocodeResult(BaseModel):
    geometry: _Geometry


class _GeocodeResponse(BaseModel):
    status: str
    results: list[_GeocodeResult] = Field(default_factory=list)


class _NearbyResult(BaseModel):
    name: str
    geometry: _Geometry
    vicinity: str | None = None
    rating: float | None = None
    types: list[str] = Field(default_factory=list)


class _NearbyResponse(BaseModel):
    status: str = "OK"
    results: list[_NearbyResult] = Field(default_factory=list)


class GooglePlacesClient:
    """Thin async wrapper over the three Google endpoints the app proxies."""

    def __init__(self, api_key: str, client: httpx.AsyncClient) -> None:
        self._api_key = api_key
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _require_key(self) -> None:
        if not self._api_key:
            raise ServiceNotConfiguredError("Google Places API key not configured")

    async def _get(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = await self._client.get(url, params={**params, "key": self._api_key})
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(f"Google API returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Google API request failed: {e}") from e
        except ValueError as e:
            raise UpstreamError("Google API returned invalid JSON") from e

    async def autocomplete(self, text: str) -> list[AddressSuggestion]:
        """Address suggestions; empty on missing key, short input, or upstream failure."""
        if not self.configured or len(text) < MIN_AUTOCOMPLETE_CHARS:
            return []

        try:
            payload = await self._get(AUTOCOMPLETE_URL, {"input": text, "types": "address"})
            parsed = _AutocompleteResponse.model_validate(payload)
        except (UpstreamError, ValidationError) as e:
            logger.error("Autocomplete error: %s", e)
            return []

        return [
            AddressSuggestion(place_id=p.place_id, description=p.description)
            for p in parsed.predictions
        ]

    async def geocode(self, address: str) -> Coordinates:
        self._require_key()
        payload = await self._get(GEOCODE_URL, {"address": address})
        try:
            parsed = _GeocodeResponse.model_validate(payload)
        except ValidationError as e:
            raise UpstreamError("Unexpected geocoding response") from e

        if parsed.status != "OK" or not parsed.results:
            raise UpstreamError(f"Geocoding failed: {parsed.status}")

        location = parsed.results[0].geometry.location
        return Coordinates(lat=location.lat, lng=location.lng)

    async def nearby_search(self, lat: float, lng: float, radius: float, place_type: str) -> list[Place]:
        self._require_key()
        payload = await self._get(NEARBY_SEARCH_URL, {
            "location": f"{lat},{lng}",
            "radius": radius,
            "type": place_type,
        })
        try:
            parsed = _NearbyResponse.model_validate(payload)
        except ValidationError as e:
            raise UpstreamError("Unexpected nearby search response") from e

        return [
            Place(
                name=r.name,
                lat=r.geometry.location.lat,
                lng=r.geometry.location.lng,
                vicinity=r.vicinity,
                rating=r.rating,
                types=r.types,
            )
            for r in parsed.results
        ]
