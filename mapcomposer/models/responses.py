"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mapcomposer import __version__


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = __version__
    timestamp: str


class ConfigStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    google_places_configured: bool = Field(..., alias="googlePlacesConfigured")
    mapbox_configured: bool = Field(..., alias="mapboxConfigured")


class AddressSuggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    place_id: str = Field(..., alias="placeId")
    description: str


class Coordinates(BaseModel):
    lat: float
    lng: float


class Place(BaseModel):
    name: str
    lat: float
    lng: float
    vicinity: str | None = None
    rating: float | None = None
    types: list[str] = Field(default_factory=list)


class StaticMapResponse(BaseModel):
    url: str


class CompositeMapResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_base64: str = Field(..., alias="imageBase64")
