"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mapcomposer.models.annotations import AnnotationBundle, CategoryStats, ClosestPOI


class GeocodeRequest(BaseModel):
    address: str = Field(..., min_length=1, description="Free-form address to geocode")


class NearbySearchRequest(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    radius: float = Field(..., gt=0, description="Search radius in meters")
    type: str = Field(..., description="Google place type (e.g. restaurant, park)")


class MapMarker(BaseModel):
    lat: float
    lng: float
    color: str = Field(..., description="Hex color, with or without leading #")
    label: str | None = None


class StaticMapRequest(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    zoom: float = Field(..., ge=0, le=22)
    width: int = Field(..., gt=0, le=1280)
    height: int = Field(..., gt=0, le=1280)
    markers: list[MapMarker] = Field(default_factory=list)


class CompositeMapRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    map_url: str = Field(..., alias="mapUrl", description="Base map image URL")
    address: str
    radius: float = Field(..., ge=0)
    stats: CategoryStats
    closest_pois: list[ClosestPOI] = Field(default_factory=list, alias="closestPOIs")

    def to_bundle(self) -> AnnotationBundle:
        return AnnotationBundle(
            address=self.address,
            radius=self.radius,
            stats=self.stats,
            closest_pois=tuple(self.closest_pois),
        )
