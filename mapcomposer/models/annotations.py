"""Annotation bundle: what the overlay says about a listing."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CategoryStats(BaseModel):
    """Amenity counts inside the search radius."""

    model_config = ConfigDict(frozen=True)

    restaurants: int = Field(0, ge=0)
    grocery: int = Field(0, ge=0)
    shopping: int = Field(0, ge=0)
    parks: int = Field(0, ge=0)


class ClosestPOI(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: str
    distance: float = Field(..., ge=0, description="Distance in miles")


class AnnotationBundle(BaseModel):
    """Immutable input to the overlay layout engine.

    ``closest_pois`` keeps the caller's order; the engine never re-sorts it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    address: str
    radius: float = Field(..., ge=0, description="Search radius in miles")
    stats: CategoryStats = Field(default_factory=CategoryStats)
    closest_pois: tuple[ClosestPOI, ...] = Field(default=(), alias="closestPOIs")
