"""Geographic value objects shared by the engine and the map surface."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class LatLng(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)

    model_config = {"frozen": True}


class BoundingBox(BaseModel):
    """Smallest lat/lng rectangle enclosing a set of points."""

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    model_config = {"frozen": True}

    @property
    def center(self) -> LatLng:
        return LatLng(
            lat=(self.min_lat + self.max_lat) / 2,
            lng=(self.min_lng + self.max_lng) / 2,
        )


class Viewport(BaseModel):
    """Axis-aligned rectangle and zoom level reported by the map surface.

    Consumed read-only.  Boundaries are inclusive; a rectangle with zero
    area contains nothing.

    Longitudes must already be wrapped to [-180, 180] with west <= east.
    A view straddling the antimeridian is not representable; the corpus
    covers a single metropolitan area, so the surface never reports one.
    """

    south: float = Field(..., ge=-90.0, le=90.0)
    west: float = Field(..., ge=-180.0, le=180.0)
    north: float = Field(..., ge=-90.0, le=90.0)
    east: float = Field(..., ge=-180.0, le=180.0)
    zoom: int = Field(..., ge=0, le=30)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def edges_ordered(self) -> "Viewport":
        if self.south > self.north:
            raise ValueError(f"south ({self.south}) is above north ({self.north})")
        if self.west > self.east:
            raise ValueError(f"west ({self.west}) is east of east ({self.east})")
        return self

    @property
    def center(self) -> LatLng:
        return LatLng(lat=(self.south + self.north) / 2, lng=(self.west + self.east) / 2)

    @property
    def is_degenerate(self) -> bool:
        return self.south == self.north or self.west == self.east

    def contains(self, lat: float, lng: float) -> bool:
        if self.is_degenerate:
            return False
        return self.south <= lat <= self.north and self.west <= lng <= self.east


class MapView(BaseModel):
    """Center and zoom of the map, as saved before entering a pattern."""

    center: LatLng
    zoom: int = Field(..., ge=0, le=30)

    model_config = {"frozen": True}
