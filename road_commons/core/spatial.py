"""Distance and bounding-box primitives on a spherical Earth."""

from __future__ import annotations

import math
from typing import Iterable, Protocol

from road_commons.domain.geo import BoundingBox

EARTH_RADIUS_M = 6_371_000.0


class HasLatLng(Protocol):
    lat: float
    lng: float


def distance_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points using the Haversine formula.

    Identical points are exactly 0.  Separations below roughly 1e-150
    degrees underflow ``sin**2`` and also come out as 0; that is far below
    any coordinate precision an observation carries.
    """
    if lat1 == lat2 and lng1 == lng2:
        return 0.0
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    # Rounding can push a just past 1 for near-antipodal points.
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def bounding_box(points: Iterable[HasLatLng]) -> BoundingBox | None:
    """Smallest rectangle enclosing every point, or None for no points."""
    min_lat = max_lat = min_lng = max_lng = None
    for p in points:
        if min_lat is None:
            min_lat = max_lat = p.lat
            min_lng = max_lng = p.lng
            continue
        min_lat = min(min_lat, p.lat)
        max_lat = max(max_lat, p.lat)
        min_lng = min(min_lng, p.lng)
        max_lng = max(max_lng, p.lng)

    if min_lat is None:
        return None
    return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lng=min_lng, max_lng=max_lng)


def zone_key(lat: float, lng: float, scale: int = 100) -> tuple[int, int]:
    """Equirectangular grid cell containing a point.

    At the default scale a cell spans 0.01 degrees on each axis (about
    1.1 km at the equator).  This is a binning, not a geodesic partition.
    """
    return (math.floor(lat * scale), math.floor(lng * scale))
