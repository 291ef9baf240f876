from road_commons.domain.filters import FilterState
from road_commons.domain.geo import BoundingBox, LatLng, MapView, Viewport
from road_commons.domain.observation import Media, Observation
from road_commons.domain.pattern import CityWidePattern, LocalPattern, NoPattern, SavedView

__all__ = [
    "BoundingBox",
    "CityWidePattern",
    "FilterState",
    "LatLng",
    "LocalPattern",
    "MapView",
    "Media",
    "NoPattern",
    "Observation",
    "SavedView",
    "Viewport",
]
