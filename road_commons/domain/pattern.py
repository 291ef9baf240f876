"""Pattern snapshots — the tagged union behind pattern mode.

Exactly one of three variants is active at a time:

    NoPattern        the raw filtered set is displayed
    CityWidePattern  every filtered observation of the reference type
    LocalPattern     same-type observations within a radius of the reference

Each variant carries only the fields that are valid for it, so there is no
"stats is None unless mode == ..." bookkeeping downstream.  The saved view
lives on the pattern variants because it only exists while a pattern is
active.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from road_commons.domain.enums import ObservationType, PatternMode
from road_commons.domain.geo import BoundingBox, LatLng, MapView
from road_commons.domain.observation import Observation
from road_commons.domain.stats import CityWideStats, LocalStats


class SavedView(BaseModel):
    """Map state captured before entering a pattern, restored on exit."""

    view: MapView
    previous_selection: Optional[Observation] = None

    model_config = {"frozen": True}

    @property
    def center(self) -> LatLng:
        return self.view.center

    @property
    def zoom(self) -> int:
        return self.view.zoom


class NoPattern(BaseModel):
    mode: Literal[PatternMode.NONE] = PatternMode.NONE

    model_config = {"frozen": True}


class CityWidePattern(BaseModel):
    mode: Literal[PatternMode.CITY_WIDE] = PatternMode.CITY_WIDE
    reference_type: ObservationType
    matched: tuple[Observation, ...]
    stats: CityWideStats
    focus: Optional[BoundingBox] = Field(
        default=None, description="Extent of the matched set for the map to fit"
    )
    saved_view: SavedView

    model_config = {"frozen": True}


class LocalPattern(BaseModel):
    mode: Literal[PatternMode.LOCAL] = PatternMode.LOCAL
    reference_type: ObservationType
    matched: tuple[Observation, ...]
    stats: Optional[LocalStats] = Field(
        default=None, description="None when nothing of the type lies inside the radius"
    )
    center: LatLng
    radius_meters: float = Field(..., gt=0)
    saved_view: SavedView

    model_config = {"frozen": True}


ActivePattern = Union[CityWidePattern, LocalPattern]

PatternState = Annotated[
    Union[NoPattern, CityWidePattern, LocalPattern],
    Field(discriminator="mode"),
]
