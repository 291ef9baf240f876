"""FilterState — the active lens and time window."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, Field

from road_commons.domain.enums import ALL_LENS, ObservationType, TimeWindowKey

Lens = Union[Literal["all"], ObservationType]


class FilterState(BaseModel):
    """Immutable filter selection; replace it rather than mutate it."""

    lens: Lens = Field(default=ALL_LENS, description="'all' or a single observation type")
    window: TimeWindowKey = Field(default=TimeWindowKey.LAST_30D)

    model_config = {"frozen": True}

    @property
    def window_ms(self) -> float:
        return self.window.span_ms

    @property
    def lens_value(self) -> str:
        return self.lens.value if isinstance(self.lens, ObservationType) else self.lens

    @property
    def type_filter(self) -> ObservationType | None:
        """The type to keep, or None when every type passes."""
        return None if self.lens == ALL_LENS else ObservationType(self.lens)
