"""Exception types raised by the observatory core and session."""

from __future__ import annotations


class ObservatoryError(Exception):
    """Base class for road-commons errors."""


class PatternTransitionError(ObservatoryError):
    """Raised when a selection or pattern command is issued from the wrong state.

    The controller state is left untouched when this is raised.
    """


class UnknownObservationError(ObservatoryError):
    """Raised when a command names an observation id absent from the filtered set."""

    def __init__(self, observation_id: str) -> None:
        self.observation_id = observation_id
        super().__init__(f"Observation '{observation_id}' is not in the filtered set")
