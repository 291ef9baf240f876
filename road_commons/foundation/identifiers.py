"""Deterministic ID generation for observation records."""

from __future__ import annotations

OBSERVATION_ID_PREFIX = "obs_"


def observation_id(index: int) -> str:
    """Return the canonical id for the *index*-th generated observation."""
    return f"{OBSERVATION_ID_PREFIX}{index:04d}"
