"""REST endpoints for the observatory session.

Paths (all under /api):
    GET    /filter                current lens and window
    PUT    /filter                replace lens and window
    PUT    /viewport              report map bounds and zoom
    GET    /observations          filtered set
    GET    /visible               filtered set inside the viewport
    GET    /stats                 aggregate metrics over the visible set
    GET    /markers               marker descriptors for the rendering sink
    GET    /clusters/{count}      size tier for a cluster of *count* points
    POST   /selection/{id}        select a reference observation
    DELETE /selection             clear the selection
    GET    /pattern               active pattern snapshot
    POST   /pattern/city-wide     enter city-wide pattern mode
    POST   /pattern/local         enter local pattern mode
    DELETE /pattern               leave pattern mode (idempotent)

Every handler is ``async def`` so session mutation stays on the event
loop thread.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from road_commons.domain.filters import FilterState
from road_commons.domain.geo import Viewport
from road_commons.errors import PatternTransitionError, UnknownObservationError
from road_commons.explain.content import (
    outcome_details,
    relative_time,
    status_explanation,
    time_of_day_bucket,
    type_label,
)
from road_commons.explain.formatter import PatternFormatter
from road_commons.render.markers import zoom_scale_label
from road_commons.services.observatory import ObservatorySession

logger = logging.getLogger(__name__)


def create_observatory_router(session: ObservatorySession) -> APIRouter:
    """Factory that wires the observatory endpoints to a session."""

    router = APIRouter(prefix="/api", tags=["observatory"])

    # ── Filter & viewport ────────────────────────────────────────────

    @router.get("/filter")
    async def get_filter() -> dict[str, Any]:
        return session.filter_state.model_dump(mode="json")

    @router.put("/filter")
    async def put_filter(state: FilterState) -> dict[str, Any]:
        filtered = session.set_filter(state)
        selected = session.selected
        return {
            "filter": state.model_dump(mode="json"),
            "window_label": state.window.label,
            "count": len(filtered),
            "selected_id": selected.id if selected else None,
        }

    @router.put("/viewport")
    async def put_viewport(viewport: Viewport) -> dict[str, Any]:
        shown = session.set_viewport(viewport)
        return {
            "visible_count": len(shown),
            "changed": session.visible_changed,
            "scale": zoom_scale_label(viewport.zoom),
        }

    # ── Derived views ────────────────────────────────────────────────

    @router.get("/observations")
    async def list_observations() -> dict[str, Any]:
        filtered = session.filtered()
        return {
            "observations": [obs.model_dump(mode="json") for obs in filtered],
            "count": len(filtered),
        }

    @router.get("/visible")
    async def list_visible() -> dict[str, Any]:
        shown = session.visible()
        return {
            "observations": [obs.model_dump(mode="json") for obs in shown],
            "count": len(shown),
            "viewport_filtered": len(shown) != len(session.filtered()),
        }

    @router.get("/stats")
    async def get_stats() -> dict[str, Any]:
        stats = session.stats()
        return {
            **stats.model_dump(mode="json"),
            "summary": PatternFormatter.format_stats(stats),
        }

    @router.get("/markers")
    async def get_markers() -> dict[str, Any]:
        return {
            "markers": [m.model_dump(mode="json") for m in session.markers()],
            "zoom": session.view.zoom,
        }

    @router.get("/clusters/{count}")
    async def get_cluster_size(count: int) -> dict[str, Any]:
        if count < 0:
            raise HTTPException(status_code=422, detail="count must be non-negative")
        return session.cluster_size(count).model_dump(mode="json")

    # ── Selection ────────────────────────────────────────────────────

    @router.post("/selection/{observation_id}")
    async def select(observation_id: str) -> dict[str, Any]:
        try:
            obs = session.select_observation(observation_id)
        except UnknownObservationError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except PatternTransitionError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {
            "observation": obs.model_dump(mode="json"),
            "label": type_label(obs.type),
            "status_note": status_explanation(obs.status),
            "reported": relative_time(obs.timestamp, session.now()),
            "time_of_day": time_of_day_bucket(obs.timestamp),
            "outcome": outcome_details(obs.status),
        }

    @router.delete("/selection")
    async def clear_selection() -> dict[str, Any]:
        session.clear_selection()
        return {"selected_id": None}

    # ── Pattern mode ─────────────────────────────────────────────────

    @router.get("/pattern")
    async def get_pattern() -> dict[str, Any]:
        return _pattern_payload(session)

    @router.post("/pattern/city-wide")
    async def enter_city_wide() -> dict[str, Any]:
        try:
            session.enter_city_wide_pattern()
        except PatternTransitionError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _pattern_payload(session)

    @router.post("/pattern/local")
    async def enter_local() -> dict[str, Any]:
        try:
            session.enter_local_pattern()
        except PatternTransitionError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _pattern_payload(session)

    @router.delete("/pattern")
    async def clear_pattern() -> dict[str, Any]:
        saved = session.clear_pattern()
        selected = session.selected
        return {
            "mode": session.pattern.mode.value,
            "restored_view": saved.view.model_dump(mode="json") if saved else None,
            "selected_id": selected.id if selected else None,
        }

    return router


def _pattern_payload(session: ObservatorySession) -> dict[str, Any]:
    pattern = session.pattern
    return {
        "mode": pattern.mode.value,
        "pattern": pattern.model_dump(mode="json"),
        "summary": PatternFormatter.format_plain(pattern),
    }
