"""GET /api/v1/events — generation events of the current map."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from hexcrawl.api.dependencies import get_map_manager
from hexcrawl.api.map_manager import MapManager
from hexcrawl.api.schemas import EventSchema, EventsResponse

router = APIRouter()


@router.get("/events", response_model=EventsResponse)
def get_events(
    since: int = Query(0, ge=0, description="First event step to return"),
    phase: str | None = Query(None, description="collapse, exhausted, pillar, carve or done"),
    manager: MapManager = Depends(get_map_manager),
) -> EventsResponse:
    log = manager.event_log
    events = log.since_step(since)
    if phase is not None:
        events = [e for e in events if e.phase == phase]
    return EventsResponse(
        total=len(log),
        events=[
            EventSchema(
                step=e.step,
                phase=e.phase,
                message=e.message,
                positions=[(p.x, p.y) for p in e.positions],
            )
            for e in events
        ],
    )
