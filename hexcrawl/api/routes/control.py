"""POST /api/v1/control/{action} — map regeneration controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query

from hexcrawl.api.dependencies import get_map_manager
from hexcrawl.api.map_manager import MapManager
from hexcrawl.api.schemas import ControlResponse
from hexcrawl.core.errors import GenerationError
from hexcrawl.systems.rng import format_seed, parse_seed

router = APIRouter()


class ControlAction(str, Enum):
    generate = "generate"
    reset = "reset"


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    seed: str | None = Query(None, description="Hex seed; omitted draws a random one"),
    manager: MapManager = Depends(get_map_manager),
) -> ControlResponse:
    try:
        match action:
            case ControlAction.generate:
                try:
                    value = parse_seed(seed)
                except ValueError as exc:
                    raise HTTPException(status_code=422, detail=str(exc)) from None
                snap = manager.regenerate(value)
                message = "Map generated."

            case ControlAction.reset:
                snap = manager.reset()
                message = "Map reset to the configured seed."
    except GenerationError as exc:
        return ControlResponse(status="error", message=str(exc), generation=manager.generations)

    return ControlResponse(
        status="ok",
        message=message,
        seed=format_seed(snap.seed),
        generation=manager.generations,
    )
