"""GET /api/v1/map — full cell listing of the current map."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from hexcrawl.api.dependencies import get_map_manager
from hexcrawl.api.map_manager import MapManager
from hexcrawl.api.schemas import CellSchema, MapResponse
from hexcrawl.systems.rng import format_seed

router = APIRouter()


@router.get("/map", response_model=MapResponse)
def get_map(manager: MapManager = Depends(get_map_manager)) -> MapResponse:
    snap = manager.get_snapshot()
    if snap is None:
        raise HTTPException(status_code=503, detail="Map not generated yet.")

    cells: list[CellSchema] = []
    for view in snap.cells:
        col, row = view.pos.to_offset()
        cells.append(
            CellSchema(
                x=view.pos.x,
                y=view.pos.y,
                col=col,
                row=row,
                status=view.status.name,
                color=view.color.name if view.color is not None else None,
                texture_index=view.texture_index,
            )
        )

    return MapResponse(
        seed=format_seed(snap.seed),
        radius=snap.radius,
        width=snap.width,
        height=snap.height,
        entrance=(snap.entrance.x, snap.entrance.y),
        pillars=[(p.x, p.y) for p in snap.pillars],
        fingerprint=snap.fingerprint(),
        cells=cells,
    )
