"""GET /api/v1/rooms and POST /api/v1/rooms/{x}/{y}/clear."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from hexcrawl.api.dependencies import get_map_manager
from hexcrawl.api.map_manager import MapManager
from hexcrawl.api.schemas import RoomSchema, RoomsResponse
from hexcrawl.core.hex import HexPos
from hexcrawl.core.rooms import RoomInfo, room_type_to_dict

router = APIRouter()


def _room_schema(pos: HexPos, info: RoomInfo) -> RoomSchema:
    return RoomSchema(
        x=pos.x,
        y=pos.y,
        cleared=info.cleared,
        kind=info.kind,
        room_type=room_type_to_dict(info.room_type),
        rng_seed=info.rng_seed,
    )


@router.get("/rooms", response_model=RoomsResponse)
def list_rooms(
    kind: str | None = Query(None, description="Only rooms of this kind (combat, pit, ...)"),
    manager: MapManager = Depends(get_map_manager),
) -> RoomsResponse:
    snap = manager.get_snapshot()
    if snap is None:
        raise HTTPException(status_code=503, detail="Map not generated yet.")
    rooms = [
        _room_schema(pos, info)
        for pos, info in sorted(snap.rooms.items())
        if kind is None or info.kind == kind
    ]
    return RoomsResponse(count=len(rooms), rooms=rooms)


@router.post("/rooms/{x}/{y}/clear", response_model=RoomSchema)
def clear_room(x: int, y: int, manager: MapManager = Depends(get_map_manager)) -> RoomSchema:
    pos = HexPos(x, y)
    try:
        info = manager.mark_cleared(pos)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"No room at {pos}.") from None
    return _room_schema(pos, info)
