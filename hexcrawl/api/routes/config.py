"""GET /api/v1/config — expose generation configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hexcrawl.api.dependencies import get_map_manager
from hexcrawl.api.map_manager import MapManager
from hexcrawl.api.schemas import GenerationConfigResponse
from hexcrawl.systems.rng import format_seed

router = APIRouter()


@router.get("/config", response_model=GenerationConfigResponse)
def get_config(
    manager: MapManager = Depends(get_map_manager),
) -> GenerationConfigResponse:
    cfg = manager.config
    return GenerationConfigResponse(
        seed=format_seed(cfg.seed),
        map_radius=cfg.map_radius,
        pillar_vertical_offset=cfg.pillar_vertical_offset,
        pillar_horizontal_x_offset=cfg.pillar_horizontal_x_offset,
        pillar_horizontal_y_offset=cfg.pillar_horizontal_y_offset,
        marker_state=cfg.marker_state.name,
        carved_state=cfg.carved_state.name,
        room_weights=dict(cfg.room_weights),
        max_monsters_per_room=cfg.max_monsters_per_room,
        pit_damage_min=cfg.pit_damage_min,
        pit_damage_max=cfg.pit_damage_max,
        walk_step_limit=cfg.walk_step_limit,
    )
