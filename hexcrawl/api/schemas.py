"""Pydantic response models for the REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# --- Map ---

class CellSchema(BaseModel):
    x: int
    y: int
    col: int = Field(description="Odd-row offset column for renderers")
    row: int = Field(description="Odd-row offset row for renderers")
    status: str = Field(description="OPEN, COLLAPSED or EXHAUSTED")
    color: str | None = None
    texture_index: int = Field(description="Atlas slot 0-5, or the outline slot when uncoloured")


class MapResponse(BaseModel):
    seed: str
    radius: int
    width: int
    height: int
    entrance: tuple[int, int]
    pillars: list[tuple[int, int]]
    fingerprint: str
    cells: list[CellSchema]


# --- Rooms ---

class RoomSchema(BaseModel):
    x: int
    y: int
    cleared: bool
    kind: str
    room_type: dict[str, Any]
    rng_seed: int


class RoomsResponse(BaseModel):
    count: int
    rooms: list[RoomSchema]


# --- Events ---

class EventSchema(BaseModel):
    step: int
    phase: str
    message: str
    positions: list[tuple[int, int]] = Field(default_factory=list)


class EventsResponse(BaseModel):
    total: int
    events: list[EventSchema]


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    seed: str = ""
    generation: int = 0


# --- Config ---

class GenerationConfigResponse(BaseModel):
    seed: str
    map_radius: int
    pillar_vertical_offset: int
    pillar_horizontal_x_offset: int
    pillar_horizontal_y_offset: int
    marker_state: str
    carved_state: str
    room_weights: dict[str, int]
    max_monsters_per_room: int
    pit_damage_min: int
    pit_damage_max: int
    walk_step_limit: int
