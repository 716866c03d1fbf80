"""Immutable snapshot of a generated map for API readers."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from hexcrawl.core.enums import CellStatus, CollapsedState
from hexcrawl.core.hex import HexPos
from hexcrawl.core.rooms import RoomInfo, room_type_to_dict

if TYPE_CHECKING:
    from hexcrawl.systems.generator import GeneratedMap


@dataclass(frozen=True, slots=True)
class CellView:
    pos: HexPos
    status: CellStatus
    color: CollapsedState | None
    texture_index: int


@dataclass(frozen=True, slots=True)
class MapSnapshot:
    """Read-only view of a map, safe to share across threads.

    Rooms are copied so later ``cleared`` updates on the live grid do not
    leak into a snapshot that is already being served.
    """

    seed: int
    radius: int
    width: int
    height: int
    entrance: HexPos
    pillars: tuple[HexPos, ...]
    cells: tuple[CellView, ...]
    rooms: Mapping[HexPos, RoomInfo]

    @classmethod
    def from_map(cls, generated: GeneratedMap) -> MapSnapshot:
        grid = generated.grid
        cells = tuple(
            CellView(c.pos, c.status, c.color, c.texture_index) for c in grid.cells()
        )
        rooms = {
            pos: RoomInfo(room_type=info.room_type, rng_seed=info.rng_seed, cleared=info.cleared)
            for pos, info in grid.rooms().items()
        }
        return cls(
            seed=generated.seed,
            radius=grid.radius,
            width=grid.width,
            height=grid.height,
            entrance=generated.entrance,
            pillars=generated.pillars,
            cells=cells,
            rooms=MappingProxyType(rooms),
        )

    def cell_at(self, pos: HexPos) -> CellView | None:
        for view in self.cells:
            if view.pos == pos:
                return view
        return None

    def fingerprint(self) -> str:
        """Hash colours and room assignments into a short hex digest."""
        parts: list[str] = [f"seed={self.seed}", f"radius={self.radius}"]
        for view in self.cells:
            color = view.color.name if view.color is not None else "-"
            parts.append(f"c{view.pos.x},{view.pos.y}:{view.status.name}:{color}")
        for pos in sorted(self.rooms):
            info = self.rooms[pos]
            parts.append(f"r{pos.x},{pos.y}:{room_type_to_dict(info.room_type)}|{info.rng_seed}|{info.cleared}")
        raw = "\n".join(parts)
        return hashlib.sha256(raw.encode()).hexdigest()
