"""Entrance and pillar placement.

Four pillars are sampled, one per directional band around the map centre.
With centre-relative offsets ``(dx, dy)``, radius R and offsets v, hx, hy:

    NORTH  dx in [-hx, 0]        dy in [R - v, R]
    EAST   dx in [R - hx, R]     dy in [-hy, 0]
    SOUTH  dx in [0, hx]         dy in [-R, -R + v]
    WEST   dx in [-R, -R + hx]   dy in [0, hy]

Bands are checked once up front: every band cell must lie in the hexagon,
bands must be pairwise disjoint and none may contain the entrance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hexcrawl.core.enums import Sector
from hexcrawl.core.errors import ConfigError
from hexcrawl.core.hex import HexPos
from hexcrawl.core.rooms import ENTRANCE_ROOM_SEED, Entrance, Pillar, RoomInfo

if TYPE_CHECKING:
    from hexcrawl.config import GenerationConfig
    from hexcrawl.core.grid import HexGrid
    from hexcrawl.systems.rng import SeededRNG

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Band:
    """Inclusive centre-relative sampling ranges for one sector."""

    sector: Sector
    dx: tuple[int, int]
    dy: tuple[int, int]

    def offsets(self) -> list[HexPos]:
        return [
            HexPos(x, y)
            for y in range(self.dy[0], self.dy[1] + 1)
            for x in range(self.dx[0], self.dx[1] + 1)
        ]


@dataclass(frozen=True, slots=True)
class PillarLayout:
    entrance: HexPos
    pillars: tuple[HexPos, ...]      # in Sector order


def pillar_bands(radius: int, vertical: int, horizontal_x: int, horizontal_y: int) -> tuple[Band, ...]:
    r, v, hx, hy = radius, vertical, horizontal_x, horizontal_y
    return (
        Band(Sector.NORTH, (-hx, 0), (r - v, r)),
        Band(Sector.EAST, (r - hx, r), (-hy, 0)),
        Band(Sector.SOUTH, (0, hx), (-r, -r + v)),
        Band(Sector.WEST, (-r, -r + hx), (0, hy)),
    )


def validate_bands(radius: int, bands: tuple[Band, ...]) -> None:
    origin = HexPos(0, 0)
    claimed: dict[HexPos, Sector] = {}
    for band in bands:
        if band.dx[0] > band.dx[1] or band.dy[0] > band.dy[1]:
            raise ConfigError(f"{band.sector.name} pillar band is empty")
        for off in band.offsets():
            if off.hex_distance(origin) > radius:
                raise ConfigError(f"{band.sector.name} pillar band leaves the map at offset {off}")
            if off == origin:
                raise ConfigError(f"{band.sector.name} pillar band contains the entrance")
            other = claimed.get(off)
            if other is not None:
                raise ConfigError(
                    f"{band.sector.name} and {other.name} pillar bands overlap at offset {off}"
                )
            claimed[off] = band.sector


class PillarPlacer:
    """Fixes the entrance and four pillar cells, bypassing the collapse pass."""

    __slots__ = ("_config", "_bands")

    def __init__(self, config: GenerationConfig) -> None:
        self._config = config
        self._bands = pillar_bands(
            config.map_radius,
            config.pillar_vertical_offset,
            config.pillar_horizontal_x_offset,
            config.pillar_horizontal_y_offset,
        )
        validate_bands(config.map_radius, self._bands)

    @property
    def bands(self) -> tuple[Band, ...]:
        return self._bands

    def place(self, grid: HexGrid, rng: SeededRNG) -> PillarLayout:
        """Paint the entrance and pillars and attach their rooms.

        Each pillar consumes three draws: x, y, then its room seed.
        """
        marker = self._config.marker_state
        entrance = grid.center
        grid.set_collapsed(entrance, marker, "entrance")
        grid.attach_room(entrance, RoomInfo.from_type(Entrance(), ENTRANCE_ROOM_SEED), "entrance")

        pillars: list[HexPos] = []
        for band in self._bands:
            x = entrance.x + rng.next_int(*band.dx)
            y = entrance.y + rng.next_int(*band.dy)
            pos = HexPos(x, y)
            role = f"{band.sector.name.lower()} pillar"
            grid.set_collapsed(pos, marker, role)
            grid.attach_room(pos, RoomInfo.from_type(Pillar(), rng.next_u64()), role)
            pillars.append(pos)
            logger.debug("%s placed at %s", role, pos)

        return PillarLayout(entrance=entrance, pillars=tuple(pillars))
