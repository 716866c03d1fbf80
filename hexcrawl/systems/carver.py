"""Greedy path carving from the entrance to each pillar.

Each walk steps to the neighbour with the smallest ``|dx| + |dy|`` to its
pillar (first neighbour in standard order wins ties, no randomness).  Cells
reached for the first time in the run are painted with the carved colour
and given a room from the RoomTypeAssigner.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hexcrawl.core.errors import PathCarvingError

if TYPE_CHECKING:
    from hexcrawl.config import GenerationConfig
    from hexcrawl.core.grid import HexGrid
    from hexcrawl.core.hex import HexPos
    from hexcrawl.systems.pillars import PillarLayout
    from hexcrawl.systems.rng import SeededRNG
    from hexcrawl.systems.room_assigner import RoomTypeAssigner

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Walk:
    """One entrance-to-pillar walk."""

    target: HexPos
    path: tuple[HexPos, ...]     # every visited cell after the entrance, target last
    carved: tuple[HexPos, ...]   # cells this walk claimed

    @property
    def steps(self) -> int:
        return len(self.path)


class PathCarver:
    __slots__ = ("_grid", "_rng", "_assigner", "_carved_state", "_max_steps", "_seen")

    def __init__(
        self,
        grid: HexGrid,
        rng: SeededRNG,
        assigner: RoomTypeAssigner,
        config: GenerationConfig,
    ) -> None:
        self._grid = grid
        self._rng = rng
        self._assigner = assigner
        self._carved_state = config.carved_state
        self._max_steps = config.walk_step_limit
        self._seen: set[HexPos] = set()

    @property
    def seen(self) -> frozenset[HexPos]:
        return frozenset(self._seen)

    def carve(self, layout: PillarLayout) -> list[Walk]:
        """Carve one walk per pillar, in placement order."""
        # Fixed rooms are never re-carved.
        self._seen.add(layout.entrance)
        self._seen.update(layout.pillars)
        return [self.walk(layout.entrance, target) for target in layout.pillars]

    def next_step(self, current: HexPos, target: HexPos) -> HexPos:
        best: HexPos | None = None
        best_dist = 0
        for npos in self._grid.neighbors(current):
            dist = npos.manhattan(target)
            if best is None or dist < best_dist:
                best = npos
                best_dist = dist
        if best is None:
            raise PathCarvingError(target, 0)
        return best

    def walk(self, start: HexPos, target: HexPos) -> Walk:
        grid = self._grid
        current = start
        path: list[HexPos] = []
        carved: list[HexPos] = []

        while current != target:
            if len(path) >= self._max_steps:
                raise PathCarvingError(target, self._max_steps)
            current = self.next_step(current, target)
            path.append(current)
            if current == target or current in self._seen:
                continue
            self._seen.add(current)
            grid.set_collapsed(current, self._carved_state, "carved cell")
            room = self._assigner.assign_room(self._rng)
            grid.attach_room(current, room, "carved cell")
            carved.append(current)
            logger.debug("carved %s as %s toward %s", current, room.kind, target)

        return Walk(target=target, path=tuple(path), carved=tuple(carved))
