"""Entropy-driven collapse of the map colouring.

Greedy and non-backtracking: each step resolves the open cell with the
fewest admissible colours (uniform tie-break), then strips that colour from
its open neighbours.  Cells whose domain empties become Exhausted and are
left uncoloured; that is an accepted outcome, not a failure.

Usage:
    engine = CollapseEngine(grid, rng)
    engine.fix(grid.center, CollapsedState.RED)
    engine.run()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from hexcrawl.core.grid import Collapsed, Exhausted, Open

if TYPE_CHECKING:
    from hexcrawl.core.enums import CollapsedState
    from hexcrawl.core.grid import Cell, HexGrid
    from hexcrawl.core.hex import HexPos
    from hexcrawl.systems.rng import SeededRNG

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CollapseStep:
    """Outcome of one collapse iteration."""

    index: int
    pos: HexPos
    state: CollapsedState
    entropy: int                    # entropy of the chosen cell before collapse
    tie_count: int
    exhausted: tuple[HexPos, ...]   # neighbours emptied by propagation


class CollapseEngine:
    """Runs collapse + propagate over a HexGrid until no cell is Open."""

    __slots__ = ("_grid", "_rng", "_steps")

    def __init__(self, grid: HexGrid, rng: SeededRNG) -> None:
        self._grid = grid
        self._rng = rng
        self._steps = 0

    @property
    def steps_taken(self) -> int:
        return self._steps

    def fix(self, pos: HexPos, state: CollapsedState, role: str = "entrance") -> tuple[HexPos, ...]:
        """Set *pos* to *state* outside the domain model and propagate it."""
        self._grid.set_collapsed(pos, state, role)
        return self._propagate(pos, state)

    def step(self) -> CollapseStep | None:
        """Collapse one minimum-entropy cell; None once nothing is Open."""
        ties: list[Cell] = []
        lowest = -1
        for cell in self._grid.cells():
            if not isinstance(cell.state, Open):
                continue
            entropy = cell.state.domain.entropy()
            if not ties or entropy < lowest:
                ties = [cell]
                lowest = entropy
            elif entropy == lowest:
                ties.append(cell)

        if not ties:
            return None

        chosen = ties[self._rng.next_below(len(ties))]
        assert isinstance(chosen.state, Open)
        # an Open cell always holds at least one colour
        state = chosen.state.domain.collapse(self._rng)
        assert state is not None
        index = self._steps
        self._steps += 1

        chosen.state = Collapsed(state)
        exhausted = self._propagate(chosen.pos, state)
        logger.debug(
            "step %d: %s -> %s (entropy=%d, ties=%d, exhausted=%d)",
            index, chosen.pos, state.name, lowest, len(ties), len(exhausted),
        )
        return CollapseStep(index, chosen.pos, state, lowest, len(ties), exhausted)

    def iter_steps(self) -> Iterator[CollapseStep]:
        while True:
            result = self.step()
            if result is None:
                return
            yield result

    def run(self) -> int:
        """Collapse to the fixed point; return the number of steps taken."""
        start = self._steps
        for _ in self.iter_steps():
            pass
        return self._steps - start

    # -- propagation --

    def _propagate(self, pos: HexPos, state: CollapsedState) -> tuple[HexPos, ...]:
        exhausted: list[HexPos] = []
        for npos in self._grid.neighbors(pos):
            neighbor = self._grid.get(npos)
            if neighbor is None or not isinstance(neighbor.state, Open):
                continue
            neighbor.state.domain.remove(state)
            if neighbor.state.domain.entropy() == 0:
                neighbor.state = Exhausted()
                exhausted.append(npos)
        return tuple(exhausted)
