"""Map generation pipeline.

Phases run in a fixed order on one thread, sharing one grid and one RNG
stream:

    1. build the hexagon grid (every cell Open)
    2. fix the entrance colour and collapse to the fixed point
    3. place the entrance room and four pillars
    4. carve a walk from the entrance to every pillar

Nothing is published until the last phase succeeds; a GenerationError
aborts the run and the half-built grid is dropped with it.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from hexcrawl.config import GenerationConfig
from hexcrawl.core.enums import CellStatus
from hexcrawl.core.grid import HexGrid
from hexcrawl.core.hex import HexPos
from hexcrawl.core.rooms import RoomInfo
from hexcrawl.systems.carver import PathCarver, Walk
from hexcrawl.systems.collapse import CollapseEngine
from hexcrawl.systems.pillars import PillarPlacer
from hexcrawl.systems.rng import SeededRNG
from hexcrawl.systems.room_assigner import RoomTypeAssigner
from hexcrawl.utils.event_log import EventLog, GenerationEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedMap:
    """Result of one successful generation run."""

    config: GenerationConfig
    grid: HexGrid
    entrance: HexPos
    pillars: tuple[HexPos, ...]
    walks: tuple[Walk, ...]
    collapse_steps: int
    rng_draws: int
    runtime_ms: float = 0.0
    events: tuple[GenerationEvent, ...] = field(default=(), repr=False)

    @property
    def seed(self) -> int:
        return self.config.seed

    @property
    def radius(self) -> int:
        return self.grid.radius

    def room_at(self, pos: HexPos) -> RoomInfo | None:
        cell = self.grid.get(pos)
        return cell.room if cell is not None else None

    def rooms(self) -> dict[HexPos, RoomInfo]:
        return self.grid.rooms()

    def carved_positions(self) -> list[HexPos]:
        return [pos for w in self.walks for pos in w.carved]

    def exhausted_positions(self) -> list[HexPos]:
        return [c.pos for c in self.grid.cells() if c.status == CellStatus.EXHAUSTED]


class MapGenerator:
    """Builds maps from a GenerationConfig.

    Each ``generate`` call owns a fresh grid and RNG; the generator itself
    keeps no state between runs apart from the optional shared event log.
    """

    __slots__ = ("_config", "_placer", "_assigner", "_event_log")

    def __init__(self, config: GenerationConfig | None = None, event_log: EventLog | None = None) -> None:
        if config is None:
            config = GenerationConfig()
        config.validate()
        self._config = config
        self._placer = PillarPlacer(config)
        self._assigner = RoomTypeAssigner(config)
        self._event_log = event_log

    @property
    def config(self) -> GenerationConfig:
        return self._config

    def generate(self, seed: int | None = None) -> GeneratedMap:
        config = self._config if seed is None else self._config.with_seed(seed)
        started = time.perf_counter()
        events: list[GenerationEvent] = []
        record = config.record_events

        def emit(phase: str, message: str, positions: tuple[HexPos, ...] = ()) -> None:
            if record:
                events.append(GenerationEvent(len(events), phase, message, positions))

        rng = SeededRNG(config.seed)
        grid = HexGrid.create(config.map_radius)
        logger.debug("grid built: radius=%d cells=%d", grid.radius, len(grid))

        # --- Phase 2: collapse ---
        engine = CollapseEngine(grid, rng)
        exhausted = engine.fix(grid.center, config.marker_state)
        if exhausted:
            emit("exhausted", f"{len(exhausted)} cell(s) exhausted by entrance", exhausted)
        for step in engine.iter_steps():
            emit("collapse", f"{step.pos} -> {step.state.name} (entropy {step.entropy}, {step.tie_count} tied)", (step.pos,))
            if step.exhausted:
                emit("exhausted", f"{len(step.exhausted)} cell(s) exhausted", step.exhausted)
        logger.debug("collapse finished after %d steps", engine.steps_taken)

        # --- Phase 3: entrance + pillars ---
        layout = self._placer.place(grid, rng)
        for sector_pos in layout.pillars:
            emit("pillar", f"pillar at {sector_pos}", (sector_pos,))

        # --- Phase 4: carving ---
        carver = PathCarver(grid, rng, self._assigner, config)
        walks = carver.carve(layout)
        for walk in walks:
            emit("carve", f"walk to {walk.target}: {walk.steps} steps, {len(walk.carved)} carved", walk.carved)

        runtime_ms = (time.perf_counter() - started) * 1000
        exhausted_count = sum(1 for c in grid.cells() if c.status == CellStatus.EXHAUSTED)
        carved_count = sum(len(w.carved) for w in walks)
        emit("done", f"map ready: {len(grid)} cells, {exhausted_count} exhausted, {carved_count} carved")

        result = GeneratedMap(
            config=config,
            grid=grid,
            entrance=layout.entrance,
            pillars=layout.pillars,
            walks=tuple(walks),
            collapse_steps=engine.steps_taken,
            rng_draws=rng.draws,
            runtime_ms=runtime_ms,
            events=tuple(events),
        )
        if self._event_log is not None:
            self._event_log.replace(events)

        logger.info(
            "Generated map seed=%#x radius=%d: %d collapsed, %d exhausted, %d carved (%.1f ms)",
            config.seed, grid.radius, engine.steps_taken, exhausted_count, carved_count, runtime_ms,
        )
        return result


def generate_map(config: GenerationConfig | None = None, seed: int | None = None) -> GeneratedMap:
    """One-shot convenience wrapper around MapGenerator."""
    return MapGenerator(config).generate(seed)
