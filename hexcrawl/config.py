"""Map generation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass, replace

from hexcrawl.core.enums import CollapsedState
from hexcrawl.core.errors import ConfigError

ROOM_CATEGORIES = ("empty", "combat", "pit", "item")


@dataclass(frozen=True)
class GenerationConfig:
    """Immutable configuration for one generation run."""

    # World
    seed: int = 0xDEADBEEF
    map_radius: int = 5

    # Pillar placement bands
    pillar_vertical_offset: int = 1        # depth of the north/south bands
    pillar_horizontal_x_offset: int = 1    # depth of the east/west bands, spread of north/south
    pillar_horizontal_y_offset: int = 1    # spread of the east/west bands

    # Marker colours painted outside the collapse pass
    marker_state: CollapsedState = CollapsedState.RED    # entrance + pillars
    carved_state: CollapsedState = CollapsedState.GRAY   # path cells

    # Carved room draw: (category, weight)
    room_weights: tuple[tuple[str, int], ...] = (
        ("empty", 4),
        ("combat", 3),
        ("pit", 2),
        ("item", 1),
    )
    max_monsters_per_room: int = 3
    pit_damage_min: int = 2
    pit_damage_max: int = 8

    # Walk ceiling; None means 2R+1
    max_walk_steps: int | None = None

    # Diagnostics
    record_events: bool = True
    log_level: str = "INFO"

    # Saves
    save_dir: str = "saves"

    @property
    def walk_step_limit(self) -> int:
        if self.max_walk_steps is not None:
            return self.max_walk_steps
        return self.map_radius * 2 + 1

    def with_seed(self, seed: int) -> GenerationConfig:
        return replace(self, seed=seed)

    def validate(self) -> None:
        """Raise ConfigError on inconsistent parameters.

        Pillar band geometry is checked by the PillarPlacer, which owns it.
        """
        if self.map_radius < 0:
            raise ConfigError(f"map_radius must be >= 0, got {self.map_radius}")
        for name in ("pillar_vertical_offset", "pillar_horizontal_x_offset", "pillar_horizontal_y_offset"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0")
        if not self.room_weights:
            raise ConfigError("room_weights must not be empty")
        for category, weight in self.room_weights:
            if category not in ROOM_CATEGORIES:
                raise ConfigError(f"unknown room category {category!r}")
            if weight < 0:
                raise ConfigError(f"weight for {category!r} must be >= 0")
        if sum(w for _, w in self.room_weights) <= 0:
            raise ConfigError("room_weights must have a positive total")
        if self.max_monsters_per_room < 1:
            raise ConfigError("max_monsters_per_room must be >= 1")
        if self.pit_damage_min < 0 or self.pit_damage_max <= self.pit_damage_min:
            raise ConfigError("pit damage range must satisfy 0 <= min < max")
        if self.max_walk_steps is not None and self.max_walk_steps < 1:
            raise ConfigError("max_walk_steps must be >= 1")
