"""MapManager — singleton wrapper owning the current generated map.

Generation runs to completion on the calling thread and the finished map
is swapped in atomically; readers only ever see complete maps.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from hexcrawl.core.snapshot import MapSnapshot
from hexcrawl.systems.generator import GeneratedMap, MapGenerator
from hexcrawl.utils.event_log import EventLog

if TYPE_CHECKING:
    from hexcrawl.config import GenerationConfig
    from hexcrawl.core.hex import HexPos
    from hexcrawl.core.rooms import RoomInfo

logger = logging.getLogger(__name__)


class MapManager:
    """Thread-safe access to the latest map and its snapshot."""

    def __init__(self, config: GenerationConfig) -> None:
        self._config = config
        self._event_log = EventLog()
        self._generator = MapGenerator(config)

        self._lock = threading.Lock()
        self._generate_lock = threading.Lock()
        self._map: GeneratedMap | None = None
        self._snapshot: MapSnapshot | None = None
        self._generations: int = 0

        self.regenerate(config.seed)

    # -- public properties --

    @property
    def config(self) -> GenerationConfig:
        return self._config

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def generations(self) -> int:
        return self._generations

    # -- access --

    def get_map(self) -> GeneratedMap | None:
        with self._lock:
            return self._map

    def get_snapshot(self) -> MapSnapshot | None:
        with self._lock:
            return self._snapshot

    # -- lifecycle --

    def regenerate(self, seed: int | None = None) -> MapSnapshot:
        """Build a new map (current seed when *seed* is None) and publish it.

        Runs one at a time. The map and its events are swapped in under the
        same lock.
        """
        with self._generate_lock:
            if seed is None:
                current = self.get_map()
                seed = current.seed if current is not None else self._config.seed
            generated = self._generator.generate(seed)
            snapshot = MapSnapshot.from_map(generated)
            with self._lock:
                self._map = generated
                self._snapshot = snapshot
                self._event_log.replace(generated.events)
                self._generations += 1
                count = self._generations
        logger.info("MapManager published map #%d (seed=%#x)", count, seed)
        return snapshot

    def reset(self) -> MapSnapshot:
        """Regenerate from the configured seed."""
        return self.regenerate(self._config.seed)

    def mark_cleared(self, pos: HexPos) -> RoomInfo:
        """Flag the room at *pos* as cleared; KeyError if there is none."""
        with self._lock:
            if self._map is None:
                raise KeyError(pos)
            room = self._map.room_at(pos)
            if room is None:
                raise KeyError(pos)
            room.mark_cleared()
            self._snapshot = MapSnapshot.from_map(self._map)
            return room
