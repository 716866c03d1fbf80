"""Generation trace shared between the generator and the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import Iterable

from hexcrawl.core.hex import HexPos


@dataclass(frozen=True, slots=True)
class GenerationEvent:
    """One entry of the generation trace."""

    step: int
    phase: str
    message: str
    positions: tuple[HexPos, ...] = ()  # cells touched by this event


class EventLog:
    """Events of the last published map, oldest first.

    Each successful run swaps in its full trace with ``replace`` while API
    readers copy slices, so every access takes the lock.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self) -> None:
        self._buffer: deque[GenerationEvent] = deque()
        self._lock = threading.Lock()

    def append(self, event: GenerationEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def append_many(self, events: list[GenerationEvent]) -> None:
        with self._lock:
            self._buffer.extend(events)

    def replace(self, events: Iterable[GenerationEvent]) -> None:
        """Swap the whole trace for *events* in one step."""
        with self._lock:
            self._buffer = deque(events)

    def since_step(self, step: int) -> list[GenerationEvent]:
        """Return all events with step >= *step*."""
        with self._lock:
            return [e for e in self._buffer if e.step >= step]

    def by_phase(self, phase: str) -> list[GenerationEvent]:
        with self._lock:
            return [e for e in self._buffer if e.phase == phase]

    def latest(self, count: int = 50) -> list[GenerationEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
