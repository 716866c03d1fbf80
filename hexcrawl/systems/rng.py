"""Seeded deterministic RNG stream using xxhash.

The Golden Rule: the whole map depends ONLY on the seed.  Every random
decision in a generation run is taken from one stream, in pipeline order.

Formula: Draw_N = Hash(Seed, N)
"""

from __future__ import annotations

import logging
import secrets
import struct
from typing import Sequence, TypeVar

import xxhash

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_UINT64 = (1 << 64) - 1

# Fallback used when the OS refuses to hand out randomness.
FALLBACK_SEED = 0x5EED_F0E_FEEE


class SeededRNG:
    """Counter-mode pseudo-random stream.

    Draw N is a pure function of (seed, N), so two streams built from the
    same seed yield identical sequences.  Not thread-safe: a stream is owned
    by exactly one generation run.
    """

    __slots__ = ("_seed", "_counter")

    def __init__(self, seed: int) -> None:
        self._seed = seed & MAX_UINT64
        self._counter = 0

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def draws(self) -> int:
        """Number of values consumed so far."""
        return self._counter

    def next_u64(self) -> int:
        payload = struct.pack("<QQ", self._seed, self._counter)
        self._counter += 1
        return xxhash.xxh64(payload).intdigest()

    def next_float(self) -> float:
        """Return a float in [0.0, 1.0)."""
        return self.next_u64() / (MAX_UINT64 + 1)

    def next_below(self, n: int) -> int:
        """Return an integer in [0, n)."""
        if n <= 0:
            raise ValueError(f"next_below needs a positive bound, got {n}")
        return (self.next_u64() * n) >> 64

    def next_int(self, low: int, high: int) -> int:
        """Return an integer in [low, high] inclusive."""
        if high < low:
            raise ValueError(f"empty range [{low}, {high}]")
        return low + self.next_below(high - low + 1)

    def choice(self, items: Sequence[T]) -> T:
        return items[self.next_below(len(items))]


def derive(value: int, salt: int) -> int:
    """Hash *value* with *salt* without touching any stream."""
    return xxhash.xxh64(struct.pack("<QQ", value & MAX_UINT64, salt & MAX_UINT64)).intdigest()


def parse_seed(text: str | None) -> int:
    """Turn user seed text into a 64-bit seed.

    Seeds are hexadecimal (``DEADBEEF``, ``0xdead_beef``).  Missing or blank
    text draws a fresh seed from the OS.
    """
    if text is None or not text.strip():
        try:
            return secrets.randbits(64)
        except NotImplementedError:
            logger.warning("No OS randomness available, using fixed seed %#x", FALLBACK_SEED)
            return FALLBACK_SEED
    cleaned = text.strip().replace("_", "")
    if cleaned.lower().startswith("0x"):
        cleaned = cleaned[2:]
    try:
        value = int(cleaned, 16)
    except ValueError:
        raise ValueError(f"seed must be hexadecimal, got {text!r}") from None
    if value < 0 or value > MAX_UINT64:
        raise ValueError(f"seed {text!r} does not fit in 64 bits")
    return value


def format_seed(seed: int) -> str:
    """Render a seed the way ``parse_seed`` reads it back."""
    return f"{seed & MAX_UINT64:#x}"
