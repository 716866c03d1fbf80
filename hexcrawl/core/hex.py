"""Hex coordinates for the map grid.

Tiles are addressed in the "row" axial system: a tile position ``(x, y)`` is
the axial coordinate ``(q, r)`` itself, so no conversion is needed to walk
neighbours.  Renderers that lay tiles out in screen rows use the odd-row
offset form (``to_offset`` / ``from_offset``).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class HexPos:
    """Immutable axial tile coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: HexPos) -> HexPos:
        return HexPos(self.x + other.x, self.y + other.y)

    def __sub__(self, other: HexPos) -> HexPos:
        return HexPos(self.x - other.x, self.y - other.y)

    # -- conversions --

    def to_cube(self) -> tuple[int, int, int]:
        return (self.x, self.y, -self.x - self.y)

    def to_offset(self) -> tuple[int, int]:
        """Return ``(col, row)`` in odd-row offset layout."""
        col = self.x + (self.y - (self.y & 1)) // 2
        return (col, self.y)

    @classmethod
    def from_offset(cls, col: int, row: int) -> HexPos:
        return cls(col - (row - (row & 1)) // 2, row)

    # -- distances --

    def hex_distance(self, other: HexPos) -> int:
        dq = self.x - other.x
        dr = self.y - other.y
        return max(abs(dq), abs(dr), abs(dq + dr))

    def manhattan(self, other: HexPos) -> int:
        """Offset distance ``|dx| + |dy|`` used by the path carver."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


# Standard neighbour order; the path carver's tie-break depends on it.
HEX_OFFSETS: tuple[HexPos, ...] = (
    HexPos(1, 0),
    HexPos(0, 1),
    HexPos(-1, 1),
    HexPos(-1, 0),
    HexPos(0, -1),
    HexPos(1, -1),
)


def generate_hexagon(origin: HexPos, radius: int) -> list[HexPos]:
    """All positions within hex distance *radius* of *origin*, row by row."""
    positions: list[HexPos] = []
    for dy in range(-radius, radius + 1):
        lo = max(-radius, -radius - dy)
        hi = min(radius, radius - dy)
        for dx in range(lo, hi + 1):
            positions.append(HexPos(origin.x + dx, origin.y + dy))
    return positions
