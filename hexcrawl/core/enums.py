"""Enumerations used throughout the generator."""

from __future__ import annotations

from enum import IntEnum, unique

# Atlas slot drawn for cells without a colour (open or exhausted).
OUTLINE_TEXTURE_INDEX = 14


@unique
class CollapsedState(IntEnum):
    """The six concrete colours a map cell can collapse to.

    The enum value doubles as the texture index in the tile atlas.
    """

    GRAY = 0
    RED = 1
    YELLOW = 2
    GREEN = 3
    LIGHT_BLUE = 4
    DARK_BLUE = 5

    @property
    def texture_index(self) -> int:
        return int(self)


@unique
class CellStatus(IntEnum):
    """Lifecycle of a cell during the collapse pass."""

    OPEN = 0
    COLLAPSED = 1
    EXHAUSTED = 2


@unique
class Sector(IntEnum):
    """Directional bands pillars are sampled from, in placement order."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3
