"""Core data models: hex geometry, cells, constraint domains and rooms."""

from hexcrawl.core.enums import CellStatus, CollapsedState, Sector
from hexcrawl.core.hex import HEX_OFFSETS, HexPos, generate_hexagon
from hexcrawl.core.domain import ConstraintDomain
from hexcrawl.core.grid import Cell, HexGrid
from hexcrawl.core.rooms import RoomInfo
from hexcrawl.core.snapshot import MapSnapshot

__all__ = [
    "Cell",
    "CellStatus",
    "CollapsedState",
    "ConstraintDomain",
    "HEX_OFFSETS",
    "HexGrid",
    "HexPos",
    "MapSnapshot",
    "RoomInfo",
    "Sector",
    "generate_hexagon",
]
