"""Hexagon-shaped map grid backed by a flat cell arena."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

from hexcrawl.core.domain import ConstraintDomain
from hexcrawl.core.enums import OUTLINE_TEXTURE_INDEX, CellStatus, CollapsedState
from hexcrawl.core.errors import MissingCellError
from hexcrawl.core.hex import HEX_OFFSETS, HexPos, generate_hexagon
from hexcrawl.core.rooms import RoomInfo


# ---------------------------------------------------------------------------
# Cell states (tagged union)
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Open:
    """Still carries a constraint domain."""

    domain: ConstraintDomain = field(default_factory=ConstraintDomain)

    status = CellStatus.OPEN


@dataclass(frozen=True, slots=True)
class Collapsed:
    """Resolved to a concrete colour."""

    state: CollapsedState

    status = CellStatus.COLLAPSED

    @property
    def texture_index(self) -> int:
        return self.state.texture_index


@dataclass(frozen=True, slots=True)
class Exhausted:
    """Domain ran out of colours before the cell could be collapsed."""

    status = CellStatus.EXHAUSTED


CellState = Union[Open, Collapsed, Exhausted]


@dataclass(slots=True)
class Cell:
    pos: HexPos
    state: CellState = field(default_factory=Open)
    room: RoomInfo | None = None

    @property
    def status(self) -> CellStatus:
        return self.state.status

    @property
    def color(self) -> CollapsedState | None:
        if isinstance(self.state, Collapsed):
            return self.state.state
        return None

    @property
    def texture_index(self) -> int:
        if isinstance(self.state, Collapsed):
            return self.state.texture_index
        return OUTLINE_TEXTURE_INDEX


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------

class HexGrid:
    """Cells of a radius-R hexagon inside a ``(2R+1) x (2R+1)`` box.

    Cells live in a flat list indexed by the packed key ``y * width + x``;
    slots outside the hexagon stay ``None`` and are never created.
    """

    __slots__ = ("radius", "width", "height", "center", "_cells")

    def __init__(self, radius: int) -> None:
        if radius < 0:
            raise ValueError(f"map radius must be >= 0, got {radius}")
        self.radius = radius
        self.width = radius * 2 + 1
        self.height = radius * 2 + 1
        self.center = HexPos(radius, radius)
        self._cells: list[Cell | None] = [None] * (self.width * self.height)
        for pos in generate_hexagon(self.center, radius):
            self._cells[self.key(pos)] = Cell(pos)

    @classmethod
    def create(cls, radius: int) -> HexGrid:
        return cls(radius)

    # -- addressing --

    def key(self, pos: HexPos) -> int:
        return pos.y * self.width + pos.x

    def in_bounds(self, pos: HexPos) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def contains(self, pos: HexPos) -> bool:
        return self.in_bounds(pos) and self._cells[self.key(pos)] is not None

    def __contains__(self, pos: object) -> bool:
        return isinstance(pos, HexPos) and self.contains(pos)

    def get(self, pos: HexPos) -> Cell | None:
        if not self.in_bounds(pos):
            return None
        return self._cells[self.key(pos)]

    def require(self, pos: HexPos, role: str = "cell") -> Cell:
        cell = self.get(pos)
        if cell is None:
            raise MissingCellError(pos, role)
        return cell

    def neighbors(self, pos: HexPos) -> list[HexPos]:
        """Up to six grid-member neighbours in standard order."""
        result: list[HexPos] = []
        for off in HEX_OFFSETS:
            n = pos + off
            if self.contains(n):
                result.append(n)
        return result

    # -- iteration --

    def __len__(self) -> int:
        return sum(1 for c in self._cells if c is not None)

    def __iter__(self) -> Iterator[Cell]:
        return self.cells()

    def cells(self) -> Iterator[Cell]:
        """Occupied cells in key order."""
        for cell in self._cells:
            if cell is not None:
                yield cell

    def positions(self) -> list[HexPos]:
        return [c.pos for c in self.cells()]

    def open_cells(self) -> list[Cell]:
        return [c for c in self.cells() if isinstance(c.state, Open)]

    def rooms(self) -> dict[HexPos, RoomInfo]:
        return {c.pos: c.room for c in self.cells() if c.room is not None}

    # -- state access --

    def color_of(self, pos: HexPos) -> CollapsedState | None:
        cell = self.get(pos)
        return cell.color if cell is not None else None

    def texture_index(self, pos: HexPos) -> int:
        cell = self.get(pos)
        return cell.texture_index if cell is not None else OUTLINE_TEXTURE_INDEX

    def entropy_of(self, pos: HexPos) -> int | None:
        """Domain entropy of an open cell, None otherwise."""
        cell = self.get(pos)
        if cell is None or not isinstance(cell.state, Open):
            return None
        return cell.state.domain.entropy()

    def set_collapsed(self, pos: HexPos, state: CollapsedState, role: str = "cell") -> Cell:
        cell = self.require(pos, role)
        cell.state = Collapsed(state)
        return cell

    def attach_room(self, pos: HexPos, room: RoomInfo, role: str = "cell") -> Cell:
        cell = self.require(pos, role)
        cell.room = room
        return cell
