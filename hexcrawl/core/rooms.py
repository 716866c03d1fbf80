"""Room semantics attached to map cells.

RoomType variants are pydantic dataclasses discriminated by ``kind`` so the
same definitions serve the generator, the API and the save files.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter
from pydantic.dataclasses import dataclass as pydantic_dataclass

# Enemy names a combat room can hold.  The room subsystem spawns them.
MONSTER_KINDS: tuple[str, ...] = ("goblin", "skeleton", "slime", "bat", "cultist")

# Items a treasure room can grant.
ITEM_KINDS: tuple[str, ...] = ("healing_potion", "vision_potion")

# Room seed of the single entrance room.
ENTRANCE_ROOM_SEED = 0xDEADBEEF


# ---------------------------------------------------------------------------
# RoomType variants
# ---------------------------------------------------------------------------

@pydantic_dataclass(frozen=True)
class EmptyRoom:
    """Nothing interesting."""

    kind: Literal["empty"] = "empty"


@pydantic_dataclass(frozen=True)
class Entrance:
    """Centre of the map; doubles as the exit once every pillar is done."""

    kind: Literal["entrance"] = "entrance"


@pydantic_dataclass(frozen=True)
class Pillar:
    """One of the four destinations the paths are carved toward."""

    kind: Literal["pillar"] = "pillar"


@pydantic_dataclass(frozen=True)
class Combat:
    """Enemies to fight.  Spawned dead once the room is cleared."""

    monsters: tuple[str, ...]
    kind: Literal["combat"] = "combat"


@pydantic_dataclass(frozen=True)
class Pit:
    """Spike pit dealing damage in ``[low, high)`` on entry until triggered."""

    low: int
    high: int
    kind: Literal["pit"] = "pit"

    def __post_init__(self) -> None:
        if self.low < 0 or self.high <= self.low:
            raise ValueError(f"invalid pit damage range [{self.low}, {self.high})")

    @property
    def damage_range(self) -> range:
        return range(self.low, self.high)


@pydantic_dataclass(frozen=True)
class Item:
    """Grants *item* on entry; collected automatically once cleared."""

    item: str
    kind: Literal["item"] = "item"


RoomType = Annotated[
    Union[EmptyRoom, Entrance, Pillar, Combat, Pit, Item],
    Field(discriminator="kind"),
]

ROOM_TYPE_ADAPTER: TypeAdapter = TypeAdapter(RoomType)


def room_type_to_dict(room_type: RoomType) -> dict[str, Any]:
    return ROOM_TYPE_ADAPTER.dump_python(room_type, mode="json")


def room_type_from_dict(data: dict[str, Any]) -> RoomType:
    return ROOM_TYPE_ADAPTER.validate_python(data)


# ---------------------------------------------------------------------------
# RoomInfo
# ---------------------------------------------------------------------------

@pydantic_dataclass
class RoomInfo:
    """Gameplay record attached to a map cell.

    ``cleared`` is flipped by the surrounding game when the player finishes
    the room; generation always produces uncleared rooms.
    """

    room_type: RoomType
    rng_seed: int
    cleared: bool = False

    @classmethod
    def from_type(cls, room_type: RoomType, rng_seed: int) -> RoomInfo:
        return cls(room_type=room_type, rng_seed=rng_seed)

    @property
    def kind(self) -> str:
        return self.room_type.kind

    def mark_cleared(self) -> None:
        self.cleared = True
