"""Weighted room-type draw for carved path cells."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hexcrawl.core.rooms import (
    ITEM_KINDS,
    MONSTER_KINDS,
    Combat,
    EmptyRoom,
    Item,
    Pit,
    RoomInfo,
    RoomType,
)
from hexcrawl.systems.rng import derive

if TYPE_CHECKING:
    from hexcrawl.config import GenerationConfig
    from hexcrawl.systems.rng import SeededRNG

_PAYLOAD_SALT = 0x524F4F4D  # "ROOM"


class RoomTypeAssigner:
    """Maps one RNG draw to a RoomType.

    The category comes from the draw against the cumulative weights; the
    payload (monsters, pit damage, item) is hashed out of the same draw, so
    every call consumes exactly one value from the stream.
    """

    __slots__ = ("_cumulative", "_total", "_max_monsters", "_pit_min", "_pit_max")

    def __init__(self, config: GenerationConfig) -> None:
        running = 0
        cumulative: list[tuple[str, int]] = []
        for category, weight in config.room_weights:
            running += weight
            cumulative.append((category, running))
        self._cumulative = tuple(cumulative)
        self._total = running
        self._max_monsters = config.max_monsters_per_room
        self._pit_min = config.pit_damage_min
        self._pit_max = config.pit_damage_max

    def assign(self, rng: SeededRNG) -> RoomType:
        return self.room_type_for(rng.next_u64())

    def assign_room(self, rng: SeededRNG) -> RoomInfo:
        """Draw a room; the draw itself becomes the room's seed."""
        roll = rng.next_u64()
        return RoomInfo.from_type(self.room_type_for(roll), roll)

    def category_for(self, roll: int) -> str:
        pick = (roll * self._total) >> 64
        for category, bound in self._cumulative:
            if pick < bound:
                return category
        return self._cumulative[-1][0]

    def room_type_for(self, roll: int) -> RoomType:
        category = self.category_for(roll)
        payload = derive(roll, _PAYLOAD_SALT)

        if category == "combat":
            count = 1 + payload % self._max_monsters
            monsters = tuple(
                MONSTER_KINDS[derive(payload, i) % len(MONSTER_KINDS)] for i in range(count)
            )
            return Combat(monsters=monsters)
        if category == "pit":
            low = self._pit_min + payload % (self._pit_max - self._pit_min)
            high = low + 1 + (payload >> 32) % (self._pit_max - low)
            return Pit(low=low, high=high)
        if category == "item":
            return Item(item=ITEM_KINDS[payload % len(ITEM_KINDS)])
        return EmptyRoom()
