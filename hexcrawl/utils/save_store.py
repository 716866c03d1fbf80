"""Save-game files — persist room rows so a map can be restored without regenerating.

One JSON file per game id.  Only rooms are stored (``{x, y, cleared,
room_type, rng_seed}``) plus the seed and radius they came from.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, ValidationError

from hexcrawl.core.errors import SaveNotFoundError
from hexcrawl.core.hex import HexPos
from hexcrawl.core.rooms import EmptyRoom, RoomInfo, room_type_from_dict, room_type_to_dict

if TYPE_CHECKING:
    from hexcrawl.systems.generator import GeneratedMap

logger = logging.getLogger(__name__)

SAVE_VERSION = "1.0"


class RoomRow(BaseModel):
    x: int
    y: int
    cleared: bool = False
    room_type: dict[str, Any]
    rng_seed: int = Field(ge=0)


class SaveFile(BaseModel):
    version: str = SAVE_VERSION
    game_id: int
    world_seed: int
    map_radius: int
    created: str
    last_saved: str
    rooms: list[RoomRow] = Field(default_factory=list)


@dataclass(frozen=True)
class SavedGame:
    """A save restored from disk."""

    game_id: int
    world_seed: int
    map_radius: int
    created: str
    last_saved: str
    rooms: dict[HexPos, RoomInfo]

    def room_at(self, pos: HexPos) -> RoomInfo | None:
        return self.rooms.get(pos)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_room(row: RoomRow) -> RoomInfo:
    try:
        room_type = room_type_from_dict(row.room_type)
    except ValidationError:
        logger.warning("Unreadable room type at (%d, %d); treating it as empty", row.x, row.y)
        room_type = EmptyRoom()
    return RoomInfo(room_type=room_type, rng_seed=row.rng_seed, cleared=row.cleared)


def _rows_from_rooms(rooms: dict[HexPos, RoomInfo]) -> list[RoomRow]:
    return [
        RoomRow(
            x=pos.x,
            y=pos.y,
            cleared=info.cleared,
            room_type=room_type_to_dict(info.room_type),
            rng_seed=info.rng_seed,
        )
        for pos, info in sorted(rooms.items())
    ]


class SaveGameStore:
    """Directory of save files keyed by integer game id."""

    __slots__ = ("_dir",)

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, game_id: int) -> Path:
        return self._dir / f"save_{game_id:04d}.json"

    def list_ids(self) -> list[int]:
        if not self._dir.exists():
            return []
        ids: list[int] = []
        for path in self._dir.glob("save_*.json"):
            suffix = path.stem[len("save_"):]
            if suffix.isdigit():
                ids.append(int(suffix))
        return sorted(ids)

    def next_game_id(self) -> int:
        ids = self.list_ids()
        return ids[-1] + 1 if ids else 1

    def exists(self, game_id: int) -> bool:
        return self.path_for(game_id).exists()

    # -- write --

    def save(self, generated: GeneratedMap, game_id: int | None = None) -> int:
        """Write every room of *generated*; returns the game id used."""
        if game_id is None:
            game_id = self.next_game_id()
        created = _now()
        if self.exists(game_id):
            created = self._read(game_id).created
        save = SaveFile(
            game_id=game_id,
            world_seed=generated.seed,
            map_radius=generated.radius,
            created=created,
            last_saved=_now(),
            rooms=_rows_from_rooms(generated.rooms()),
        )
        self._write(save)
        logger.info("Saved game %d to %s (%d rooms)", game_id, self.path_for(game_id), len(save.rooms))
        return game_id

    def mark_cleared(self, game_id: int, pos: HexPos) -> SavedGame:
        save = self._read(game_id)
        for row in save.rooms:
            if row.x == pos.x and row.y == pos.y:
                row.cleared = True
                break
        else:
            raise KeyError(f"game {game_id} has no room at {pos}")
        save.last_saved = _now()
        self._write(save)
        return self._to_saved(save)

    def delete(self, game_id: int) -> None:
        path = self.path_for(game_id)
        if not path.exists():
            raise SaveNotFoundError(f"no save for game {game_id}")
        path.unlink()

    # -- read --

    def load(self, game_id: int) -> SavedGame:
        return self._to_saved(self._read(game_id))

    # -- internals --

    def _read(self, game_id: int) -> SaveFile:
        path = self.path_for(game_id)
        if not path.exists():
            raise SaveNotFoundError(f"no save for game {game_id}")
        return SaveFile.model_validate_json(path.read_text(encoding="utf-8"))

    def _write(self, save: SaveFile) -> None:
        path = self.path_for(save.game_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(save.model_dump_json(indent=2), encoding="utf-8")

    @staticmethod
    def _to_saved(save: SaveFile) -> SavedGame:
        return SavedGame(
            game_id=save.game_id,
            world_seed=save.world_seed,
            map_radius=save.map_radius,
            created=save.created,
            last_saved=save.last_saved,
            rooms={HexPos(row.x, row.y): _row_to_room(row) for row in save.rooms},
        )
