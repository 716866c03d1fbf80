"""Process-wide MapManager handed to routes through ``Depends``."""

from __future__ import annotations

from hexcrawl.api.map_manager import MapManager

_map_manager: MapManager | None = None


def set_map_manager(manager: MapManager | None) -> None:
    global _map_manager
    _map_manager = manager


def get_map_manager() -> MapManager:
    if _map_manager is None:
        raise RuntimeError("MapManager not initialized — server not started correctly.")
    return _map_manager
