"""Entry point: ``python -m hexcrawl``.

Supports three modes:
  - ``python -m hexcrawl``               → Launch the FastAPI map server
  - ``python -m hexcrawl generate``      → Headless run, prints the map
  - ``python -m hexcrawl show-save ID``  → Print the rooms of a stored save
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from hexcrawl.core.enums import CellStatus
from hexcrawl.core.hex import HexPos

if TYPE_CHECKING:
    from hexcrawl.core.grid import HexGrid

logger = logging.getLogger(__name__)

_COLOR_GLYPHS = {
    "GRAY": ".",
    "RED": "r",
    "YELLOW": "y",
    "GREEN": "g",
    "LIGHT_BLUE": "b",
    "DARK_BLUE": "d",
}

_ROOM_GLYPHS = {
    "entrance": "@",
    "pillar": "P",
    "empty": "+",
    "combat": "C",
    "pit": "V",
    "item": "$",
}


def render_ascii(grid: HexGrid) -> str:
    """Draw the hexagon row by row, rooms over colours, ``x`` for exhausted."""
    lines: list[str] = []
    radius = grid.radius
    for row in range(grid.height):
        dy = row - radius
        q_min = radius + max(-radius, -radius - dy)
        q_max = radius + min(radius, radius - dy)
        glyphs: list[str] = []
        for q in range(q_min, q_max + 1):
            cell = grid.require(HexPos(q, row))
            if cell.room is not None:
                glyphs.append(_ROOM_GLYPHS.get(cell.room.kind, "?"))
            elif cell.color is not None:
                glyphs.append(_COLOR_GLYPHS[cell.color.name])
            elif cell.status == CellStatus.EXHAUSTED:
                glyphs.append("x")
            else:
                glyphs.append("?")
        indent = 2 * q_min + row - radius
        lines.append(" " * indent + " ".join(glyphs))
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seeded hexagonal dungeon map generator")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI map server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=str, default="0xDEADBEEF", help="Hex seed")
    srv.add_argument("--radius", type=int, default=5)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless generation ---
    gen = sub.add_parser("generate", help="Generate one map and print it")
    gen.add_argument("--seed", type=str, default=None, help="Hex seed; random when omitted")
    gen.add_argument("--radius", type=int, default=5)
    gen.add_argument("--save-dir", type=str, default=None, help="Write the rooms to this save directory")
    gen.add_argument("--game-id", type=int, default=None, help="Save slot; next free id when omitted")
    gen.add_argument("--trace", action="store_true", help="Log every collapse and carve step at DEBUG")
    gen.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Save inspection ---
    show = sub.add_parser("show-save", help="Print the rooms of a stored save")
    show.add_argument("game_id", type=int)
    show.add_argument("--save-dir", type=str, default="saves")
    show.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> int:
    import uvicorn

    from hexcrawl.api.app import create_app
    from hexcrawl.config import GenerationConfig
    from hexcrawl.core.errors import ConfigError
    from hexcrawl.systems.generator import MapGenerator
    from hexcrawl.systems.rng import parse_seed
    from hexcrawl.utils.logging import setup_logging

    setup_logging(args.log_level)

    try:
        seed = parse_seed(args.seed)
    except ValueError as exc:
        logger.error("Bad seed: %s", exc)
        return 2

    config = GenerationConfig(seed=seed, map_radius=args.radius, log_level=args.log_level)
    try:
        MapGenerator(config)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def _run_generate(args: argparse.Namespace) -> int:
    from hexcrawl.config import GenerationConfig
    from hexcrawl.core.errors import ConfigError, GenerationError
    from hexcrawl.systems.generator import MapGenerator
    from hexcrawl.systems.rng import format_seed, parse_seed
    from hexcrawl.utils.logging import setup_logging
    from hexcrawl.utils.save_store import SaveGameStore

    setup_logging(args.log_level, step_trace=args.trace)

    try:
        seed = parse_seed(args.seed)
    except ValueError as exc:
        logger.error("Bad seed: %s", exc)
        return 2

    config = GenerationConfig(seed=seed, map_radius=args.radius, log_level=args.log_level)
    try:
        generator = MapGenerator(config)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    try:
        generated = generator.generate()
    except GenerationError as exc:
        logger.error("Generation failed: %s", exc)
        return 1

    print(f"seed {format_seed(generated.seed)}  radius {generated.radius}")
    print(render_ascii(generated.grid))
    print(
        f"{len(generated.grid)} cells, {generated.collapse_steps} collapsed, "
        f"{len(generated.exhausted_positions())} exhausted, "
        f"{len(generated.carved_positions())} carved, {len(generated.rooms())} rooms"
    )

    if args.save_dir is not None:
        store = SaveGameStore(args.save_dir)
        game_id = store.save(generated, args.game_id)
        print(f"saved as game {game_id} in {store.path_for(game_id)}")
    return 0


def _run_show_save(args: argparse.Namespace) -> int:
    from hexcrawl.core.errors import SaveNotFoundError
    from hexcrawl.core.rooms import room_type_to_dict
    from hexcrawl.systems.rng import format_seed
    from hexcrawl.utils.logging import setup_logging
    from hexcrawl.utils.save_store import SaveGameStore

    setup_logging(args.log_level)

    try:
        saved = SaveGameStore(args.save_dir).load(args.game_id)
    except SaveNotFoundError as exc:
        logger.error("%s", exc)
        return 1

    print(f"game {saved.game_id}: seed {format_seed(saved.world_seed)} radius {saved.map_radius}")
    print(f"created {saved.created}, last saved {saved.last_saved}")
    for pos, info in sorted(saved.rooms.items()):
        mark = "x" if info.cleared else " "
        print(f"  [{mark}] {pos!r:>10} {room_type_to_dict(info.room_type)} seed={info.rng_seed:#x}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        return _run_server(args)
    if args.command == "generate":
        return _run_generate(args)
    if args.command == "show-save":
        return _run_show_save(args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
