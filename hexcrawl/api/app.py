"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hexcrawl.api.dependencies import set_map_manager
from hexcrawl.api.map_manager import MapManager
from hexcrawl.api.routes import api_router
from hexcrawl.config import GenerationConfig
from hexcrawl.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GenerationConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GenerationConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = MapManager(_config)
        set_map_manager(manager)
        logger.info("API server started, map seed=%#x radius=%d", _config.seed, _config.map_radius)
        yield
        set_map_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Hexcrawl Map Generator",
        description=(
            "Seeded hexagonal dungeon maps over HTTP.\n\n"
            "## API Groups\n\n"
            "- **Map** — Cell colours and texture indices of the current map\n"
            "- **Rooms** — Room records on the entrance, pillars and carved paths\n"
            "- **Events** — Step-by-step generation log\n"
            "- **Control** — Regenerate from a seed or reset\n"
            "- **Config** — Read-only generation configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Map", "description": "Every cell of the hexagon with its status, colour and atlas slot."},
            {"name": "Rooms", "description": "RoomInfo rows; a room can be flagged as cleared."},
            {"name": "Events", "description": "Collapse, pillar and carving events of the last successful run."},
            {"name": "Control", "description": "Generate a new map from a hex seed, or reset to the configured one."},
            {"name": "Config", "description": "Radius, pillar offsets, room weights and walk ceiling."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
