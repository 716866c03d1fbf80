"""Versioned API route modules."""

from fastapi import APIRouter

from hexcrawl.api.routes.config import router as config_router
from hexcrawl.api.routes.control import router as control_router
from hexcrawl.api.routes.events import router as events_router
from hexcrawl.api.routes.map import router as map_router
from hexcrawl.api.routes.rooms import router as rooms_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(map_router, tags=["Map"])
api_router.include_router(rooms_router, tags=["Rooms"])
api_router.include_router(events_router, tags=["Events"])
api_router.include_router(control_router, tags=["Control"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]
