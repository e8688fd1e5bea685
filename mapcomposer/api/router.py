"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from mapcomposer.api import health, maps, places

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(places.router)
api_router.include_router(maps.router)
