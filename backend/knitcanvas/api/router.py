"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from knitcanvas.api import garments, health, sessions

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(garments.router)
api_router.include_router(sessions.router)
