"""Aggregate all v1 API routers."""

from fastapi import APIRouter
from printqueue.api.v1.health import router as health_router
from printqueue.api.v1.auth import router as auth_router
from printqueue.api.v1.setup import router as setup_router
from printqueue.api.v1.jobs import router as jobs_router
from printqueue.api.v1.board import router as board_router
from printqueue.api.v1.presses import router as presses_router
from printqueue.api.v1.colors import router as colors_router
from printqueue.api.v1.users import router as users_router
from printqueue.api.v1.app_settings import router as settings_router

v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(health_router, tags=["health"])
v1_router.include_router(auth_router, tags=["auth"])
v1_router.include_router(setup_router, tags=["setup"])
v1_router.include_router(jobs_router, tags=["jobs"])
v1_router.include_router(board_router, tags=["board"])
v1_router.include_router(presses_router, tags=["presses"])
v1_router.include_router(colors_router, tags=["colors"])
v1_router.include_router(users_router, tags=["users"])
v1_router.include_router(settings_router, tags=["settings"])
