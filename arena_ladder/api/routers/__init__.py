"""Aggregate API routers."""

from fastapi import APIRouter

from .characters import router as characters_router
from .cutoffs import router as cutoffs_router
from .leaderboard import router as leaderboard_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    leaderboard_router,
    characters_router,
    cutoffs_router,
)

__all__ = ["ALL_ROUTERS"]
