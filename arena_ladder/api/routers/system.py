"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Response

from ...core import (
    BLIZZARD_CLIENT_ID,
    BLIZZARD_CLIENT_SECRET,
    DEFAULT_SEASON,
    FALLBACK_SEASONS,
)
from ...core.gamedata import BRACKETS, CLASS_COLORS, CLASSES, REGIONS, SPECS

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/config")
def get_config() -> Dict[str, Any]:
    """Expose non-secret runtime values to the frontend."""

    return {
        "regions": list(REGIONS),
        "brackets": list(BRACKETS),
        "classes": list(CLASSES),
        "specs": {name: list(specs) for name, specs in SPECS.items()},
        "class_colors": dict(CLASS_COLORS),
        "default_season": DEFAULT_SEASON,
        "fallback_seasons": FALLBACK_SEASONS,
        "credentials_configured": bool(BLIZZARD_CLIENT_ID and BLIZZARD_CLIENT_SECRET),
    }


@router.options("/{path:path}")
def preflight(path: str) -> Response:
    """Answer bare OPTIONS requests the CORS middleware does not intercept."""

    return Response(status_code=200)


__all__ = ["router"]
