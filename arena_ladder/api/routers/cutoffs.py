"""Title cutoff endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Response

from ...services import LadderService, cutoffs_to_dict
from ..deps import LadderScope, get_ladder_service, ladder_scope

router = APIRouter(tags=["cutoffs"])


@router.get("/cutoffs")
async def get_cutoffs(
    response: Response,
    scope: LadderScope = Depends(ladder_scope),
    service: LadderService = Depends(get_ladder_service),
) -> Dict[str, Any]:
    """Cutoffs, cached longer when they come from published reward data."""

    cutoffs = await service.get_cutoffs(scope.region, scope.bracket, scope.season)
    response.headers["Cache-Control"] = f"public, max-age={service.cache_seconds(cutoffs)}"
    return cutoffs_to_dict(cutoffs)


@router.get("/pvp-titles")
async def get_pvp_titles(
    response: Response,
    scope: LadderScope = Depends(ladder_scope),
    service: LadderService = Depends(get_ladder_service),
) -> Dict[str, Any]:
    """Rank 1 / Gladiator / Duelist boundaries for the ladder."""

    cutoffs = await service.get_cutoffs(scope.region, scope.bracket, scope.season)
    response.headers["Cache-Control"] = "public, max-age=300"
    return cutoffs_to_dict(cutoffs)


__all__ = ["router"]
