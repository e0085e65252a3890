"""Leaderboard endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Response

from ...services import LadderService
from ..deps import LadderScope, get_ladder_service, ladder_scope

router = APIRouter(tags=["leaderboard"])

CACHE_CONTROL = "public, max-age=300"


@router.api_route("/leaderboard", methods=["GET", "POST"])
async def get_leaderboard(
    response: Response,
    scope: LadderScope = Depends(ladder_scope),
    limit: Optional[int] = None,
    skip: Optional[int] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = Query(None, alias="pageSize"),
    service: LadderService = Depends(get_ladder_service),
) -> Dict[str, Any]:
    """Ranked players, whole or sliced by ``page``/``pageSize`` or ``skip``/``limit``."""

    pagination: Optional[Dict[str, Any]] = None

    if page is not None or page_size is not None:
        snapshot, result = await service.get_page(
            scope.region, scope.bracket, scope.season, page or 1, page_size or 50
        )
        entries = result.entries
        pagination = {
            "page": result.page,
            "pageSize": result.page_size,
            "totalPages": result.total_pages,
            "totalCount": result.total_count,
        }
    elif limit is not None or skip is not None:
        snapshot, window = await service.get_window(
            scope.region, scope.bracket, scope.season, skip or 0, limit
        )
        entries = window.entries
        pagination = {
            "total": window.total,
            "limit": window.limit,
            "skip": window.skip,
            "hasMore": window.has_more,
        }
    else:
        snapshot = await service.get_snapshot(scope.region, scope.bracket, scope.season)
        entries = list(snapshot.entries)

    response.headers["Cache-Control"] = CACHE_CONTROL
    body: Dict[str, Any] = {
        "region": snapshot.region,
        "bracket": snapshot.bracket,
        "season": snapshot.season,
        "entries": [entry.model_dump(by_alias=True) for entry in entries],
    }
    if pagination is not None:
        body["pagination"] = pagination
    return body


__all__ = ["router"]
