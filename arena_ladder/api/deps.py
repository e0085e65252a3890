"""FastAPI dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from ..core import DEFAULT_SEASON
from ..services import LadderService
from ..services.validation import validate_bracket, validate_region, validate_season


@dataclass(frozen=True)
class LadderScope:
    region: str
    bracket: str
    season: str


def ladder_scope(
    region: str = "us", bracket: str = "2v2", season: Optional[str] = None
) -> LadderScope:
    """Validated region/bracket/season query parameters."""

    return LadderScope(
        region=validate_region(region),
        bracket=validate_bracket(bracket),
        season=validate_season(season, DEFAULT_SEASON),
    )


def get_ladder_service(request: Request) -> LadderService:
    """Return the process-wide service, building it on first use.

    Building fails with a configuration error while credentials are missing,
    so the next request retries once they are provided.
    """

    service = getattr(request.app.state, "ladder_service", None)
    if service is None:
        service = LadderService.from_config()
        request.app.state.ladder_service = service
    return service


__all__ = ["LadderScope", "get_ladder_service", "ladder_scope"]
