"""Leaderboard snapshot and page shapes."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .player import PlayerEntry


class LeaderboardFetch(BaseModel):
    """Raw upstream answer for the first season that had entries."""

    model_config = ConfigDict(frozen=True)

    region: str
    bracket: str
    season: str
    namespace: str
    entries: Tuple[Dict[str, Any], ...]
    attempted: Tuple[str, ...] = ()


class LeaderboardSnapshot(BaseModel):
    """Rating-descending player list for one region/bracket/season."""

    model_config = ConfigDict(frozen=True)

    region: str
    bracket: str
    season: str
    entries: Tuple[PlayerEntry, ...]
    fetched_at: datetime
    enriched: int = 0

    @property
    def total_players(self) -> int:
        return len(self.entries)


class Page(BaseModel):
    """One slice of a snapshot with ranks recomputed from its position."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    entries: List[PlayerEntry]
    page: int
    page_size: int = Field(alias="pageSize")
    total_pages: int = Field(alias="totalPages")
    total_count: int = Field(alias="totalCount")


class Window(BaseModel):
    """A ``skip``/``limit`` slice of a snapshot."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    entries: List[PlayerEntry]
    total: int
    limit: Optional[int]
    skip: int
    has_more: bool = Field(alias="hasMore")


__all__ = ["LeaderboardFetch", "LeaderboardSnapshot", "Page", "Window"]
