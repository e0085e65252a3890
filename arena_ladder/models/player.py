"""Ranked player shape shared by the fetcher, enricher and pagination."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..core.gamedata import UNKNOWN


class PlayerEntry(BaseModel):
    """One ranked competitor in a bracket/season/region snapshot."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rank: int = Field(ge=1)
    player_name: str = Field(alias="playerName", min_length=1)
    rating: int = Field(default=0, ge=0)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    character_class: str = Field(default=UNKNOWN, alias="characterClass")
    race: str = UNKNOWN
    spec: str = UNKNOWN
    realm: str = UNKNOWN
    realm_slug: str | None = Field(default=None, alias="realmSlug")
    faction: str = UNKNOWN


__all__ = ["PlayerEntry"]
