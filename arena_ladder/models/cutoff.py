"""Title cutoff shapes."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

# Tier names, best first.
R1 = "r1"
GLADIATOR = "gladiator"
DUELIST = "duelist"
RIVAL = "rival"

TIER_ORDER = (R1, GLADIATOR, DUELIST, RIVAL)


class CutoffSource(str, Enum):
    AUTHORITATIVE = "authoritative"
    HEURISTIC = "heuristic"
    PERCENTILE = "percentile"


class CutoffTier(BaseModel):
    """Rating and inclusive rank range covered by one title."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rating: int = Field(ge=0)
    range_start: int = Field(alias="rangeStart", ge=1)
    range_end: int = Field(alias="rangeEnd", ge=1)


class CutoffSet(BaseModel):
    """Tiers computed from one snapshot, keyed by tier name."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tiers: Dict[str, CutoffTier]
    source: CutoffSource
    total_players: int = Field(alias="totalPlayers", ge=0)
    region: str | None = None
    bracket: str | None = None
    season: str | None = None
    computed_at: datetime | None = Field(default=None, alias="timestamp")

    def get(self, name: str) -> CutoffTier | None:
        return self.tiers.get(name)


__all__ = [
    "DUELIST",
    "GLADIATOR",
    "R1",
    "RIVAL",
    "TIER_ORDER",
    "CutoffSet",
    "CutoffSource",
    "CutoffTier",
]
