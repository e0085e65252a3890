"""
Title cutoff resolution.

Cutoffs come from the first strategy that yields at least one tier:

1. authoritative reward/title data published by the upstream API,
2. gap analysis over the top of the rating curve,
3. population percentiles.

Tiers that would break the ordering (each tier starts right after the one
above it and never rates higher) are dropped rather than emitted.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

import httpx

from ..core.errors import NoCutoffDataError
from ..models import PlayerEntry
from ..models.cutoff import (
    DUELIST,
    GLADIATOR,
    R1,
    RIVAL,
    TIER_ORDER,
    CutoffSet,
    CutoffSource,
    CutoffTier,
)
from .battlenet import BattleNetClient, dynamic_namespaces
from .fields import as_int, first_present, localized
from .leaderboards import sort_by_rating

logger = logging.getLogger(__name__)

# Gap analysis
GAP_SCAN_DEPTH = 200
R1_WINDOW = (3, 50)
R1_MIN_GAP = 20
GLADIATOR_MIN_GAP = 15
GLADIATOR_OFFSET = 5
GLADIATOR_DEFAULT_FLOOR = 20

# Percentile fallback, as (numerator, denominator) shares of the population
R1_SHARE = (1, 1000)
GLADIATOR_SHARE = (5, 1000)
DUELIST_SHARE = (3, 100)
RIVAL_SHARE = (1, 10)
R1_CAP = 30
GLADIATOR_CAP = 200

RATING_FIELDS = ("rating", "cutoff_rating", "rating_cutoff", "min_rating")
RANK_FIELDS = ("rank", "rank_cutoff", "cutoff_rank", "max_rank")

CUTOFF_MAP_KEYS = (
    "cutoffs",
    "title_cutoffs",
    "season_cutoffs",
    "pvp_season_cutoffs",
    "leaderboard_cutoffs",
)
TIER_KEYS = {
    R1: ("malevolent_gladiator", "rank_1", "r1", "rank-1", "title_malevolent_gladiator"),
    GLADIATOR: ("gladiator", "season_gladiator", "title_gladiator"),
    DUELIST: ("duelist", "title_duelist"),
}
REWARD_LIST_KEYS = ("rewards", "titles")
RANK_ONE = re.compile(r"\brank[ -]?1\b")


@dataclass(frozen=True)
class RatingGap:
    rank: int
    gap: int
    rating_before: int
    rating_after: int


def _ceil_share(total: int, share: tuple[int, int]) -> int:
    numerator, denominator = share
    return -(-total * numerator // denominator)


def _rating_at(players: Sequence[PlayerEntry], rank: int) -> Optional[int]:
    if 1 <= rank <= len(players):
        return players[rank - 1].rating
    return None


def enforce_order(raw: Dict[str, Dict[str, int]]) -> Dict[str, CutoffTier]:
    """Turn ``{tier: {rating, rangeEnd}}`` into ordered, disjoint tiers.

    Walks the tiers best first; a tier whose rank end does not extend past
    the previous one, or whose rating is higher than the previous one, is
    dropped.
    """

    tiers: Dict[str, CutoffTier] = {}
    previous_end = 0
    previous_rating: Optional[int] = None
    for name in TIER_ORDER:
        candidate = raw.get(name)
        if not candidate:
            continue
        rating = candidate.get("rating")
        range_end = candidate.get("rangeEnd")
        if rating is None or range_end is None or rating < 0:
            continue
        if range_end <= previous_end:
            logger.debug("Dropping %s: rank end %s not below %s", name, range_end, previous_end)
            continue
        if previous_rating is not None and rating > previous_rating:
            logger.debug("Dropping %s: rating %s above %s", name, rating, previous_rating)
            continue
        tiers[name] = CutoffTier(
            rating=rating, range_start=previous_end + 1, range_end=range_end
        )
        previous_end = range_end
        previous_rating = rating
    return tiers


# --------------------------------------------------------------------------
# Tier A: authoritative reward data
# --------------------------------------------------------------------------


def _classify_title(title: str) -> Optional[str]:
    text = title.lower()
    if "malevolent gladiator" in text or RANK_ONE.search(text):
        return R1
    if "gladiator" in text:
        return GLADIATOR
    if "duelist" in text:
        return DUELIST
    return None


def _tier_values(
    source: Dict[str, Any], players: Sequence[PlayerEntry]
) -> Optional[Dict[str, int]]:
    rating = as_int(first_present(source, *RATING_FIELDS))
    rank = as_int(first_present(source, *RANK_FIELDS))
    if rank is not None and rank < 1:
        rank = None

    if rating is None and rank is not None:
        rating = _rating_at(players, rank)
    if rank is None and rating is not None and players:
        rank = sum(1 for player in players if player.rating >= rating) or None
    if rating is None or rank is None:
        return None
    return {"rating": rating, "rangeEnd": rank}


def _cutoff_maps(data: Dict[str, Any], bracket: Optional[str]) -> List[Dict[str, Any]]:
    maps = [data.get(key) for key in CUTOFF_MAP_KEYS]
    if bracket:
        maps.append(first_present(data, f"bracket_cutoffs.{bracket}"))
    return [item for item in maps if isinstance(item, dict)]


def extract_authoritative(
    data: Any, players: Sequence[PlayerEntry], bracket: Optional[str] = None
) -> Dict[str, Dict[str, int]]:
    """Recover tier ratings/ranks from a reward or season payload."""

    found: Dict[str, Dict[str, int]] = {}
    if not isinstance(data, dict):
        return found

    for cutoff_map in _cutoff_maps(data, bracket):
        for tier, keys in TIER_KEYS.items():
            if tier in found:
                continue
            source = first_present(cutoff_map, *keys)
            if isinstance(source, dict):
                values = _tier_values(source, players)
                if values:
                    found[tier] = values

    for list_key in REWARD_LIST_KEYS:
        rewards = data.get(list_key)
        if not isinstance(rewards, list):
            continue
        for reward in rewards:
            if not isinstance(reward, dict):
                continue
            title = localized(first_present(reward, "title.name", "name", "title")) or ""
            tier = _classify_title(title)
            if tier is None:
                continue
            values = _tier_values(reward, players)
            if values:
                found[tier] = values
    return found


# --------------------------------------------------------------------------
# Tier B: rating gap analysis
# --------------------------------------------------------------------------


def find_rating_gaps(
    players: Sequence[PlayerEntry], depth: int = GAP_SCAN_DEPTH
) -> List[RatingGap]:
    """Positive rating drops between neighbours in the top ``depth`` ranks."""

    gaps: List[RatingGap] = []
    for idx in range(min(depth, len(players) - 1)):
        before = players[idx].rating
        after = players[idx + 1].rating
        if before - after > 0:
            gaps.append(RatingGap(idx + 1, before - after, before, after))
    return gaps


def _largest(gaps: Iterable[RatingGap]) -> Optional[RatingGap]:
    # Largest drop wins; equal drops go to the higher rank.
    best: Optional[RatingGap] = None
    for gap in gaps:
        if best is None or gap.gap > best.gap:
            best = gap
    return best


def analyze_gaps(
    players: Sequence[PlayerEntry], depth: int = GAP_SCAN_DEPTH
) -> Dict[str, Dict[str, int]]:
    """Place r1 and gladiator at the biggest rating drops in their windows.

    A tier's rank end is the rank just above the drop and its rating is the
    rating just below it.
    """

    gaps = find_rating_gaps(players, depth)
    found: Dict[str, Dict[str, int]] = {}

    low, high = R1_WINDOW
    r1_gap = _largest(g for g in gaps if low <= g.rank <= high and g.gap >= R1_MIN_GAP)
    if r1_gap:
        found[R1] = {"rating": r1_gap.rating_after, "rangeEnd": r1_gap.rank}

    floor = (r1_gap.rank if r1_gap else GLADIATOR_DEFAULT_FLOOR) + GLADIATOR_OFFSET
    glad_gap = _largest(g for g in gaps if g.rank >= floor and g.gap >= GLADIATOR_MIN_GAP)
    if glad_gap:
        found[GLADIATOR] = {"rating": glad_gap.rating_after, "rangeEnd": glad_gap.rank}
    return found


# --------------------------------------------------------------------------
# Tier C: percentiles
# --------------------------------------------------------------------------


def percentile_cutoffs(players: Sequence[PlayerEntry]) -> Dict[str, Dict[str, int]]:
    total = len(players)
    found: Dict[str, Dict[str, int]] = {}
    if total == 0:
        return found

    r1_count = max(1, min(R1_CAP, _ceil_share(total, R1_SHARE)))
    glad_count = max(r1_count + 1, min(GLADIATOR_CAP, _ceil_share(total, GLADIATOR_SHARE)))
    duelist_count = max(glad_count + 1, _ceil_share(total, DUELIST_SHARE))
    rival_count = max(duelist_count + 1, _ceil_share(total, RIVAL_SHARE))

    for name, count in (
        (R1, r1_count),
        (GLADIATOR, glad_count),
        (DUELIST, duelist_count),
        (RIVAL, rival_count),
    ):
        if count > total:
            break
        found[name] = {"rating": players[count - 1].rating, "rangeEnd": count}
    return found


# --------------------------------------------------------------------------
# Resolver
# --------------------------------------------------------------------------


def resolve_cutoffs(
    entries: Sequence[PlayerEntry],
    raw_reward_data: Any = None,
    bracket: Optional[str] = None,
    region: Optional[str] = None,
    season: Optional[str] = None,
) -> CutoffSet:
    """Compute title cutoffs for one snapshot."""

    if not entries:
        raise NoCutoffDataError()
    players = sort_by_rating(entries)

    def _build(tiers: Dict[str, CutoffTier], source: CutoffSource) -> CutoffSet:
        logger.info(
            "Cutoffs for %s %s season %s from %s: %s",
            region,
            bracket,
            season,
            source.value,
            {name: (tier.rating, tier.range_end) for name, tier in tiers.items()},
        )
        return CutoffSet(
            tiers=tiers,
            source=source,
            total_players=len(players),
            region=region,
            bracket=bracket,
            season=season,
            computed_at=datetime.now(timezone.utc),
        )

    if raw_reward_data is not None:
        try:
            tiers = enforce_order(extract_authoritative(raw_reward_data, players, bracket))
        except (TypeError, ValueError, AttributeError) as exc:
            logger.warning("Ignoring malformed reward data: %s", exc)
            tiers = {}
        if tiers:
            return _build(tiers, CutoffSource.AUTHORITATIVE)

    tiers = enforce_order(analyze_gaps(players))
    if tiers:
        return _build(tiers, CutoffSource.HEURISTIC)

    tiers = enforce_order(percentile_cutoffs(players))
    if not tiers:
        raise NoCutoffDataError("Percentile fallback produced no tiers")
    return _build(tiers, CutoffSource.PERCENTILE)


def cutoffs_to_dict(cutoffs: CutoffSet) -> Dict[str, Any]:
    """Serialise a cutoff set to the flat API shape."""

    payload: Dict[str, Any] = {
        name: tier.model_dump(by_alias=True) for name, tier in cutoffs.tiers.items()
    }
    payload["source"] = cutoffs.source.value
    payload["metadata"] = {
        "totalPlayers": cutoffs.total_players,
        "region": cutoffs.region,
        "bracket": cutoffs.bracket,
        "season": cutoffs.season,
        "timestamp": cutoffs.computed_at.isoformat() if cutoffs.computed_at else None,
    }
    return payload


# --------------------------------------------------------------------------
# Reward data lookup
# --------------------------------------------------------------------------


def _has_cutoff_data(data: Dict[str, Any], bracket: str) -> bool:
    if any(isinstance(data.get(key), list) for key in REWARD_LIST_KEYS):
        return True
    return bool(_cutoff_maps(data, bracket))


async def fetch_reward_data(
    client: BattleNetClient,
    access_token: str,
    region: str,
    season: str,
    bracket: str,
) -> Optional[Dict[str, Any]]:
    """Probe the season/reward endpoints; ``None`` when none carry cutoffs."""

    namespace = dynamic_namespaces(region)[0]
    paths = (
        f"/data/wow/pvp-season/{season}",
        f"/data/wow/pvp-season/{season}/pvp-reward",
        f"/data/wow/pvp-season/{season}/pvp-leaderboard/{bracket}/rewards",
    )
    for path in paths:
        try:
            response = await client.api_get(region, access_token, path, namespace)
        except httpx.HTTPError as exc:
            logger.debug("Reward endpoint %s failed: %s", path, exc)
            continue
        if not response.is_success:
            logger.debug("Reward endpoint %s returned %s", path, response.status_code)
            continue
        try:
            data = response.json()
        except ValueError:
            continue
        if isinstance(data, dict) and _has_cutoff_data(data, bracket):
            return data
    return None


__all__ = [
    "RatingGap",
    "analyze_gaps",
    "cutoffs_to_dict",
    "enforce_order",
    "extract_authoritative",
    "fetch_reward_data",
    "find_rating_gaps",
    "percentile_cutoffs",
    "resolve_cutoffs",
]
