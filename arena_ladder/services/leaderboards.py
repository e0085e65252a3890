"""Leaderboard fetching, season fallback and entry normalisation."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

import httpx

from ..core.errors import NotFoundError, UpstreamError
from ..core.gamedata import UNKNOWN, faction_for
from ..models import LeaderboardFetch, LeaderboardSnapshot, PlayerEntry
from .battlenet import BattleNetClient, dynamic_namespaces
from .fields import as_int, first_present, localized
from .validation import validate_bracket, validate_region

logger = logging.getLogger(__name__)


def season_candidates(season_hint: str, fallbacks: Sequence[str]) -> List[str]:
    """The requested season first, then the known fallbacks, without repeats."""

    return list(dict.fromkeys([str(season_hint), *(str(season) for season in fallbacks)]))


def _entries_of(response: httpx.Response) -> List[Dict[str, Any]]:
    try:
        payload = response.json()
    except ValueError:
        return []
    entries = payload.get("entries") if isinstance(payload, dict) else None
    return entries if isinstance(entries, list) else []


async def fetch_leaderboard(
    client: BattleNetClient,
    access_token: str,
    region: str,
    bracket: str,
    season_hint: str,
    fallbacks: Sequence[str] = (),
) -> LeaderboardFetch:
    """Walk the season candidates until one yields a non-empty entry list.

    Each candidate is asked under the classic namespace and, if that request
    is not successful, once more under the retail namespace.
    """

    region = validate_region(region)
    bracket = validate_bracket(bracket)
    candidates = season_candidates(season_hint, fallbacks)

    attempted: List[str] = []
    last_status: Optional[int] = None
    saw_client_answer = False

    for season in candidates:
        attempted.append(season)
        path = f"/data/wow/pvp-season/{season}/pvp-leaderboard/{bracket}"
        for namespace in dynamic_namespaces(region):
            try:
                response = await client.api_get(region, access_token, path, namespace)
            except httpx.HTTPError as exc:
                logger.warning("Season %s (%s) request failed: %s", season, namespace, exc)
                continue

            last_status = response.status_code
            if response.status_code < 500:
                saw_client_answer = True
            if not response.is_success:
                logger.info("Season %s (%s) returned %s", season, namespace, last_status)
                continue

            entries = _entries_of(response)
            if entries:
                logger.info(
                    "Season %s (%s) answered with %d entries",
                    season,
                    namespace,
                    len(entries),
                )
                return LeaderboardFetch(
                    region=region,
                    bracket=bracket,
                    season=season,
                    namespace=namespace,
                    entries=tuple(entries),
                    attempted=tuple(attempted),
                )
            # An empty list is a valid answer for this season; move on.
            logger.info("Season %s (%s) has no entries", season, namespace)
            break

    message = (
        f"No data for {region} {bracket} after trying seasons "
        f"[{', '.join(attempted)}]; last status {last_status}"
    )
    if not saw_client_answer:
        raise UpstreamError(
            message,
            f"Blizzard API error after trying seasons [{', '.join(attempted)}]",
            status=last_status,
            attempted=attempted,
            status_code=500,
        )
    raise NotFoundError(
        message,
        f"No leaderboard data found after trying seasons [{', '.join(attempted)}]",
        attempted=attempted,
        last_status=last_status,
    )


def normalize_entry(raw: Dict[str, Any], position: int) -> PlayerEntry:
    """Map one upstream leaderboard entry onto ``PlayerEntry``.

    ``position`` is the zero-based index in the upstream list and stands in
    for a missing rank.
    """

    rank = as_int(first_present(raw, "rank", "position"), None)
    if not rank or rank < 1:
        rank = position + 1

    name = localized(first_present(raw, "character.name", "name", "player"))
    race = localized(first_present(raw, "character.race.name", "race.name", "race"))
    realm_value = first_present(
        raw, "character.realm.name", "realm.name", "character.realm.slug", "realm", "server"
    )
    faction_type = first_present(raw, "character.faction.type", "faction.type", "faction")

    return PlayerEntry(
        rank=rank,
        player_name=name or f"Player{rank}",
        rating=max(0, as_int(first_present(raw, "rating", "cr", "current_rating"), 0)),
        wins=max(
            0,
            as_int(first_present(raw, "season_match_statistics.won", "wins", "season_wins", "w"), 0),
        ),
        losses=max(
            0,
            as_int(
                first_present(raw, "season_match_statistics.lost", "losses", "season_losses", "l"),
                0,
            ),
        ),
        character_class=localized(
            first_present(
                raw,
                "character.character_class.name",
                "character.playable_class.name",
                "character.class",
                "class",
            )
        )
        or UNKNOWN,
        race=race or UNKNOWN,
        spec=localized(first_present(raw, "character.active_spec.name", "spec")) or UNKNOWN,
        realm=localized(realm_value) or UNKNOWN,
        realm_slug=first_present(raw, "character.realm.slug", "realm.slug"),
        faction=faction_for(race, faction_type if isinstance(faction_type, str) else None),
    )


def sort_by_rating(entries: Iterable[PlayerEntry]) -> List[PlayerEntry]:
    """Rating descending; ``sorted`` is stable so ties keep upstream order."""

    return sorted(entries, key=lambda entry: entry.rating, reverse=True)


def build_snapshot(
    fetch: LeaderboardFetch, entries: Optional[Sequence[PlayerEntry]] = None, enriched: int = 0
) -> LeaderboardSnapshot:
    if entries is None:
        entries = [normalize_entry(raw, idx) for idx, raw in enumerate(fetch.entries)]
    return LeaderboardSnapshot(
        region=fetch.region,
        bracket=fetch.bracket,
        season=fetch.season,
        entries=tuple(sort_by_rating(entries)),
        fetched_at=datetime.now(timezone.utc),
        enriched=enriched,
    )


__all__ = [
    "build_snapshot",
    "fetch_leaderboard",
    "normalize_entry",
    "season_candidates",
    "sort_by_rating",
]
