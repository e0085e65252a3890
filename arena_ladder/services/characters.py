"""Character profile lookups and best-effort enrichment of leaderboard entries."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from ..core.errors import ArenaLadderError, NotFoundError, UpstreamError, ValidationError
from ..core.gamedata import UNKNOWN, faction_for
from ..models import PlayerEntry
from .battlenet import BattleNetClient, profile_namespace
from .batching import run_in_batches
from .fields import first_present, localized
from .validation import validate_region

logger = logging.getLogger(__name__)


def realm_slug(realm: str) -> str:
    """``"Mal'Ganis"`` -> ``"malganis"``, ``"Area 52"`` -> ``"area-52"``."""

    value = realm.strip().lower().replace("'", "")
    value = re.sub(r"\s+", "-", value)
    return re.sub(r"[^\w-]", "", value)


def character_slug(name: str) -> str:
    return name.strip().lower()


def _json_or_none(response: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(response, httpx.Response) or not response.is_success:
        return None
    try:
        payload = response.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


async def fetch_character_details(
    client: BattleNetClient,
    access_token: str,
    region: str,
    realm: str,
    character: str,
) -> Dict[str, Any]:
    """Fetch profile and specializations together and merge them.

    The profile is required; a failing specializations call only leaves the
    active spec empty.
    """

    if not realm or not character:
        raise ValidationError("realm and character are required", "Missing required parameters")
    region = validate_region(region)
    realm_key = realm_slug(realm)
    character_key = character_slug(character)

    namespace = profile_namespace(region)
    path = f"/profile/wow/character/{realm_key}/{character_key}"
    profile_response, spec_response = await asyncio.gather(
        client.api_get(region, access_token, path, namespace),
        client.api_get(region, access_token, f"{path}/specializations", namespace),
        return_exceptions=True,
    )

    if isinstance(profile_response, BaseException):
        if not isinstance(profile_response, httpx.HTTPError):
            raise profile_response
        raise UpstreamError(
            f"Character request for {character_key}@{realm_key} failed: {profile_response}"
        ) from profile_response

    if profile_response.status_code == 404:
        raise NotFoundError(
            f"Character {character_key} on {realm_key} ({region}) not found",
            "Character not found",
        )
    if not profile_response.is_success:
        raise UpstreamError(
            f"Character API failed: {profile_response.status_code}",
            status=profile_response.status_code,
        )

    profile = _json_or_none(profile_response)
    if profile is None:
        raise UpstreamError("Character API returned a malformed profile")

    if isinstance(spec_response, BaseException) and not isinstance(
        spec_response, httpx.HTTPError
    ):
        raise spec_response
    specs = _json_or_none(spec_response) or {}
    active = specs.get("active_specialization")
    if active is None:
        logger.debug("No specialization data for %s@%s", character_key, realm_key)

    return {
        "name": profile.get("name"),
        "race": profile.get("race"),
        "character_class": profile.get("character_class"),
        "class": profile.get("character_class"),
        "realm": profile.get("realm"),
        "faction": profile.get("faction"),
        "active_specialization": active,
        "active_spec": active,
        "level": profile.get("level"),
        "guild": profile.get("guild"),
        "last_login_timestamp": profile.get("last_login_timestamp"),
    }


def partial_from_details(details: Dict[str, Any]) -> Dict[str, str]:
    """Pick the display fields enrichment may overlay onto an entry."""

    fields = {
        "character_class": localized(first_present(details, "character_class.name", "class.name")),
        "race": localized(first_present(details, "race.name")),
        "spec": localized(first_present(details, "active_specialization.name", "active_spec.name")),
        "realm": localized(first_present(details, "realm.name")),
        "faction": first_present(details, "faction.type"),
    }
    faction = fields["faction"]
    if faction is not None:
        fields["faction"] = faction_for(None, faction if isinstance(faction, str) else None)
    return {key: value for key, value in fields.items() if value and value != UNKNOWN}


async def enrich(
    client: BattleNetClient, access_token: str, entry: PlayerEntry, region: str
) -> Optional[Dict[str, str]]:
    """Best-effort detail lookup for one entry; ``None`` on any failure."""

    realm = entry.realm_slug or (entry.realm if entry.realm != UNKNOWN else None)
    if not realm:
        return None
    try:
        details = await fetch_character_details(
            client, access_token, region, realm, entry.player_name
        )
    except (ArenaLadderError, httpx.HTTPError) as exc:
        logger.debug("Enrichment skipped for %s@%s: %s", entry.player_name, realm, exc)
        return None
    return partial_from_details(details) or None


def apply_enrichment(entry: PlayerEntry, detail: Optional[Dict[str, str]]) -> PlayerEntry:
    """Overlay detail fields onto ``entry``; fields are only added or replaced."""

    if not detail:
        return entry
    update = dict(detail)
    if "faction" not in update and entry.faction == UNKNOWN:
        resolved = faction_for(update.get("race", entry.race))
        if resolved != UNKNOWN:
            update["faction"] = resolved
    return entry.model_copy(update=update)


async def enrich_entries(
    client: BattleNetClient,
    access_token: str,
    entries: Sequence[PlayerEntry],
    region: str,
    top_n: int,
    batch_size: int,
    delay: float,
) -> Tuple[List[PlayerEntry], int]:
    """Enrich the first ``top_n`` entries; the rest pass through untouched.

    Returns the merged list and how many entries received detail.
    """

    head = list(entries[: max(0, top_n)])
    if not head:
        return list(entries), 0

    async def _one(entry: PlayerEntry) -> Optional[Dict[str, str]]:
        return await enrich(client, access_token, entry, region)

    details = await run_in_batches(head, _one, batch_size, delay)
    merged = [apply_enrichment(entry, detail) for entry, detail in zip(head, details)]
    enriched = sum(1 for detail in details if detail)
    logger.info("Enriched %d of %d leading entries", enriched, len(head))
    return merged + list(entries[len(head) :]), enriched


__all__ = [
    "apply_enrichment",
    "character_slug",
    "enrich",
    "enrich_entries",
    "fetch_character_details",
    "partial_from_details",
    "realm_slug",
]
