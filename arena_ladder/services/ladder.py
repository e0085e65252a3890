"""Request-level orchestration: snapshots, pages, cutoffs and character details."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

import httpx

from ..core import config
from ..core.errors import AuthError, ValidationError
from ..models import CutoffSet, CutoffSource, LeaderboardSnapshot, Page, Window
from .battlenet import BattleNetClient
from .cache import TTLCache
from .characters import character_slug, enrich_entries, fetch_character_details, realm_slug
from .cutoffs import fetch_reward_data, resolve_cutoffs
from .leaderboards import build_snapshot, fetch_leaderboard
from .pagination import get_page, get_window
from .validation import (
    validate_bracket,
    validate_page_size,
    validate_region,
    validate_season,
    validate_skip,
)

logger = logging.getLogger(__name__)


class LadderService:
    """Fetches, enriches and caches leaderboard data for the HTTP layer."""

    def __init__(
        self,
        client: BattleNetClient,
        default_season: str = "12",
        fallback_seasons: Sequence[str] = ("1", "12", "13", "14", "15"),
        enrich_top_n: int = 50,
        enrich_batch_size: int = 8,
        enrich_batch_delay: float = 0.25,
        leaderboard_ttl: float = 300,
        cutoff_ttl: float = 300,
        authoritative_cutoff_ttl: float = 3600,
        character_ttl: float = 600,
        max_entries: int = 256,
    ):
        self.client = client
        self.default_season = default_season
        self.fallback_seasons = list(fallback_seasons)
        self.enrich_top_n = enrich_top_n
        self.enrich_batch_size = enrich_batch_size
        self.enrich_batch_delay = enrich_batch_delay
        self.cutoff_ttl = cutoff_ttl
        self.authoritative_cutoff_ttl = authoritative_cutoff_ttl

        self.snapshots: TTLCache[LeaderboardSnapshot] = TTLCache(leaderboard_ttl, max_entries)
        self.pages: TTLCache[Tuple[LeaderboardSnapshot, Page]] = TTLCache(
            leaderboard_ttl, max_entries
        )
        self.cutoffs: TTLCache[CutoffSet] = TTLCache(cutoff_ttl, max_entries)
        self.characters: TTLCache[Dict[str, Any]] = TTLCache(character_ttl, max_entries)

    @classmethod
    def from_config(cls, transport: Optional[httpx.AsyncBaseTransport] = None) -> "LadderService":
        client = BattleNetClient(
            config.BLIZZARD_CLIENT_ID,
            config.BLIZZARD_CLIENT_SECRET,
            timeout=config.UPSTREAM_TIMEOUT,
            transport=transport,
        )
        return cls(
            client,
            default_season=config.DEFAULT_SEASON,
            fallback_seasons=config.FALLBACK_SEASONS,
            enrich_top_n=config.ENRICH_TOP_N,
            enrich_batch_size=config.ENRICH_BATCH_SIZE,
            enrich_batch_delay=config.ENRICH_BATCH_DELAY,
            leaderboard_ttl=config.LEADERBOARD_CACHE_TTL,
            cutoff_ttl=config.CUTOFF_CACHE_TTL,
            authoritative_cutoff_ttl=config.AUTHORITATIVE_CUTOFF_CACHE_TTL,
            character_ttl=config.CHARACTER_CACHE_TTL,
            max_entries=config.CACHE_MAX_ENTRIES,
        )

    def _scope(self, region: str, bracket: str, season: Optional[str]) -> Tuple[str, str, str]:
        return (
            validate_region(region),
            validate_bracket(bracket),
            validate_season(season, self.default_season),
        )

    # Snapshots ------------------------------------------------------------

    async def get_snapshot(
        self, region: str, bracket: str, season: Optional[str] = None, enrich: bool = True
    ) -> LeaderboardSnapshot:
        region, bracket, season = self._scope(region, bracket, season)

        async def _load() -> LeaderboardSnapshot:
            return await self._load_snapshot(region, bracket, season, enrich)

        return await self.snapshots.get_or_load((region, bracket, season, enrich), _load)

    async def _load_snapshot(
        self, region: str, bracket: str, season: str, enrich: bool
    ) -> LeaderboardSnapshot:
        token = await self.client.acquire_token(region)
        fetch = await fetch_leaderboard(
            self.client, token, region, bracket, season, self.fallback_seasons
        )
        snapshot = build_snapshot(fetch)
        if not enrich or self.enrich_top_n <= 0:
            return snapshot

        entries, enriched = await enrich_entries(
            self.client,
            token,
            snapshot.entries,
            region,
            self.enrich_top_n,
            self.enrich_batch_size,
            self.enrich_batch_delay,
        )
        return build_snapshot(fetch, entries, enriched=enriched)

    # Pagination -----------------------------------------------------------

    async def get_page(
        self,
        region: str,
        bracket: str,
        season: Optional[str],
        page: int,
        page_size: int,
    ) -> Tuple[LeaderboardSnapshot, Page]:
        region, bracket, season = self._scope(region, bracket, season)
        page_size = validate_page_size(page_size)

        async def _load() -> Tuple[LeaderboardSnapshot, Page]:
            snapshot = await self.get_snapshot(region, bracket, season)
            return snapshot, get_page(snapshot.entries, page, page_size)

        return await self.pages.get_or_load((region, bracket, season, page, page_size), _load)

    async def get_window(
        self,
        region: str,
        bracket: str,
        season: Optional[str],
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[LeaderboardSnapshot, Window]:
        region, bracket, season = self._scope(region, bracket, season)
        validate_skip(skip)
        if limit is not None:
            validate_page_size(limit)
        snapshot = await self.get_snapshot(region, bracket, season)
        return snapshot, get_window(snapshot.entries, skip, limit)

    # Cutoffs --------------------------------------------------------------

    async def get_cutoffs(
        self, region: str, bracket: str, season: Optional[str] = None
    ) -> CutoffSet:
        region, bracket, season = self._scope(region, bracket, season)

        async def _load() -> CutoffSet:
            snapshot = await self.get_snapshot(region, bracket, season, enrich=False)
            rewards = await self._reward_data(region, snapshot.season, bracket)
            return resolve_cutoffs(
                snapshot.entries,
                rewards,
                bracket=bracket,
                region=region,
                season=snapshot.season,
            )

        return await self.cutoffs.get_or_load(
            (region, bracket, season), _load, ttl_for=self.cache_seconds
        )

    async def _reward_data(self, region: str, season: str, bracket: str) -> Optional[Dict[str, Any]]:
        try:
            token = await self.client.acquire_token(region)
        except AuthError as exc:
            logger.warning("Skipping reward lookup: %s", exc)
            return None
        return await fetch_reward_data(self.client, token, region, season, bracket)

    def cache_seconds(self, cutoffs: CutoffSet) -> int:
        if cutoffs.source is CutoffSource.AUTHORITATIVE:
            return int(self.authoritative_cutoff_ttl)
        return int(self.cutoff_ttl)

    # Characters -----------------------------------------------------------

    async def get_character(self, region: str, realm: str, character: str) -> Dict[str, Any]:
        region = validate_region(region)
        if not realm or not character:
            raise ValidationError(
                "realm and character are required", "Missing required parameters"
            )
        key = (region, realm_slug(realm or ""), character_slug(character or ""))

        async def _load() -> Dict[str, Any]:
            token = await self.client.acquire_token(region)
            return await fetch_character_details(self.client, token, region, realm, character)

        return await self.characters.get_or_load(key, _load)


__all__ = ["LadderService"]
