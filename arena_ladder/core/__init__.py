"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    APP_DEBUG,
    AUTHORITATIVE_CUTOFF_CACHE_TTL,
    BLIZZARD_CLIENT_ID,
    BLIZZARD_CLIENT_SECRET,
    CACHE_MAX_ENTRIES,
    CHARACTER_CACHE_TTL,
    CUTOFF_CACHE_TTL,
    DEFAULT_SEASON,
    ENRICH_BATCH_DELAY,
    ENRICH_BATCH_SIZE,
    ENRICH_TOP_N,
    FALLBACK_SEASONS,
    LEADERBOARD_CACHE_TTL,
    LOG_LEVEL,
    UPSTREAM_TIMEOUT,
)
from .errors import (
    ArenaLadderError,
    AuthError,
    ConfigurationError,
    NoCutoffDataError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from .logging import setup_logging

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "APP_DEBUG",
    "AUTHORITATIVE_CUTOFF_CACHE_TTL",
    "BLIZZARD_CLIENT_ID",
    "BLIZZARD_CLIENT_SECRET",
    "CACHE_MAX_ENTRIES",
    "CHARACTER_CACHE_TTL",
    "CUTOFF_CACHE_TTL",
    "DEFAULT_SEASON",
    "ENRICH_BATCH_DELAY",
    "ENRICH_BATCH_SIZE",
    "ENRICH_TOP_N",
    "FALLBACK_SEASONS",
    "LEADERBOARD_CACHE_TTL",
    "LOG_LEVEL",
    "UPSTREAM_TIMEOUT",
    "ArenaLadderError",
    "AuthError",
    "ConfigurationError",
    "NoCutoffDataError",
    "NotFoundError",
    "UpstreamError",
    "ValidationError",
    "setup_logging",
]
