"""Application settings and environment helpers."""

from __future__ import annotations

import os
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Battle.net client credentials ----------------------------------------------
# Missing credentials are reported per request as a configuration error.
BLIZZARD_CLIENT_ID = os.getenv("BLIZZARD_CLIENT_ID", "")
BLIZZARD_CLIENT_SECRET = os.getenv("BLIZZARD_CLIENT_SECRET", "")


# CORS -----------------------------------------------------------------------
# FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
_frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))
_additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

ALLOWED_CORS_ORIGINS = _unique([*_frontend_origins, *_additional_origins]) or ["*"]


# Runtime behaviour ----------------------------------------------------------
APP_DEBUG = _env_bool("APP_DEBUG", False)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DEFAULT_SEASON = os.getenv("DEFAULT_SEASON", "12")
FALLBACK_SEASONS = _split_csv(os.getenv("FALLBACK_SEASONS")) or [
    "1",
    "12",
    "13",
    "14",
    "15",
]

UPSTREAM_TIMEOUT = _env_float("UPSTREAM_TIMEOUT", 20.0)

ENRICH_TOP_N = _env_int("ENRICH_TOP_N", 50)
ENRICH_BATCH_SIZE = _env_int("ENRICH_BATCH_SIZE", 8)
ENRICH_BATCH_DELAY = _env_float("ENRICH_BATCH_DELAY", 0.25)


# Caching (seconds) ----------------------------------------------------------
LEADERBOARD_CACHE_TTL = _env_int("LEADERBOARD_CACHE_TTL", 300)
CUTOFF_CACHE_TTL = _env_int("CUTOFF_CACHE_TTL", 300)
AUTHORITATIVE_CUTOFF_CACHE_TTL = _env_int("AUTHORITATIVE_CUTOFF_CACHE_TTL", 3600)
CHARACTER_CACHE_TTL = _env_int("CHARACTER_CACHE_TTL", 600)
CACHE_MAX_ENTRIES = _env_int("CACHE_MAX_ENTRIES", 256)


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
]
