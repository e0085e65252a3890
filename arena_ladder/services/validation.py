"""Input validation for region, bracket and pagination parameters."""

from __future__ import annotations

from typing import Optional

from ..core.errors import ValidationError
from ..core.gamedata import BRACKETS, REGIONS

MAX_PAGE_SIZE = 1000


def validate_region(region: Optional[str]) -> str:
    value = (region or "").strip().lower()
    if value not in REGIONS:
        raise ValidationError(
            f"Invalid region {region!r}",
            'Invalid region. Use "us" or "eu"',
        )
    return value


def validate_bracket(bracket: Optional[str]) -> str:
    value = (bracket or "").strip().lower()
    if value not in BRACKETS:
        raise ValidationError(
            f"Invalid bracket {bracket!r}",
            'Invalid bracket. Use "2v2", "3v3", or "5v5"',
        )
    return value


def validate_season(season: Optional[str], default: str) -> str:
    value = (season or "").strip() or default
    if not value.isdigit():
        raise ValidationError(
            f"Invalid season {season!r}", "Invalid season. Use a numeric season id"
        )
    return value


def validate_page_size(page_size: int) -> int:
    if page_size <= 0 or page_size > MAX_PAGE_SIZE:
        raise ValidationError(
            f"Invalid page size {page_size}",
            f"Invalid limit. Must be between 1 and {MAX_PAGE_SIZE}",
        )
    return page_size


def validate_skip(skip: int) -> int:
    if skip < 0:
        raise ValidationError(
            f"Invalid skip {skip}", "Invalid skip. Must be 0 or greater"
        )
    return skip


__all__ = [
    "MAX_PAGE_SIZE",
    "validate_bracket",
    "validate_page_size",
    "validate_region",
    "validate_season",
    "validate_skip",
]
