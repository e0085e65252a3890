"""Page and window slicing over a snapshot."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..models import Page, PlayerEntry, Window
from .validation import validate_page_size, validate_skip


def _reranked(entries: Sequence[PlayerEntry], offset: int) -> List[PlayerEntry]:
    return [
        entry if entry.rank == offset + idx + 1 else entry.model_copy(update={"rank": offset + idx + 1})
        for idx, entry in enumerate(entries)
    ]


def total_pages(total: int, page_size: int) -> int:
    return max(1, -(-total // page_size))


def get_page(entries: Sequence[PlayerEntry], page: int, page_size: int) -> Page:
    """Return page ``page`` (1-based, clamped) of ``page_size`` entries.

    Ranks in the slice are recomputed from the slice position, so they stay
    consistent even when the upstream rank field is stale.
    """

    page_size = validate_page_size(page_size)
    pages = total_pages(len(entries), page_size)
    page = min(max(1, page), pages)
    offset = (page - 1) * page_size
    return Page(
        entries=_reranked(entries[offset : offset + page_size], offset),
        page=page,
        page_size=page_size,
        total_pages=pages,
        total_count=len(entries),
    )


def get_window(entries: Sequence[PlayerEntry], skip: int = 0, limit: Optional[int] = None) -> Window:
    """``skip``/``limit`` slice; ``limit=None`` runs to the end."""

    skip = validate_skip(skip)
    if limit is not None:
        limit = validate_page_size(limit)
    end = len(entries) if limit is None else skip + limit
    return Window(
        entries=_reranked(entries[skip:end], skip),
        total=len(entries),
        limit=limit,
        skip=skip,
        has_more=end < len(entries),
    )


__all__ = ["get_page", "get_window", "total_pages"]
