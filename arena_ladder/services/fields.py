"""Helpers for reading upstream payloads whose shape drifts between endpoints."""

from __future__ import annotations

from typing import Any, Optional

_MISSING = object()


def _walk(obj: Any, path: str) -> Any:
    node = obj
    for part in path.split("."):
        if isinstance(node, dict):
            node = node.get(part, _MISSING)
        elif isinstance(node, (list, tuple)) and part.isdigit():
            index = int(part)
            node = node[index] if index < len(node) else _MISSING
        else:
            return _MISSING
        if node is _MISSING or node is None:
            return _MISSING
    return node


def first_present(obj: Any, *paths: str, default: Any = None) -> Any:
    """Return the value at the first dotted path that resolves to a usable value.

    ``None`` and empty strings count as missing, so ``first_present(reward,
    "rating", "cutoff_rating", "min_rating")`` picks whichever field the
    current upstream schema happens to populate.
    """

    for path in paths:
        value = _walk(obj, path)
        if value is _MISSING or value == "":
            continue
        return value
    return default


def localized(value: Any, locale: str = "en_US") -> Optional[str]:
    """Flatten a name that may be a plain string or a ``{locale: text}`` map."""

    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        text = value.get(locale)
        if text:
            return str(text)
        for candidate in value.values():
            if isinstance(candidate, str) and candidate:
                return candidate
    return None


def as_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


__all__ = ["as_int", "first_present", "localized"]
