"""Service layer helpers."""

from .battlenet import BattleNetClient
from .cache import TTLCache
from .cutoffs import cutoffs_to_dict, resolve_cutoffs
from .ladder import LadderService
from .pagination import get_page, get_window

__all__ = [
    "BattleNetClient",
    "LadderService",
    "TTLCache",
    "cutoffs_to_dict",
    "get_page",
    "get_window",
    "resolve_cutoffs",
]
