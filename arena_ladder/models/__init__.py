"""Data model exports."""

from .cutoff import CutoffSet, CutoffSource, CutoffTier
from .leaderboard import LeaderboardFetch, LeaderboardSnapshot, Page, Window
from .player import PlayerEntry

__all__ = [
    "CutoffSet",
    "CutoffSource",
    "CutoffTier",
    "LeaderboardFetch",
    "LeaderboardSnapshot",
    "Page",
    "PlayerEntry",
    "Window",
]
