"""WoW arena ladder API: leaderboard proxy, enrichment and title cutoffs."""

__version__ = "0.1.0"
