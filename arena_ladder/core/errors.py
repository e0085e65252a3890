"""
Error taxonomy for the ladder API.

Every error carries an internal message (logged, and exposed only in debug
mode), a short user-facing message and the HTTP status it maps to.
"""

from __future__ import annotations

from typing import Optional, Sequence


class ArenaLadderError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.user_message = user_message or message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ArenaLadderError):
    """Raised for bad region, bracket or pagination input."""

    status_code = 400


class ConfigurationError(ArenaLadderError):
    """Raised when the process lacks required configuration."""

    status_code = 500


class AuthError(ArenaLadderError):
    """Raised when an upstream access token cannot be obtained."""

    status_code = 500

    def __init__(self, region: str, details: str, status_code: Optional[int] = None):
        super().__init__(
            f"Token request for {region} failed: {details}",
            "Failed to get access token",
            status_code,
        )
        self.region = region


class NotFoundError(ArenaLadderError):
    """Raised when no season or character produced data."""

    status_code = 404

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        attempted: Sequence[str] = (),
        last_status: Optional[int] = None,
    ):
        super().__init__(message, user_message)
        self.attempted = list(attempted)
        self.last_status = last_status


class UpstreamError(ArenaLadderError):
    """Raised on unexpected upstream failures."""

    status_code = 502

    def __init__(
        self,
        message: str,
        user_message: str = "Blizzard API error",
        status: Optional[int] = None,
        attempted: Sequence[str] = (),
        status_code: Optional[int] = None,
    ):
        super().__init__(message, user_message, status_code)
        self.status = status
        self.attempted = list(attempted)


class NoCutoffDataError(ArenaLadderError):
    """Raised when there are no players to compute cutoffs from."""

    status_code = 404

    def __init__(self, message: str = "No leaderboard data to compute cutoffs from"):
        super().__init__(message, "No cutoff data available")


__all__ = [
    "ArenaLadderError",
    "AuthError",
    "ConfigurationError",
    "NoCutoffDataError",
    "NotFoundError",
    "UpstreamError",
    "ValidationError",
]
