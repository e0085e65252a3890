"""
Battle.net API client
Client-credential token issuance and authenticated GETs against the game data
and profile APIs.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..core.errors import AuthError, ConfigurationError
from .validation import validate_region

logger = logging.getLogger(__name__)

TOKEN_URL = "https://{region}.battle.net/oauth/token"
API_BASE = "https://{region}.api.blizzard.com"
LOCALE = "en_US"
USER_AGENT = "WoW-Arena-Ladder/1.0"


def dynamic_namespaces(region: str) -> tuple[str, str]:
    """Classic namespace first, retail second."""

    return f"dynamic-classic-{region}", f"dynamic-{region}"


def profile_namespace(region: str) -> str:
    return f"profile-classic-{region}"


class BattleNetClient:
    """Thin async wrapper over the Battle.net OAuth and data endpoints.

    A fresh ``httpx.AsyncClient`` is opened per call; ``transport`` lets tests
    route every request through an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not client_id or not client_secret:
            raise ConfigurationError(
                "BLIZZARD_CLIENT_ID and BLIZZARD_CLIENT_SECRET must be set",
                "Missing Blizzard API credentials. Please set BLIZZARD_CLIENT_ID "
                "and BLIZZARD_CLIENT_SECRET environment variables.",
            )
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def acquire_token(self, region: str) -> str:
        """Exchange client credentials for a bearer token in ``region``."""

        region = validate_region(region)
        try:
            async with self._client() as client:
                response = await client.post(
                    TOKEN_URL.format(region=region),
                    data={"grant_type": "client_credentials"},
                    auth=httpx.BasicAuth(self.client_id, self.client_secret),
                )
        except httpx.HTTPError as exc:
            logger.error("Token request for %s failed: %s", region, exc)
            raise AuthError(region, str(exc)) from exc

        if not response.is_success:
            logger.error(
                "Token request for %s returned %s: %s",
                region,
                response.status_code,
                response.text[:200],
            )
            raise AuthError(region, f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise AuthError(region, "token response is not JSON") from exc

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token or not isinstance(token, str):
            raise AuthError(region, "token response has no access_token")
        return token

    async def api_get(
        self,
        region: str,
        access_token: str,
        path: str,
        namespace: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make an authenticated GET; the caller interprets the status."""

        query: Dict[str, Any] = {"namespace": namespace, "locale": LOCALE}
        query.update(params or {})
        async with self._client() as client:
            return await client.get(
                f"{API_BASE.format(region=region)}{path}",
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Battlenet-Namespace": namespace,
                    "User-Agent": USER_AGENT,
                },
                params=query,
            )


__all__ = [
    "API_BASE",
    "BattleNetClient",
    "TOKEN_URL",
    "dynamic_namespaces",
    "profile_namespace",
]
