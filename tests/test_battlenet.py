import base64

import pytest

from arena_ladder.core.errors import AuthError, ConfigurationError, ValidationError
from arena_ladder.services import BattleNetClient


async def test_acquire_token_uses_basic_client_credentials(client, upstream):
    token = await client.acquire_token("eu")

    assert token == "tok"
    request = upstream.requests[0]
    assert request.method == "POST"
    assert request.url.host == "eu.battle.net"
    expected = base64.b64encode(b"client-id:client-secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert request.content == b"grant_type=client_credentials"


async def test_acquire_token_rejects_unsuccessful_response(client, upstream):
    upstream.token_response = (401, {"error": "invalid_client"})

    with pytest.raises(AuthError):
        await client.acquire_token("us")


async def test_acquire_token_requires_access_token_field(client, upstream):
    upstream.token_response = (200, {"token_type": "bearer"})

    with pytest.raises(AuthError):
        await client.acquire_token("us")


async def test_acquire_token_wraps_transport_errors(client, upstream):
    upstream.raise_on = "/oauth/token"

    with pytest.raises(AuthError):
        await client.acquire_token("us")


async def test_acquire_token_validates_region_before_network(client, upstream):
    with pytest.raises(ValidationError):
        await client.acquire_token("kr")
    assert upstream.requests == []


def test_missing_credentials_is_a_configuration_error():
    with pytest.raises(ConfigurationError) as exc_info:
        BattleNetClient("", "secret")
    assert exc_info.value.status_code == 500


async def test_api_get_sends_namespace_and_bearer(client, upstream):
    response = await client.api_get("us", "tok", "/data/wow/pvp-season/12", "dynamic-classic-us")

    assert response.status_code == 404
    request = upstream.requests[0]
    assert request.url.host == "us.api.blizzard.com"
    assert request.url.params["namespace"] == "dynamic-classic-us"
    assert request.url.params["locale"] == "en_US"
    assert request.headers["Authorization"] == "Bearer tok"
