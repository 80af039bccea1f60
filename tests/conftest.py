"""Fixtures for SolarLog Online tests."""

from collections.abc import AsyncIterator, Iterator

import aiohttp
from aioresponses import aioresponses
import pytest

from solarlog_online import SolarLogOnline

PORTAL = "demo"
BASE_URL = "https://api.enerest.world/api/v1/demo"
TOKEN_URL = (
    "https://auth.enerest.world/auth/realms/quotaapi/protocol/openid-connect/token"
)


@pytest.fixture
def mock_api() -> Iterator[aioresponses]:
    with aioresponses() as m:
        yield m


@pytest.fixture
async def session() -> AsyncIterator[aiohttp.ClientSession]:
    async with aiohttp.ClientSession() as client_session:
        yield client_session


@pytest.fixture
def client(session: aiohttp.ClientSession) -> SolarLogOnline:
    return SolarLogOnline(PORTAL, session)


@pytest.fixture
async def logged_in_client(
    client: SolarLogOnline, mock_api: aioresponses
) -> SolarLogOnline:
    mock_api.post(TOKEN_URL, payload={"access_token": "tok", "expires_in": 300})
    await client.async_login("my-id", "my-secret")
    return client
