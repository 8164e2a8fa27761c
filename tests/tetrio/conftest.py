import pytest
from unittest.mock import AsyncMock, MagicMock
from pytest_asyncio import fixture as async_fixture

from tetra_channel.core.httpx_client import HTTPClient
from tetra_channel.tetrio.api_client import TetrioClient

PAYLOAD = '{"success":true,"data":{}}'


@pytest.fixture
def http_mock():
    """HTTPClient simulé : get() retourne un corps JSON brut."""
    http = MagicMock(spec=HTTPClient)
    http.get = AsyncMock(return_value=PAYLOAD)
    http.aclose = AsyncMock()
    return http


@pytest.fixture
def tetrio_client(http_mock):
    return TetrioClient(http_client=http_mock)


@async_fixture
async def closed_client(http_mock):
    """Client déjà fermé."""
    client = TetrioClient(http_client=http_mock)
    await client.aclose()
    return client
