import logging

import httpx
import pytest

from tetra_channel.core.exceptions import TransportError
from tetra_channel.core.httpx_client import HTTPClient

BASE_URL = "https://ch.tetr.io/"


def make_client(handler) -> HTTPClient:
    """HTTPClient branché sur un httpx.MockTransport"""
    return HTTPClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
class TestHTTPClient:

    async def test_get_returns_raw_text(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text='{"success":true}')

        async with make_client(handler) as http:
            body = await http.get("api/users/lists/league?before=100")

        assert body == '{"success":true}'
        assert str(seen[0].url) == "https://ch.tetr.io/api/users/lists/league?before=100"
        assert seen[0].method == "GET"
        assert seen[0].headers["User-Agent"]

    async def test_leading_slash_is_relative_to_base(self):
        urls = []

        def handler(request):
            urls.append(str(request.url))
            return httpx.Response(200, text="{}")

        async with make_client(handler) as http:
            await http.get("/api/general/stats")

        assert urls == ["https://ch.tetr.io/api/general/stats"]

    async def test_non_success_status_raises(self):
        def handler(request):
            return httpx.Response(404, text='{"success":false,"error":"No such user!"}')

        async with make_client(handler) as http:
            with pytest.raises(TransportError) as exc_info:
                await http.get("api/users/nobody")

        assert exc_info.value.status_code == 404
        assert "No such user" in exc_info.value.body

    async def test_network_error_is_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("connexion refusée", request=request)

        async with make_client(handler) as http:
            with pytest.raises(TransportError) as exc_info:
                await http.get("api/general/stats")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    async def test_aclose_is_idempotent(self):
        http = make_client(lambda request: httpx.Response(200))

        await http.aclose()
        await http.aclose()

        assert http.closed

    async def test_timeout_from_environment(self, monkeypatch):
        monkeypatch.setenv("TETRIO_HTTP_TIMEOUT", "3.5")
        http = make_client(lambda request: httpx.Response(200))
        try:
            assert http._client.timeout.read == 3.5
        finally:
            await http.aclose()

    async def test_request_line_not_logged_by_transport(self, caplog):
        caplog.set_level(logging.DEBUG, logger="tetra_channel.core.httpx_client")

        async with make_client(lambda request: httpx.Response(200, text="{}")) as http:
            await http.get("api/general/stats")

        messages = [record.getMessage() for record in caplog.records if record.name == "tetra_channel.core.httpx_client"]
        assert not any("GET" in message for message in messages)
        assert any("Response 200" in message for message in messages)
