from __future__ import annotations

import asyncio
from typing import Any

import pytest
from aiohttp import web
from aiohttp import test_utils

from config import PRODUCTION_URL, TESTNET_URL, Settings
from services.binance_api import BinanceAPI
from services.errors import TransportError, VenueRejection

SIGNED_QUERY = "symbols=%5B%22BTCUSDT%22%2C%22ETHUSDT%22%5D&recvWindow=5000&timestamp=1&signature=abc"


def make_app(seen: list[dict[str, Any]], status: int = 200, body: str = '{"ok": true}') -> web.Application:
    async def handler(request: web.Request) -> web.Response:
        seen.append({
            "method": request.method,
            "path": request.path,
            "raw_query": request.raw_path.partition("?")[2],
            "api_key": request.headers.get("X-MBX-APIKEY"),
        })
        return web.Response(status=status, text=body, content_type="application/json")

    app = web.Application()
    app.router.add_route("*", "/api/v3/{tail:.*}", handler)
    return app


async def call_server(app: web.Application, method: str, path: str, query: str = "", api_key: str | None = None):
    server = test_utils.TestServer(app)
    await server.start_server()
    api = BinanceAPI(Settings(base_url=f"http://{server.host}:{server.port}"))
    try:
        return await api.request(method, path, query, api_key=api_key)
    finally:
        await api.close()
        await server.close()


def test_signed_request_sends_header_and_exact_query() -> None:
    seen: list[dict[str, Any]] = []

    data = asyncio.run(call_server(make_app(seen), "GET", "/api/v3/account", SIGNED_QUERY, api_key="my-key"))

    assert data == {"ok": True}
    assert seen == [{
        "method": "GET",
        "path": "/api/v3/account",
        "raw_query": SIGNED_QUERY,
        "api_key": "my-key",
    }]


def test_unsigned_request_has_no_api_key_header() -> None:
    seen: list[dict[str, Any]] = []

    asyncio.run(call_server(make_app(seen), "GET", "/api/v3/ping"))

    assert seen[0]["api_key"] is None
    assert seen[0]["raw_query"] == ""


@pytest.mark.parametrize("method", ["POST", "DELETE"])
def test_methods_are_forwarded(method: str) -> None:
    seen: list[dict[str, Any]] = []
    asyncio.run(call_server(make_app(seen), method, "/api/v3/order", "symbol=BTCUSDT", api_key="k"))
    assert seen[0]["method"] == method


def test_http_error_uses_venue_message() -> None:
    app = make_app([], status=400, body='{"code": -1121, "msg": "Invalid symbol."}')

    with pytest.raises(TransportError) as exc:
        asyncio.run(call_server(app, "GET", "/api/v3/order", "symbol=NOPE", api_key="k"))

    assert str(exc.value) == "Invalid symbol."
    assert exc.value.status == 400
    assert exc.value.code == -1121
    assert not isinstance(exc.value, VenueRejection)


def test_http_error_without_body() -> None:
    app = make_app([], status=502, body="")

    with pytest.raises(TransportError, match="Request failed with status code 502"):
        asyncio.run(call_server(app, "GET", "/api/v3/account", api_key="k"))


def test_success_envelope_with_error_code() -> None:
    app = make_app([], status=200, body='{"code": -2010, "msg": "Account has insufficient balance."}')

    with pytest.raises(VenueRejection, match="insufficient balance"):
        asyncio.run(call_server(app, "POST", "/api/v3/order", "symbol=BTCUSDT", api_key="k"))


def test_empty_success_body_decodes_to_empty_dict() -> None:
    app = make_app([], status=200, body="")
    assert asyncio.run(call_server(app, "POST", "/api/v3/order/test", "symbol=BTCUSDT", api_key="k")) == {}


def test_connection_failure_is_transport_error() -> None:
    async def go():
        # Nothing listens on port 1
        api = BinanceAPI(Settings(base_url="http://127.0.0.1:1"))
        try:
            await api.request("GET", "/api/v3/account", "timestamp=1", api_key="k")
        finally:
            await api.close()

    with pytest.raises(TransportError):
        asyncio.run(go())


def test_testnet_flag_only_changes_root() -> None:
    prod = BinanceAPI(Settings())
    test = BinanceAPI(Settings(testnet=True))

    assert prod.url_for("/api/v3/order", "a=1") == f"{PRODUCTION_URL}/api/v3/order?a=1"
    assert test.url_for("/api/v3/order", "a=1") == f"{TESTNET_URL}/api/v3/order?a=1"
    assert prod.url_for("/api/v3/account") == f"{PRODUCTION_URL}/api/v3/account"


class RecordingResponse:
    status = 200

    async def text(self) -> str:
        return "{}"

    async def __aenter__(self) -> "RecordingResponse":
        return self

    async def __aexit__(self, *exc) -> None:
        return None


class RecordingSession:
    """Stands in for aiohttp.ClientSession and keeps the request kwargs."""

    closed = False

    def __init__(self):
        self.requests: list[dict[str, Any]] = []

    def request(self, method: str, url, **kwargs: Any) -> RecordingResponse:
        self.requests.append({"method": method, "url": str(url), **kwargs})
        return RecordingResponse()


def test_proxy_is_passed_to_session() -> None:
    session = RecordingSession()
    api = BinanceAPI(Settings(proxy_url="http://proxy.local:3128"), session=session)

    asyncio.run(api.request("GET", "/api/v3/account", "timestamp=1", api_key="k"))

    assert session.requests[0]["proxy"] == "http://proxy.local:3128"
    assert session.requests[0]["url"] == f"{PRODUCTION_URL}/api/v3/account?timestamp=1"


def test_no_proxy_by_default() -> None:
    session = RecordingSession()
    api = BinanceAPI(Settings(), session=session)

    asyncio.run(api.request("GET", "/api/v3/account", "timestamp=1", api_key="k"))

    assert session.requests[0]["proxy"] is None


def test_proxy_from_environment_reaches_session() -> None:
    session = RecordingSession()
    settings = Settings.from_env({"HTTPS_PROXY": "http://secure-proxy.local:8443"})

    asyncio.run(BinanceAPI(settings, session=session).request("GET", "/api/v3/ping"))

    assert session.requests[0]["proxy"] == "http://secure-proxy.local:8443"
