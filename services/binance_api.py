# services/binance_api.py - Raw Binance spot REST calls.
"""
Async Binance REST client.

This module only moves bytes: it sends an already-built query string to
`<endpoint root><path>` and decodes the reply. Signing lives in signer.py,
operation rules in tools/trading_tools.py.

No retries and no rate limiting: one call in, one HTTP request out.

Usage:
    api = BinanceAPI(settings)

    data = await api.request("GET", "/api/v3/account", signed_query, api_key=key)

    await api.close()
"""

import asyncio
import json
from typing import Any, Optional

import aiohttp
from yarl import URL

from config import Settings
from services.errors import TransportError, VenueRejection
from services.signer import resolve_endpoint_root


class BinanceAPI:
    """
    Async Binance spot REST client.

    Signed calls pass the API key, which is sent in the X-MBX-APIKEY header.
    Public (market data) calls pass no key and carry no header.
    """

    API_KEY_HEADER = "X-MBX-APIKEY"

    def __init__(self, settings: Settings, session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize API client.

        Args:
            settings: Process settings (endpoint flag, proxy)
            session: Optional externally managed aiohttp session
        """
        self.settings = settings
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session if this client opened it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    def url_for(self, path: str, query_string: str = "") -> str:
        """Full request URL for a path on the active endpoint root."""
        url = f"{resolve_endpoint_root(self.settings)}{path}"
        if query_string:
            url += f"?{query_string}"
        return url

    async def request(
        self,
        method: str,
        path: str,
        query_string: str = "",
        api_key: Optional[str] = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        The query string goes out byte-for-byte, since the venue verifies
        the signature against exactly what it receives.

        Args:
            method: GET / POST / DELETE
            path: API path, e.g. "/api/v3/order"
            query_string: Pre-built (and usually signed) query string
            api_key: Sent as X-MBX-APIKEY when given

        Returns:
            Decoded JSON body (dict or list)

        Raises:
            TransportError: Network failure or HTTP status >= 400
            VenueRejection: 2xx reply carrying a venue error code
        """
        session = await self._get_session()
        url = URL(self.url_for(path, query_string), encoded=True)

        headers = {}
        if api_key:
            headers[self.API_KEY_HEADER] = api_key

        try:
            async with session.request(
                method.upper(),
                url,
                headers=headers,
                proxy=self.settings.proxy_url,
            ) as response:
                text = await response.text()
                payload = _decode_body(text)
                print(f"   [Binance] {method.upper()} {path} -> {response.status}")

                if response.status >= 400:
                    message = _venue_message(payload) or f"Request failed with status code {response.status}"
                    raise TransportError(message, status=response.status, code=_venue_code(payload))

                code = _venue_code(payload)
                if code is not None and code < 0 and _venue_message(payload):
                    raise VenueRejection(_venue_message(payload), status=response.status, code=code)

                return payload

        except aiohttp.ClientError as e:
            raise TransportError(str(e) or type(e).__name__) from e
        except asyncio.TimeoutError as e:
            raise TransportError(f"Request to {path} timed out") from e


def _decode_body(text: str) -> Any:
    if not text:
        return {}
    try:
        return json.loads(text)
    except ValueError:
        return text


def _venue_message(payload: Any) -> str | None:
    """Binance error bodies look like {"code": -1121, "msg": "Invalid symbol."}."""
    if isinstance(payload, dict):
        msg = payload.get("msg")
        if msg:
            return str(msg)
    return None


def _venue_code(payload: Any) -> int | None:
    if isinstance(payload, dict) and isinstance(payload.get("code"), int):
        return payload["code"]
    return None
