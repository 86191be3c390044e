# signer.py - Request signing for Binance signed (USER_DATA / TRADE) endpoints.
"""
Turns a parameter bag into a signed, transport-ready query string.

Binance recomputes HMAC-SHA256 over the exact query string it receives,
so keys are emitted in insertion order and never sorted:

    symbol=BTCUSDT&side=BUY&type=LIMIT&recvWindow=5000&timestamp=...&signature=...

Apart from the clock and the Settings value passed in, nothing here does I/O.
"""

import hashlib
import hmac
import json
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping
from urllib.parse import quote

from config import PRODUCTION_URL, TESTNET_URL, Settings
from models import Credentials
from services.errors import MissingCredentials
from services.time_utils import now_ms

# Same unreserved set as JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"

# Appended by build_signed_query, never taken from the caller
_RESERVED_KEYS = ("recvWindow", "timestamp", "signature")


def resolve_credentials(settings: Settings) -> Credentials:
    """
    Return the configured key pair.

    Raises:
        MissingCredentials: If either value is absent or empty
    """
    if not settings.api_key or not settings.secret_key:
        raise MissingCredentials()
    return Credentials(api_key=settings.api_key, secret_key=settings.secret_key)


def resolve_endpoint_root(settings: Settings) -> str:
    """Base URL for the active environment (production or testnet)."""
    if settings.base_url:
        return settings.base_url.rstrip("/")
    return TESTNET_URL if settings.testnet else PRODUCTION_URL


def _encode(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def _format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        # Plain decimal, the venue rejects exponent notation (1e-07)
        return format(Decimal(repr(value)), "f")
    if isinstance(value, Enum):
        return _encode(str(value.value))
    if isinstance(value, str):
        # Space, & and # stay inside the value
        return _encode(value)
    return str(value)


def _format_list_pair(key: str, values: list | tuple) -> str:
    items = [v.value if isinstance(v, Enum) else v for v in values]
    rendered = json.dumps(items, separators=(",", ":"))
    # The whole key=[...] pair is encoded as one unit
    return _encode(f"{key}={rendered}")


def serialize_parameters(params: Mapping[str, Any]) -> str:
    """
    Build a query string from a parameter bag, preserving insertion order.

    String values are percent-encoded. For list values the whole pair is
    rendered as compact JSON and percent-encoded, e.g.
    symbols=["BTCUSDT","ETHUSDT"] -> symbols%3D%5B%22BTCUSDT%22%2C%22ETHUSDT%22%5D
    """
    parts = []
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            parts.append(_format_list_pair(key, value))
        else:
            parts.append(f"{key}={_format_scalar(value)}")
    return "&".join(parts)


def sign(query_string: str, secret_key: str) -> str:
    """HMAC-SHA256 of the query string keyed by the secret, lowercase hex."""
    return hmac.new(
        secret_key.encode("utf-8"),
        query_string.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def build_signed_query(
    params: Mapping[str, Any],
    secret_key: str,
    recv_window: int = 5000,
) -> str:
    """
    Append recvWindow and a fresh timestamp, then sign.

    The timestamp is read from the clock on every call; callers cannot
    supply one.

    Returns:
        "<params>&recvWindow=<R>&timestamp=<T>&signature=<hex>"
    """
    signed_params = {k: v for k, v in params.items() if k not in _RESERVED_KEYS}
    signed_params["recvWindow"] = recv_window
    signed_params["timestamp"] = now_ms()

    query_string = serialize_parameters(signed_params)
    signature = sign(query_string, secret_key)

    return f"{query_string}&signature={signature}"
