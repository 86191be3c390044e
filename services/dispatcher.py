# dispatcher.py - The single authenticated-call pipeline behind every trading tool.
"""
All signed tools go through authenticated_call():

    credentials -> validate -> drop absent values -> sign -> one HTTP call -> normalize

The outcome is always a ToolResult. Failures become
"Failed to <action>: <message>" with is_error=True; nothing is raised to
the host and nothing is retried.
"""

import traceback
from typing import Any, Callable

from config import Settings
from models import ToolResult
from services.binance_api import BinanceAPI
from services.errors import ToolError
from services.signer import build_signed_query, resolve_credentials

Validator = Callable[[dict[str, Any]], None]
Transform = Callable[[Any, dict[str, Any]], Any]


def drop_absent(params: dict[str, Any]) -> dict[str, Any]:
    """Remove keys whose value is None. Present lists are kept as-is."""
    return {k: v for k, v in params.items() if v is not None}


async def authenticated_call(
    settings: Settings,
    api: BinanceAPI,
    *,
    action: str,
    method: str,
    path: str,
    params: dict[str, Any] | None = None,
    validate: Validator | None = None,
    transform: Transform | None = None,
) -> ToolResult:
    """
    Run one signed request and normalize its outcome.

    Args:
        settings: Process settings
        api: HTTP client
        action: Human label used in error text, e.g. "place order"
        method: HTTP method
        path: API path, e.g. "/api/v3/order"
        params: Caller parameter bag (insertion order is kept)
        validate: Precondition check; may fill in defaults on the bag
        transform: Maps (response body, sent params) to the returned payload

    Returns:
        ToolResult with pretty-printed JSON, or an error message
    """
    try:
        credentials = resolve_credentials(settings)

        bag = dict(params or {})
        if validate is not None:
            validate(bag)
        bag = drop_absent(bag)

        query_string = build_signed_query(bag, credentials.secret_key, settings.recv_window)
        data = await api.request(method, path, query_string, api_key=credentials.api_key)

        if transform is not None:
            data = transform(data, bag)
        return ToolResult.success(data)

    except ToolError as e:
        return ToolResult.failure(f"Failed to {action}: {e}")
    except Exception as e:
        print(f"[Tools] Unexpected error in {action}: {type(e).__name__}: {e}")
        traceback.print_exc()
        return ToolResult.failure(f"Failed to {action}: {e}")
