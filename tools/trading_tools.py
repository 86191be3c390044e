"""Trading tools for the Binance spot account (all signed endpoints)."""

from typing import Any

from config import Settings
from models import OrderResponseType, OrderSide, OrderType, TimeInForce, ToolResult
from services.binance_api import BinanceAPI
from services.dispatcher import authenticated_call
from services.order_checks import require_order_reference, require_symbol, validate_order
from tools.registry import register_tool

SYMBOL = {"type": "string", "description": "Trading pair symbol, e.g. BTCUSDT"}

ORDER_PROPERTIES = {
    "symbol": SYMBOL,
    "side": {"type": "string", "enum": [s.value for s in OrderSide], "description": "Order side"},
    "type": {"type": "string", "enum": [t.value for t in OrderType], "description": "Order type"},
    "timeInForce": {
        "type": "string",
        "enum": [t.value for t in TimeInForce],
        "description": "Time in force (defaults to GTC for LIMIT orders)",
    },
    "quantity": {"type": "number", "description": "Order quantity"},
    "quoteOrderQty": {"type": "number", "description": "Quote quantity (for MARKET orders)"},
    "price": {"type": "number", "description": "Order price (required for LIMIT orders)"},
    "stopPrice": {"type": "number", "description": "Stop price (for STOP/TAKE_PROFIT orders)"},
    "trailingDelta": {"type": "integer", "description": "Trailing delta in BIPS (for STOP/TAKE_PROFIT orders)"},
    "icebergQty": {"type": "number", "description": "Iceberg quantity"},
    "newClientOrderId": {"type": "string", "description": "Custom order ID"},
    "newOrderRespType": {
        "type": "string",
        "enum": [r.value for r in OrderResponseType],
        "description": "Response type (default: FULL for MARKET/LIMIT)",
    },
}

ORDER_REFERENCE_PROPERTIES = {
    "symbol": SYMBOL,
    "orderId": {"type": "integer", "description": "Order ID"},
    "origClientOrderId": {"type": "string", "description": "Original client order ID"},
}

TIME_RANGE_PROPERTIES = {
    "startTime": {"type": "integer", "description": "Start time in milliseconds"},
    "endTime": {"type": "integer", "description": "End time in milliseconds"},
    "limit": {"type": "integer", "description": "Number of records to return (default 500, max 1000)"},
}


def _non_zero_balances(data: Any, _params: dict) -> Any:
    """Keep only assets with free or locked > 0."""
    if not isinstance(data, dict) or not isinstance(data.get("balances"), list):
        return data

    balances = [
        b for b in data["balances"]
        if float(b.get("free", 0) or 0) > 0 or float(b.get("locked", 0) or 0) > 0
    ]
    return {**data, "balances": balances}


def _test_order_result(data: Any, params: dict) -> Any:
    # /order/test answers {} unless commission rates were asked for
    if params.get("computeCommissionRates"):
        return data
    return {"status": "Order validation successful", **params}


# === ACCOUNT ===

@register_tool(
    "get_account_info",
    action="get account info",
    description="Get account information, including balances with a non-zero free or locked amount.",
)
async def get_account_info(settings: Settings, api: BinanceAPI) -> ToolResult:
    return await authenticated_call(
        settings, api,
        action="get account info",
        method="GET",
        path="/api/v3/account",
        transform=_non_zero_balances,
    )


# === ORDERS ===

@register_tool(
    "place_order",
    action="place order",
    description="Place a new order. LIMIT orders need price and quantity; MARKET orders need quantity or quoteOrderQty.",
    properties=ORDER_PROPERTIES,
    required=("symbol", "side", "type"),
)
async def place_order(settings: Settings, api: BinanceAPI, **params: Any) -> ToolResult:
    return await authenticated_call(
        settings, api,
        action="place order",
        method="POST",
        path="/api/v3/order",
        params=params,
        validate=validate_order,
    )


@register_tool(
    "test_order",
    action="test order",
    description="Validate a new order against the exchange without placing it.",
    properties={
        **ORDER_PROPERTIES,
        "computeCommissionRates": {"type": "boolean", "description": "Calculate commission rates"},
    },
    required=("symbol", "side", "type"),
)
async def test_order(settings: Settings, api: BinanceAPI, **params: Any) -> ToolResult:
    return await authenticated_call(
        settings, api,
        action="test order",
        method="POST",
        path="/api/v3/order/test",
        params=params,
        validate=validate_order,
        transform=_test_order_result,
    )


@register_tool(
    "cancel_order",
    action="cancel order",
    description="Cancel an active order by orderId or origClientOrderId.",
    properties={
        **ORDER_REFERENCE_PROPERTIES,
        "newClientOrderId": {"type": "string", "description": "New client order ID for this cancel"},
    },
    required=("symbol",),
)
async def cancel_order(settings: Settings, api: BinanceAPI, **params: Any) -> ToolResult:
    return await authenticated_call(
        settings, api,
        action="cancel order",
        method="DELETE",
        path="/api/v3/order",
        params=params,
        validate=require_order_reference,
    )


@register_tool(
    "query_order",
    action="query order",
    description="Check an order's status by orderId or origClientOrderId.",
    properties=ORDER_REFERENCE_PROPERTIES,
    required=("symbol",),
)
async def query_order(settings: Settings, api: BinanceAPI, **params: Any) -> ToolResult:
    return await authenticated_call(
        settings, api,
        action="query order",
        method="GET",
        path="/api/v3/order",
        params=params,
        validate=require_order_reference,
    )


@register_tool(
    "get_open_orders",
    action="get open orders",
    description="Get all open orders on a symbol, or on every symbol when none is given.",
    properties={
        "symbol": {"type": "string", "description": "Trading pair symbol (optional, returns all if not specified)"},
    },
)
async def get_open_orders(settings: Settings, api: BinanceAPI, symbol: str | None = None) -> ToolResult:
    params = {"symbol": symbol} if symbol else {}
    return await authenticated_call(
        settings, api,
        action="get open orders",
        method="GET",
        path="/api/v3/openOrders",
        params=params,
    )


@register_tool(
    "cancel_all_orders",
    action="cancel all orders",
    description="Cancel all open orders on a symbol.",
    properties={"symbol": SYMBOL},
    required=("symbol",),
)
async def cancel_all_orders(settings: Settings, api: BinanceAPI, symbol: str | None = None) -> ToolResult:
    return await authenticated_call(
        settings, api,
        action="cancel all orders",
        method="DELETE",
        path="/api/v3/openOrders",
        params={"symbol": symbol},
        validate=require_symbol,
    )


# === HISTORY ===

@register_tool(
    "get_order_history",
    action="get order history",
    description="Get all account orders on a symbol: active, canceled, or filled.",
    properties={
        "symbol": SYMBOL,
        "orderId": {"type": "integer", "description": "Start searching from this order ID"},
        **TIME_RANGE_PROPERTIES,
    },
    required=("symbol",),
)
async def get_order_history(settings: Settings, api: BinanceAPI, **params: Any) -> ToolResult:
    return await authenticated_call(
        settings, api,
        action="get order history",
        method="GET",
        path="/api/v3/allOrders",
        params=params,
        validate=require_symbol,
    )


@register_tool(
    "get_trade_history",
    action="get trade history",
    description="Get account trades on a symbol.",
    properties={
        "symbol": SYMBOL,
        "orderId": {"type": "integer", "description": "Filter trades by this order ID"},
        **TIME_RANGE_PROPERTIES,
        "fromId": {"type": "integer", "description": "Trade ID to start from"},
    },
    required=("symbol",),
)
async def get_trade_history(settings: Settings, api: BinanceAPI, **params: Any) -> ToolResult:
    return await authenticated_call(
        settings, api,
        action="get trade history",
        method="GET",
        path="/api/v3/myTrades",
        params=params,
        validate=require_symbol,
    )
