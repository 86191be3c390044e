# order_checks.py - Local precondition checks run before anything is signed.
"""
Each check takes the caller's parameter bag and either returns normally or
raises ValidationError. A failing check means no signed query is built and
no request is sent.

Order shape rules by type:
- LIMIT: price + quantity, timeInForce defaults to GTC
- MARKET: quantity or quoteOrderQty
- STOP_LOSS / TAKE_PROFIT: quantity + (stopPrice or trailingDelta)
- STOP_LOSS_LIMIT / TAKE_PROFIT_LIMIT: quantity + price + (stopPrice or trailingDelta),
  timeInForce defaults to GTC
- LIMIT_MAKER: quantity + price
"""

from typing import Any

from models import OrderType, TimeInForce
from services.errors import ValidationError

_STOP_TYPES = (OrderType.STOP_LOSS.value, OrderType.TAKE_PROFIT.value)
_STOP_LIMIT_TYPES = (OrderType.STOP_LOSS_LIMIT.value, OrderType.TAKE_PROFIT_LIMIT.value)


def _missing(params: dict[str, Any], key: str) -> bool:
    # 0 and "" count as missing, same as an absent key
    return not params.get(key)


def _require(params: dict[str, Any], order_type: str, *keys: str) -> None:
    for key in keys:
        if _missing(params, key):
            raise ValidationError(f"{key[0].upper()}{key[1:]} is required for {order_type} orders")


def _require_trigger(params: dict[str, Any], order_type: str) -> None:
    if _missing(params, "stopPrice") and _missing(params, "trailingDelta"):
        raise ValidationError(f"Either stopPrice or trailingDelta is required for {order_type} orders")


def validate_order(params: dict[str, Any]) -> None:
    """
    Check order shape for its type. Fills in timeInForce=GTC where the type
    needs one and the caller left it out.
    """
    order_type = params.get("type") or ""
    if isinstance(order_type, OrderType):
        order_type = order_type.value

    if order_type == OrderType.LIMIT.value:
        _require(params, order_type, "price", "quantity")
        if _missing(params, "timeInForce"):
            params["timeInForce"] = TimeInForce.GTC.value

    elif order_type == OrderType.MARKET.value:
        if _missing(params, "quantity") and _missing(params, "quoteOrderQty"):
            raise ValidationError("Either quantity or quoteOrderQty is required for MARKET orders")

    elif order_type in _STOP_TYPES:
        _require(params, order_type, "quantity")
        _require_trigger(params, order_type)

    elif order_type in _STOP_LIMIT_TYPES:
        _require(params, order_type, "quantity", "price")
        _require_trigger(params, order_type)
        if _missing(params, "timeInForce"):
            params["timeInForce"] = TimeInForce.GTC.value

    elif order_type == OrderType.LIMIT_MAKER.value:
        _require(params, order_type, "quantity", "price")


def require_order_reference(params: dict[str, Any]) -> None:
    """cancel_order / query_order need an order to point at."""
    if _missing(params, "orderId") and _missing(params, "origClientOrderId"):
        raise ValidationError("Either orderId or origClientOrderId must be provided")


def require_symbol(params: dict[str, Any]) -> None:
    if _missing(params, "symbol"):
        raise ValidationError("Symbol is required")
