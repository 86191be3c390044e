# models.py - Pure data classes with NO dependencies.
"""
This module contains the shared data types used across the tool layer.
Having them in a separate file prevents circular imports.

All classes here should be:
- Pure dataclasses or string enums
- Have NO imports from other project modules
- Be importable by any module in the project
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class OrderSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    LIMIT = "LIMIT"
    MARKET = "MARKET"
    STOP_LOSS = "STOP_LOSS"
    STOP_LOSS_LIMIT = "STOP_LOSS_LIMIT"
    TAKE_PROFIT = "TAKE_PROFIT"
    TAKE_PROFIT_LIMIT = "TAKE_PROFIT_LIMIT"
    LIMIT_MAKER = "LIMIT_MAKER"


class TimeInForce(str, Enum):
    GTC = "GTC"  # Good Till Cancel
    IOC = "IOC"  # Immediate Or Cancel
    FOK = "FOK"  # Fill Or Kill
    GTX = "GTX"  # Good Till Crossing


class OrderResponseType(str, Enum):
    ACK = "ACK"
    RESULT = "RESULT"
    FULL = "FULL"


class OrderStatus(str, Enum):
    NEW = "NEW"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FILLED = "FILLED"
    CANCELED = "CANCELED"
    PENDING_CANCEL = "PENDING_CANCEL"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    EXPIRED_IN_MATCH = "EXPIRED_IN_MATCH"


@dataclass(frozen=True)
class Credentials:
    """API key pair for signed endpoints."""
    api_key: str
    secret_key: str

    def __repr__(self) -> str:
        return f"Credentials(api_key={mask_secret(self.api_key)})"


@dataclass(frozen=True)
class ToolResult:
    """Represents the outcome of one tool call, as handed back to the host."""
    content_text: str
    is_error: bool = False

    @classmethod
    def success(cls, payload: Any) -> "ToolResult":
        return cls(content_text=json.dumps(payload, indent=2, ensure_ascii=False))

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(content_text=message, is_error=True)


def mask_secret(value: str | None) -> str:
    """Show only the trailing 4 characters of a secret."""
    if not value:
        return "NOT SET"
    return "***" + value[-4:]
