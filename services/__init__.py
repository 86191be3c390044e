"""Services package - Signing, transport and call pipeline."""

from .errors import MissingCredentials, ToolError, TransportError, ValidationError, VenueRejection
from .signer import (
    build_signed_query,
    resolve_credentials,
    resolve_endpoint_root,
    serialize_parameters,
    sign,
)
from .binance_api import BinanceAPI
from .dispatcher import authenticated_call, drop_absent

__all__ = [
    # Errors
    "ToolError",
    "MissingCredentials",
    "ValidationError",
    "TransportError",
    "VenueRejection",
    # Signing
    "serialize_parameters",
    "sign",
    "build_signed_query",
    "resolve_credentials",
    "resolve_endpoint_root",
    # Transport and pipeline
    "BinanceAPI",
    "authenticated_call",
    "drop_absent",
]
