# errors.py - Failure taxonomy for tool calls.
"""
Every failure a tool can hit is one of these. Handlers catch ToolError
and turn it into an error ToolResult, so none of them reach the host.
"""


class ToolError(Exception):
    """Base class for all tool-layer failures."""


class MissingCredentials(ToolError):
    """API key or secret not configured."""

    def __init__(self, message: str | None = None):
        super().__init__(message or (
            "Missing required environment variables: BINANCE_API_KEY and/or BINANCE_SECRET_KEY. "
            "Please add these to your tool host configuration or .env file."
        ))


class ValidationError(ToolError):
    """Caller arguments do not satisfy an operation's preconditions."""


class TransportError(ToolError):
    """Network or HTTP failure talking to the venue."""

    def __init__(self, message: str, status: int | None = None, code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code


class VenueRejection(TransportError):
    """HTTP success envelope carrying a venue error code."""
