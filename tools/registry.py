# registry.py - Tool registry and name-based dispatch.
"""
This module is the inbound surface for any tool-invocation host.

Each tool registers itself with @register_tool, declaring its parameters in
JSON-schema form. The host can:
1. Call build_tool_schemas() to get OpenAI-style function definitions
2. Call execute_tool(name, args, settings, api) to run one

Arguments are checked against the declared schema before the handler runs:
missing required keys, wrong types and unknown enum values are rejected,
undeclared keys are dropped. Caller key order is kept.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from config import Settings
from models import ToolResult
from services.binance_api import BinanceAPI
from services.errors import ValidationError

Handler = Callable[..., Awaitable[ToolResult]]


@dataclass(frozen=True)
class ToolSpec:
    """Describes one callable tool."""
    name: str
    action: str                 # Used in error text: "Failed to <action>: ..."
    description: str
    handler: Handler
    properties: dict[str, dict] = field(default_factory=dict)
    required: tuple[str, ...] = ()

    def schema(self) -> dict:
        """OpenAI function-calling definition."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": self.properties,
                    "required": list(self.required),
                },
            },
        }


# Registry of available tools
# Tools add themselves here via @register_tool
TOOL_REGISTRY: dict[str, ToolSpec] = {}


def register_tool(
    name: str,
    action: str,
    description: str,
    properties: dict[str, dict] | None = None,
    required: tuple[str, ...] = (),
):
    """Decorator to register a tool handler."""
    def decorator(func: Handler) -> Handler:
        TOOL_REGISTRY[name] = ToolSpec(
            name=name,
            action=action,
            description=description,
            handler=func,
            properties=properties or {},
            required=tuple(required),
        )
        return func
    return decorator


def get_tool(name: str) -> ToolSpec | None:
    """Get a tool spec by name."""
    return TOOL_REGISTRY.get(name)


def list_tools() -> list[str]:
    """List all registered tool names."""
    return list(TOOL_REGISTRY.keys())


def build_tool_schemas() -> list[dict]:
    """Build the list of tools in OpenAI format."""
    return [spec.schema() for spec in TOOL_REGISTRY.values()]


def _type_ok(expected: str | None, value: Any) -> bool:
    if expected == "string":
        return isinstance(value, str)
    if expected == "boolean":
        return isinstance(value, bool)
    if expected == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected == "integer":
        if isinstance(value, bool):
            return False
        return isinstance(value, int) or (isinstance(value, float) and value.is_integer())
    return True


def check_arguments(spec: ToolSpec, args: dict[str, Any] | None) -> dict[str, Any]:
    """
    Validate arguments against a tool's declared parameters.

    Returns:
        Only the declared keys, in caller order, with None values kept
        (the dispatcher drops them before signing)

    Raises:
        ValidationError: On a missing required key, wrong type or bad enum value
    """
    args = args or {}
    checked = {k: v for k, v in args.items() if k in spec.properties}

    for key in spec.required:
        if checked.get(key) is None:
            raise ValidationError(f"Missing required parameter: {key}")

    for key, value in checked.items():
        if value is None:
            continue
        prop = spec.properties[key]
        if not _type_ok(prop.get("type"), value):
            raise ValidationError(f"Parameter {key} must be of type {prop.get('type')}")
        allowed = prop.get("enum")
        if allowed and value not in allowed:
            raise ValidationError(f"Parameter {key} must be one of: {', '.join(allowed)}")

    return checked


async def execute_tool(
    name: str,
    args: dict[str, Any] | None,
    settings: Settings,
    api: BinanceAPI,
) -> ToolResult:
    """Execute a tool by name and return the result."""
    spec = get_tool(name)
    if spec is None:
        return ToolResult.failure(f"Unknown tool: {name}")

    try:
        checked = check_arguments(spec, args)
    except ValidationError as e:
        return ToolResult.failure(f"Failed to {spec.action}: {e}")

    return await spec.handler(settings, api, **checked)
