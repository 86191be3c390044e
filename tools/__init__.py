"""
tools/ - Host-callable trading tools.

Contains:
- registry: Tool registration, argument checks and name-based dispatch
- trading_tools: Signed account, order and history tools
"""

from tools.registry import (
    TOOL_REGISTRY,
    ToolSpec,
    build_tool_schemas,
    check_arguments,
    execute_tool,
    get_tool,
    list_tools,
    register_tool,
)
from tools import trading_tools  # noqa: F401  (registers the tools)

__all__ = [
    "TOOL_REGISTRY",
    "ToolSpec",
    "build_tool_schemas",
    "check_arguments",
    "execute_tool",
    "get_tool",
    "list_tools",
    "register_tool",
]
