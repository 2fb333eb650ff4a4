"""
Built-in Tools Package

This package provides the tools every Sum MCP server exposes: greetings,
time, identifiers, math, text and JSON helpers. None of them has external
dependencies or cross-call state.

The catalog is assembled by an explicit builder, register_builtin_tools(),
so the set of tools is fixed at process start.
"""

from sum_mcp.models.domain import ToolDescriptor
from sum_mcp.tools.builtin.arithmetic import (
    MATH_ADD_DESCRIPTOR,
    MATH_AVG_DESCRIPTOR,
    MATH_SUM_DESCRIPTOR,
)
from sum_mcp.tools.builtin.clock import TIME_NOW_DESCRIPTOR, TIME_PARSE_DESCRIPTOR
from sum_mcp.tools.builtin.greeting import (
    ECHO_DESCRIPTOR,
    HELLO_DESCRIPTOR,
    NEW_UUID_DESCRIPTOR,
)
from sum_mcp.tools.builtin.json_format import JSON_VALIDATE_DESCRIPTOR
from sum_mcp.tools.builtin.text import EXTRACT_EMAILS_DESCRIPTOR, SLUGIFY_DESCRIPTOR
from sum_mcp.tools.registry import ToolRegistry

BUILTIN_TOOLS: tuple[ToolDescriptor, ...] = (
    HELLO_DESCRIPTOR,
    ECHO_DESCRIPTOR,
    TIME_NOW_DESCRIPTOR,
    TIME_PARSE_DESCRIPTOR,
    NEW_UUID_DESCRIPTOR,
    MATH_ADD_DESCRIPTOR,
    MATH_SUM_DESCRIPTOR,
    MATH_AVG_DESCRIPTOR,
    SLUGIFY_DESCRIPTOR,
    EXTRACT_EMAILS_DESCRIPTOR,
    JSON_VALIDATE_DESCRIPTOR,
)


def register_builtin_tools(registry: ToolRegistry) -> None:
    """
    Register all built-in tools with the given registry.

    Args:
        registry: The ToolRegistry to register tools with. Must not be
            frozen yet.
    """
    for descriptor in BUILTIN_TOOLS:
        registry.register(descriptor)


__all__ = [
    "BUILTIN_TOOLS",
    "register_builtin_tools",
]
