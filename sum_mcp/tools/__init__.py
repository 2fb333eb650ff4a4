"""
Tools Package - Tool Registry, Argument Binder and Dispatcher

This package provides the tool registry for managing available tools,
the binder that shapes raw arguments, and the dispatcher that runs the
admission gates and invokes handlers.
"""

from sum_mcp.tools.binder import bind_arguments
from sum_mcp.tools.dispatcher import Dispatcher, build_dispatcher
from sum_mcp.tools.registry import (
    ToolRegistry,
    build_default_registry,
    get_tool_registry,
    reset_tool_registry,
)

__all__ = [
    "ToolRegistry",
    "build_default_registry",
    "get_tool_registry",
    "reset_tool_registry",
    "bind_arguments",
    "Dispatcher",
    "build_dispatcher",
]
