"""
Core module for the Sum MCP server.

This module contains configuration, exceptions, and shared utilities.
"""

from sum_mcp.core.config import Settings, get_settings
from sum_mcp.core.exceptions import (
    BindingError,
    BindingFailure,
    DuplicateToolError,
    ErrorKind,
    RegistryFrozenError,
    SumMcpException,
    ToolError,
    ToolNotFoundError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorKind",
    "BindingFailure",
    "SumMcpException",
    "ToolError",
    "BindingError",
    "ToolNotFoundError",
    "DuplicateToolError",
    "RegistryFrozenError",
]
