"""
API Dependencies

This module provides FastAPI dependency injection functions for the API layer.

The tool registry, dispatcher and JSON-RPC handler are built once by the
application lifespan and kept on ``app.state``; the functions below hand
them to route handlers. All of them can be overridden in tests using
FastAPI's dependency_overrides mechanism.
"""

from typing import Optional

from fastapi import Header, Request

from sum_mcp.core.config import Settings
from sum_mcp.services.auth import API_KEY_HEADER
from sum_mcp.tools.dispatcher import Dispatcher
from sum_mcp.tools.registry import ToolRegistry
from sum_mcp.transports.jsonrpc import JsonRpcHandler


def get_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_tool_registry(request: Request) -> ToolRegistry:
    return request.app.state.registry


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher


def get_jsonrpc_handler(request: Request) -> JsonRpcHandler:
    return request.app.state.jsonrpc_handler


def get_credential(
    x_api_key: Optional[str] = Header(default=None, alias=API_KEY_HEADER),
) -> Optional[str]:
    """
    Caller credential from the ``X-Api-Key`` header.

    Returns:
        The header value, or None when the header is absent.
    """
    return x_api_key
