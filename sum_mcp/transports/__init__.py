"""
Transports Package

JSON-RPC handling shared by the HTTP and stdio transports, and the stdio
server itself. The HTTP transport lives in sum_mcp.api.
"""

from sum_mcp.transports.jsonrpc import JsonRpcHandler, JsonRpcOutcome, tool_call_result
from sum_mcp.transports.stdio import StdioServer, run_stdio_server

__all__ = [
    "JsonRpcHandler",
    "JsonRpcOutcome",
    "tool_call_result",
    "StdioServer",
    "run_stdio_server",
]
