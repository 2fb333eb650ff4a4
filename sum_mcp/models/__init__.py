"""
Models package - domain models and wire models.

- domain: tool descriptors, invocation requests and results
- tools: catalog and REST execution models
- jsonrpc: JSON-RPC 2.0 envelope shared by the transports
"""

from sum_mcp.models.domain import (
    CancellationToken,
    InvocationFailure,
    InvocationRequest,
    InvocationResult,
    InvocationSuccess,
    ParameterKind,
    ParameterSpec,
    ToolContext,
    ToolDescriptor,
)
from sum_mcp.models.tools import (
    ToolCatalogEntry,
    ToolExecuteRequest,
    ToolExecuteResponse,
)

__all__ = [
    # Domain
    "ParameterKind",
    "ParameterSpec",
    "ToolDescriptor",
    "CancellationToken",
    "ToolContext",
    "InvocationRequest",
    "InvocationSuccess",
    "InvocationFailure",
    "InvocationResult",
    # API
    "ToolCatalogEntry",
    "ToolExecuteRequest",
    "ToolExecuteResponse",
]
