"""JSON-RPC 2.0 messages spoken by both transports.

Implements the envelope used by the Model Context Protocol for tool
discovery (``tools/list``) and execution (``tools/call``).
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, Field

JSONRPC_VERSION = "2.0"

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Server-defined codes for admission failures on the stdio stream
UNAUTHORIZED = -32001
RATE_LIMITED = -32029

RequestId = Union[int, str]


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request or notification (no ``id``)."""

    jsonrpc: str = JSONRPC_VERSION
    method: str
    id: Optional[RequestId] = None
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_notification(self) -> bool:
        return self.id is None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message."""

    jsonrpc: str = JSONRPC_VERSION
    id: Optional[RequestId] = None
    result: Optional[dict[str, Any]] = None
    error: Optional[JsonRpcError] = None

    def to_wire(self) -> dict[str, Any]:
        """Serialize, keeping exactly one of ``result``/``error``."""
        body: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            body["error"] = self.error.model_dump(exclude_none=True)
        else:
            body["result"] = self.result if self.result is not None else {}
        return body


class ToolCallParams(BaseModel):
    """Params of a ``tools/call`` request."""

    name: str
    arguments: Optional[dict[str, Any]] = None
