"""
JSON-RPC protocol handling shared by the HTTP and stdio transports.

Turns one decoded JSON-RPC message into at most one JSON-RPC response.
``tools/call`` goes through the Dispatcher; discovery (``tools/list``),
``initialize`` and ``ping`` are answered directly and are not gated.

Conformance notes:
- Unknown request methods (with id) return -32601.
- Unknown notifications (no id) are ignored.
- Batches (JSON arrays) are rejected with -32600.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import ValidationError

from sum_mcp.core.config import Settings
from sum_mcp.core.exceptions import ErrorKind
from sum_mcp.models.domain import (
    CancellationToken,
    InvocationFailure,
    InvocationRequest,
    InvocationResult,
)
from sum_mcp.models.jsonrpc import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    JSONRPC_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    RATE_LIMITED,
    UNAUTHORIZED,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    RequestId,
    ToolCallParams,
)
from sum_mcp.observability.logging import get_logger
from sum_mcp.tools.dispatcher import Dispatcher
from sum_mcp.tools.registry import ToolRegistry

logger = get_logger(__name__)

# Protocol revision answered when the client does not propose one
DEFAULT_PROTOCOL_VERSION = "2025-06-18"


@dataclass
class JsonRpcOutcome:
    """
    What a transport should send back for one inbound message.

    Attributes:
        response: The response frame, or None when nothing is sent
            (notifications, cancelled requests).
        failure: The gate failure of a ``tools/call``, when admission was
            refused. The HTTP transport turns these into status codes.
    """

    response: Optional[JsonRpcResponse] = None
    failure: Optional[InvocationFailure] = None


def _error(request_id: Optional[RequestId], code: int, message: str, data: Any = None) -> JsonRpcResponse:
    return JsonRpcResponse(
        id=request_id,
        error=JsonRpcError(code=code, message=message, data=data),
    )


def tool_call_result(result: InvocationResult) -> dict[str, Any]:
    """
    Render a successful or TOOL_ERROR invocation as a ``tools/call`` result.

    Payloads are returned both as text content and as structured content.
    """
    if result.is_success:
        return {
            "content": [{"type": "text", "text": json.dumps(result.payload, ensure_ascii=False)}],
            "structuredContent": result.payload,
            "isError": False,
        }
    return {
        "content": [{"type": "text", "text": result.message}],
        "isError": True,
    }


class JsonRpcHandler:
    """
    Stateless JSON-RPC method router.

    Example:
        >>> handler = JsonRpcHandler(registry, dispatcher, settings)
        >>> outcome = await handler.handle({"jsonrpc": "2.0", "id": 1, "method": "ping"})
        >>> outcome.response.to_wire()
        {'jsonrpc': '2.0', 'id': 1, 'result': {}}
    """

    def __init__(
        self,
        registry: ToolRegistry,
        dispatcher: Dispatcher,
        settings: Settings,
    ) -> None:
        self.registry = registry
        self.dispatcher = dispatcher
        self.settings = settings

    # =========================================================================
    # Entry points
    # =========================================================================

    async def handle_text(
        self,
        text: str,
        credential: Optional[str] = None,
        trusted: bool = False,
        cancellation: Optional[CancellationToken] = None,
    ) -> JsonRpcOutcome:
        """Decode one JSON text and handle it; bad JSON yields -32700."""
        try:
            message = json.loads(text)
        except json.JSONDecodeError as e:
            return JsonRpcOutcome(response=_error(None, PARSE_ERROR, f"Parse error: {e.msg}"))
        return await self.handle(message, credential, trusted, cancellation)

    async def handle(
        self,
        message: Any,
        credential: Optional[str] = None,
        trusted: bool = False,
        cancellation: Optional[CancellationToken] = None,
    ) -> JsonRpcOutcome:
        """
        Handle one decoded JSON-RPC message.

        Args:
            message: Decoded JSON value.
            credential: Caller credential (HTTP ``X-Api-Key``), if any.
            trusted: True for the stdio transport.
            cancellation: Token the transport sets when the caller cancels.

        Returns:
            JsonRpcOutcome for the transport to render.
        """
        request = self._parse(message)
        if isinstance(request, JsonRpcResponse):
            return JsonRpcOutcome(response=request)

        logger.debug("jsonrpc message", method=request.method, id=request.id)

        if request.is_notification:
            # Notifications never get a response; cancellation is handled by
            # the transport that owns the in-flight requests
            return JsonRpcOutcome()

        if request.method == "initialize":
            return JsonRpcOutcome(response=JsonRpcResponse(id=request.id, result=self._initialize(request)))
        if request.method == "ping":
            return JsonRpcOutcome(response=JsonRpcResponse(id=request.id, result={}))
        if request.method == "tools/list":
            return JsonRpcOutcome(response=JsonRpcResponse(id=request.id, result=self._list_tools()))
        if request.method == "tools/call":
            return await self._call_tool(
                request, credential, trusted, cancellation or CancellationToken()
            )

        return JsonRpcOutcome(
            response=_error(request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}")
        )

    # =========================================================================
    # Methods
    # =========================================================================

    def _parse(self, message: Any) -> Union[JsonRpcRequest, JsonRpcResponse]:
        if not isinstance(message, dict):
            return _error(None, INVALID_REQUEST, "Invalid Request: expected a JSON object")

        raw_id = message.get("id")
        request_id = raw_id if isinstance(raw_id, (int, str)) and not isinstance(raw_id, bool) else None

        if message.get("jsonrpc") != JSONRPC_VERSION:
            return _error(request_id, INVALID_REQUEST, "Invalid Request: jsonrpc must be '2.0'")
        try:
            return JsonRpcRequest.model_validate(message)
        except ValidationError:
            return _error(request_id, INVALID_REQUEST, "Invalid Request")

    def _initialize(self, request: JsonRpcRequest) -> dict[str, Any]:
        requested = request.params.get("protocolVersion")
        return {
            "protocolVersion": requested if isinstance(requested, str) and requested else DEFAULT_PROTOCOL_VERSION,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {
                "name": self.settings.service_name,
                "version": self.settings.service_version,
            },
        }

    def _list_tools(self) -> dict[str, Any]:
        return {
            "tools": [entry.model_dump(by_alias=True) for entry in self.registry.catalog()]
        }

    async def _call_tool(
        self,
        request: JsonRpcRequest,
        credential: Optional[str],
        trusted: bool,
        cancellation: CancellationToken,
    ) -> JsonRpcOutcome:
        try:
            params = ToolCallParams.model_validate(request.params)
        except ValidationError:
            return JsonRpcOutcome(
                response=_error(request.id, INVALID_PARAMS, "Invalid params: 'name' is required")
            )

        result = await self.dispatcher.dispatch(
            InvocationRequest(
                tool_name=params.name,
                arguments=params.arguments or {},
                credential=credential,
                trusted=trusted,
                cancellation=cancellation,
            )
        )

        if result.is_success or result.kind is ErrorKind.TOOL_ERROR:
            return JsonRpcOutcome(
                response=JsonRpcResponse(id=request.id, result=tool_call_result(result))
            )

        if result.kind is ErrorKind.CANCELLED:
            return JsonRpcOutcome()

        if result.kind is ErrorKind.UNAUTHORIZED:
            return JsonRpcOutcome(
                response=_error(request.id, UNAUTHORIZED, result.message),
                failure=result,
            )
        if result.kind is ErrorKind.RATE_LIMITED:
            return JsonRpcOutcome(
                response=_error(
                    request.id,
                    RATE_LIMITED,
                    result.message,
                    data={"retryAfter": result.retry_after},
                ),
                failure=result,
            )

        # UNKNOWN_TOOL / INVALID_ARGUMENTS
        data: dict[str, Any] = {"kind": result.kind.value}
        if result.reason is not None:
            data["reason"] = result.reason.value
        if result.parameter is not None:
            data["parameter"] = result.parameter
        if result.expected_kind is not None:
            data["expectedKind"] = result.expected_kind
        return JsonRpcOutcome(response=_error(request.id, INVALID_PARAMS, result.message, data=data))
