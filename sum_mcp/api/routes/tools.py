"""
Tools Router - REST surface over the Dispatcher.

``GET /v1/tools`` lists the catalog; ``POST /v1/tools/execute`` runs one
tool call through the same gate chain as the JSON-RPC transports and
renders the envelope as a ToolExecuteResponse.

Status codes:
- 401: UNAUTHORIZED
- 429: RATE_LIMITED (with Retry-After)
- 404: UNKNOWN_TOOL
- 422: INVALID_ARGUMENTS
- 200: success and TOOL_ERROR (``success`` tells them apart)
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from sum_mcp.api.deps import get_credential, get_dispatcher, get_tool_registry
from sum_mcp.core.exceptions import ErrorKind
from sum_mcp.models.domain import InvocationRequest
from sum_mcp.models.tools import (
    ToolCatalogEntry,
    ToolExecuteRequest,
    ToolExecuteResponse,
)
from sum_mcp.tools.dispatcher import Dispatcher
from sum_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.UNKNOWN_TOOL: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_ARGUMENTS: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


router = APIRouter(prefix="/v1/tools", tags=["Tools"])


# =============================================================================
# List Tools Endpoint
# =============================================================================


@router.get("", response_model=list[ToolCatalogEntry])
async def list_tools(
    registry: ToolRegistry = Depends(get_tool_registry),
) -> list[ToolCatalogEntry]:
    """
    List all available tools.

    Discovery is open: it is neither authenticated nor rate limited.
    """
    return registry.catalog()


# =============================================================================
# Tool Execution Endpoint
# =============================================================================


@router.post("/execute", response_model=ToolExecuteResponse)
async def execute_tool(
    request: ToolExecuteRequest,
    dispatcher: Dispatcher = Depends(get_dispatcher),
    credential: Optional[str] = Depends(get_credential),
) -> Union[ToolExecuteResponse, JSONResponse]:
    """
    Execute a tool with given arguments.

    Args:
        request: Tool execution request
        dispatcher: Injected Dispatcher
        credential: Value of the X-Api-Key header

    Returns:
        ToolExecuteResponse with result or error
    """
    logger.debug(f"Tool execution request: {request.name}")

    result = await dispatcher.dispatch(
        InvocationRequest(
            tool_name=request.name,
            arguments=request.arguments,
            credential=credential,
        )
    )

    if result.is_success:
        return ToolExecuteResponse(name=request.name, success=True, result=result.payload)

    body = ToolExecuteResponse(
        name=request.name,
        success=False,
        error=result.message,
        error_kind=result.kind,
        error_reason=result.reason,
    )
    status_code = _STATUS_BY_KIND.get(result.kind)
    if status_code is None:
        return body

    headers = {}
    if result.kind is ErrorKind.RATE_LIMITED and result.retry_after is not None:
        headers["Retry-After"] = str(result.retry_after)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )
