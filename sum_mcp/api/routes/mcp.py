"""
MCP Router - JSON-RPC 2.0 over ``POST /mcp``.

Admission failures of ``tools/call`` are surfaced at the HTTP level:
401 with a plain ``Unauthorized`` body, and 429 with a Retry-After header.
Everything else is a JSON-RPC response with HTTP 200, except notifications,
which are acknowledged with an empty 202.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from sum_mcp.api.deps import get_credential, get_jsonrpc_handler
from sum_mcp.core.exceptions import ErrorKind
from sum_mcp.transports.jsonrpc import JsonRpcHandler

router = APIRouter(tags=["MCP"])


@router.post("/mcp")
async def mcp_endpoint(
    request: Request,
    handler: JsonRpcHandler = Depends(get_jsonrpc_handler),
    credential: Optional[str] = Depends(get_credential),
) -> Response:
    """
    Handle one JSON-RPC message.

    Returns:
        The JSON-RPC response, or an HTTP-level rejection.
    """
    body = await request.body()
    outcome = await handler.handle_text(
        body.decode("utf-8", errors="replace"), credential=credential
    )

    failure = outcome.failure
    if failure is not None and failure.kind is ErrorKind.UNAUTHORIZED:
        return PlainTextResponse("Unauthorized", status_code=status.HTTP_401_UNAUTHORIZED)
    if failure is not None and failure.kind is ErrorKind.RATE_LIMITED:
        headers = {}
        if failure.retry_after is not None:
            headers["Retry-After"] = str(failure.retry_after)
        return PlainTextResponse(
            failure.message,
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            headers=headers,
        )

    if outcome.response is None:
        return Response(status_code=status.HTTP_202_ACCEPTED)
    return JSONResponse(outcome.response.to_wire())
