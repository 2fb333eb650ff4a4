"""
Stdio transport - newline-delimited JSON-RPC over stdin/stdout.

A reader task pulls lines off the input stream and a single worker handles
requests in arrival order. ``notifications/cancelled`` is acted on by the
reader as soon as it arrives, so it reaches requests that are still queued
as well as the one in flight. Responses to cancelled requests are dropped.

Requests arriving here are trusted (the caller launched the process) and
skip the Auth Gate; they are still rate limited.

stdout carries protocol frames only. Logs go to stderr.
"""

import asyncio
import json
import sys
from contextlib import nullcontext
from typing import Any, Optional, TextIO, Union

from sum_mcp.core.config import Settings
from sum_mcp.models.domain import CancellationToken
from sum_mcp.models.jsonrpc import PARSE_ERROR, JsonRpcError, JsonRpcResponse
from sum_mcp.observability.logging import correlation_id_context, get_logger
from sum_mcp.services.store import close_tool_store, create_tool_store
from sum_mcp.tools.dispatcher import build_dispatcher
from sum_mcp.tools.registry import build_default_registry
from sum_mcp.transports.jsonrpc import JsonRpcHandler

logger = get_logger(__name__)

CANCELLED_NOTIFICATION = "notifications/cancelled"

# Longest accepted input line in bytes
MAX_LINE_BYTES = 4 * 1024 * 1024

_STOP = object()


def _request_id(message: Any) -> Optional[Union[str, int]]:
    request_id = message.get("id") if isinstance(message, dict) else None
    return request_id if isinstance(request_id, (str, int)) else None


class StdioServer:
    """
    Serves one JSON-RPC session over a pair of streams.

    Example:
        >>> server = StdioServer(handler)
        >>> await server.serve(reader, sys.stdout)
    """

    def __init__(self, handler: JsonRpcHandler) -> None:
        self.handler = handler
        self._queue: asyncio.Queue = asyncio.Queue()
        self._pending: dict[Any, CancellationToken] = {}
        self._cancelled: set[Any] = set()
        self._output: Optional[TextIO] = None

    async def serve(self, reader: asyncio.StreamReader, output: TextIO) -> None:
        """
        Run until the input stream reaches EOF and queued work is done.

        Args:
            reader: Stream of inbound newline-delimited JSON.
            output: Text stream receiving response frames.
        """
        self._output = output
        worker = asyncio.create_task(self._work())
        try:
            await self._read(reader)
        finally:
            await self._queue.put(_STOP)
            await worker
        logger.info("stdio session closed")

    # =========================================================================
    # Reader
    # =========================================================================

    async def _read(self, reader: asyncio.StreamReader) -> None:
        while True:
            try:
                line = await reader.readline()
            except ValueError:
                logger.warning("stdio line exceeds limit, discarded")
                self._send(JsonRpcResponse(error=JsonRpcError(code=PARSE_ERROR, message="Parse error: line too long")))
                continue
            if not line:
                return
            text = line.decode("utf-8", errors="replace").strip()
            if not text:
                continue

            try:
                message = json.loads(text)
            except json.JSONDecodeError as e:
                self._send(JsonRpcResponse(error=JsonRpcError(code=PARSE_ERROR, message=f"Parse error: {e.msg}")))
                continue

            if isinstance(message, dict) and message.get("method") == CANCELLED_NOTIFICATION:
                self._cancel(message.get("params"))
                continue

            token = CancellationToken()
            request_id = _request_id(message)
            if request_id is not None:
                self._pending[request_id] = token
            await self._queue.put((message, token))

    def _cancel(self, params: Any) -> None:
        if not isinstance(params, dict):
            return
        request_id = params.get("requestId")
        if not isinstance(request_id, (str, int)):
            return
        token = self._pending.get(request_id)
        if token is None:
            logger.debug("cancellation for unknown request", request_id=request_id)
            return
        token.cancel()
        self._cancelled.add(request_id)
        logger.info("request cancelled", request_id=request_id, reason=params.get("reason"))

    # =========================================================================
    # Worker
    # =========================================================================

    async def _work(self) -> None:
        while True:
            item = await self._queue.get()
            if item is _STOP:
                return
            message, token = item
            request_id = _request_id(message)

            scope = correlation_id_context(str(request_id)) if request_id is not None else nullcontext()
            with scope:
                outcome = await self.handler.handle(message, trusted=True, cancellation=token)

            if request_id is not None:
                self._pending.pop(request_id, None)
                if request_id in self._cancelled:
                    self._cancelled.discard(request_id)
                    continue
            if outcome.response is not None:
                self._send(outcome.response)

    def _send(self, response: JsonRpcResponse) -> None:
        assert self._output is not None
        self._output.write(json.dumps(response.to_wire()) + "\n")
        self._output.flush()


# =============================================================================
# Process entry point
# =============================================================================


async def _open_stdin() -> asyncio.StreamReader:
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=MAX_LINE_BYTES)
    await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
    return reader


async def run_stdio_server(settings: Settings) -> None:
    """
    Serve the built-in catalog over this process's stdin/stdout.

    Args:
        settings: Application settings.
    """
    registry = build_default_registry()
    store = create_tool_store(settings)
    dispatcher = build_dispatcher(settings, registry, store=store)
    server = StdioServer(JsonRpcHandler(registry, dispatcher, settings))

    logger.info("stdio transport started", server=settings.service_name, tools=len(registry))
    try:
        await server.serve(await _open_stdin(), sys.stdout)
    finally:
        close_tool_store(store)
