"""
Tool Dispatcher - gate chain, binding, invocation and result shaping.

Every inbound tool call, whichever transport delivered it, goes through
``Dispatcher.dispatch``. The steps run in a fixed order and the first
failure is terminal:

1. Auth check (skipped for trusted stdio requests)   -> UNAUTHORIZED
2. Cancellation check, before any limiter accounting -> CANCELLED
3. Rate check                                        -> RATE_LIMITED
4. Resolve the tool by name                          -> UNKNOWN_TOOL
5. Bind arguments                                    -> INVALID_ARGUMENTS
6. Invoke the handler                                -> TOOL_ERROR
7. Shape the payload into InvocationSuccess

Admission is fully decided before the handler starts, so no limiter state
is held while a handler runs. Nothing is retried.

Pattern: Command Executor (executes tool calls as commands)
Pattern: Async-first with sync handler support
"""

import asyncio
import functools
import inspect
import time
from typing import Any, Optional

from sum_mcp.core.config import Settings
from sum_mcp.core.exceptions import (
    BindingError,
    ErrorKind,
    ToolError,
    ToolNotFoundError,
)
from sum_mcp.models.domain import (
    InvocationFailure,
    InvocationRequest,
    InvocationResult,
    InvocationSuccess,
    ToolContext,
    ToolDescriptor,
)
from sum_mcp.observability.logging import get_logger
from sum_mcp.observability.metrics import (
    UNKNOWN_TOOL_LABEL,
    record_rate_limit_rejection,
    record_tool_duration,
    record_tool_invocation,
)
from sum_mcp.services.auth import AuthGate
from sum_mcp.services.rate_limit import (
    RateLimiter,
    SlidingWindowRateLimiter,
    partition_key_for,
)
from sum_mcp.tools.binder import bind_arguments
from sum_mcp.tools.registry import ToolRegistry

logger = get_logger(__name__)

# Default execution timeout in seconds
DEFAULT_TIMEOUT = 30.0


class Dispatcher:
    """
    Orchestrates one tool call from admission to result envelope.

    Attributes:
        registry: Frozen ToolRegistry to resolve tools from.
        auth_gate: AuthGate consulted for untrusted requests.
        rate_limiter: RateLimiter consulted for every admitted request.
        timeout: Maximum handler execution time in seconds.
        store: Optional store handed to handlers through ToolContext.

    Example:
        >>> dispatcher = Dispatcher(registry, AuthGate(), SlidingWindowRateLimiter())
        >>> result = await dispatcher.dispatch(
        ...     InvocationRequest(tool_name="sum.math.add", arguments={"a": 3, "b": 2})
        ... )
        >>> result.payload
        {'result': 5.0}
    """

    def __init__(
        self,
        registry: ToolRegistry,
        auth_gate: AuthGate,
        rate_limiter: RateLimiter,
        timeout: float = DEFAULT_TIMEOUT,
        store: Optional[Any] = None,
    ) -> None:
        self.registry = registry
        self.auth_gate = auth_gate
        self.rate_limiter = rate_limiter
        self.timeout = timeout
        self.store = store

    # =========================================================================
    # dispatch()
    # =========================================================================

    async def dispatch(self, request: InvocationRequest) -> InvocationResult:
        """
        Run the gate chain and the tool for one request.

        Args:
            request: The inbound InvocationRequest.

        Returns:
            Exactly one InvocationSuccess or InvocationFailure. Failures
            are returned, never raised.
        """
        tool_name = request.tool_name

        if not request.trusted and not self.auth_gate.authorize(request.credential):
            return self._fail(request, ErrorKind.UNAUTHORIZED, "Unauthorized")

        if request.cancellation.is_cancelled:
            return self._fail(request, ErrorKind.CANCELLED, "Request cancelled")

        decision = self.rate_limiter.try_acquire(partition_key_for(request.credential))
        if not decision.allowed:
            record_rate_limit_rejection()
            return self._fail(
                request,
                ErrorKind.RATE_LIMITED,
                "Rate limit exceeded. Please retry later.",
                retry_after=decision.retry_after,
            )

        try:
            descriptor = self.registry.resolve(tool_name)
        except ToolNotFoundError as e:
            return self._fail(request, ErrorKind.UNKNOWN_TOOL, e.message)

        try:
            arguments = bind_arguments(descriptor.parameters, request.arguments)
        except BindingError as e:
            return self._fail(
                request,
                ErrorKind.INVALID_ARGUMENTS,
                e.message,
                reason=e.reason,
                parameter=e.parameter,
                expected_kind=e.expected_kind,
            )

        return await self._invoke(descriptor, arguments, request)

    # =========================================================================
    # Invocation
    # =========================================================================

    async def _invoke(
        self,
        descriptor: ToolDescriptor,
        arguments: dict[str, Any],
        request: InvocationRequest,
    ) -> InvocationResult:
        if descriptor.accepts_context:
            arguments["context"] = ToolContext(
                cancellation=request.cancellation, store=self.store
            )

        start_time = time.perf_counter()
        try:
            payload = await self._execute_with_timeout(descriptor.handler, arguments)
        except ToolError as e:
            return self._fail(request, ErrorKind.TOOL_ERROR, e.message)
        except asyncio.TimeoutError:
            # Lets handlers that honour cancellation stop early
            request.cancellation.cancel()
            return self._fail(
                request,
                ErrorKind.TOOL_ERROR,
                f"Tool execution timed out after {self.timeout}s",
            )
        except Exception:
            logger.exception("tool handler raised", tool=descriptor.name)
            return self._fail(request, ErrorKind.TOOL_ERROR, "Tool execution failed")
        finally:
            record_tool_duration(descriptor.name, time.perf_counter() - start_time)

        record_tool_invocation(descriptor.name, "success")
        logger.info("tool call succeeded", tool=descriptor.name)
        return InvocationSuccess(payload=payload)

    async def _execute_with_timeout(
        self, handler: Any, arguments: dict[str, Any]
    ) -> Any:
        """
        Execute a handler with timeout protection.

        Async handlers are awaited; sync handlers run in the default
        executor so they never block the event loop.

        Raises:
            asyncio.TimeoutError: If execution exceeds the timeout.
        """
        if inspect.iscoroutinefunction(handler):
            return await asyncio.wait_for(handler(**arguments), timeout=self.timeout)

        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(None, functools.partial(handler, **arguments))
        return await asyncio.wait_for(future, timeout=self.timeout)

    # =========================================================================
    # Failure shaping
    # =========================================================================

    def _fail(
        self,
        request: InvocationRequest,
        kind: ErrorKind,
        message: str,
        **detail: Any,
    ) -> InvocationFailure:
        tool_label = (
            request.tool_name if self.registry.has(request.tool_name) else UNKNOWN_TOOL_LABEL
        )
        record_tool_invocation(tool_label, kind.value.lower())
        logger.info(
            "tool call failed",
            tool=tool_label,
            kind=kind.value,
            error=message,
        )
        return InvocationFailure(kind=kind, message=message, **detail)


# =============================================================================
# Factory
# =============================================================================


def build_dispatcher(
    settings: Settings,
    registry: ToolRegistry,
    store: Optional[Any] = None,
) -> Dispatcher:
    """
    Assemble a Dispatcher from application settings.

    Args:
        settings: Application settings (auth key, rate limit, timeout).
        registry: Frozen ToolRegistry.
        store: Optional tool store.

    Returns:
        A ready Dispatcher.
    """
    return Dispatcher(
        registry=registry,
        auth_gate=AuthGate(settings.api_key),
        rate_limiter=SlidingWindowRateLimiter(
            permit_limit=settings.rate_limit_permit_limit,
            window_seconds=settings.rate_limit_window_seconds,
            segments_per_window=settings.rate_limit_segments_per_window,
        ),
        timeout=settings.tool_timeout_seconds,
        store=store,
    )
