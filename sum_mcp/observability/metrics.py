"""
Prometheus Metrics Module

This module provides Prometheus metrics for the HTTP transport and the
dispatch layer.

Pattern: Metrics collection for observability

Metrics:
- sum_mcp_http_requests_total / sum_mcp_http_request_duration_seconds
- sum_mcp_tool_invocations_total (tool, outcome)
- sum_mcp_tool_duration_seconds (tool)
- sum_mcp_rate_limit_rejections_total
"""

import time
from typing import Any, Callable, Optional

from prometheus_client import (
    REGISTRY,
    Counter,
    Histogram,
    generate_latest,
    make_asgi_app,
)

# Label used for calls naming a tool that is not registered, so arbitrary
# caller input never becomes a label value.
UNKNOWN_TOOL_LABEL = "<unknown>"


# =============================================================================
# HTTP Metrics
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    name="sum_mcp_http_requests_total",
    documentation="Total number of HTTP requests",
    labelnames=["method", "path", "status"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    name="sum_mcp_http_request_duration_seconds",
    documentation="HTTP request duration in seconds",
    labelnames=["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# =============================================================================
# Dispatch Metrics
# =============================================================================

TOOL_INVOCATIONS_TOTAL = Counter(
    name="sum_mcp_tool_invocations_total",
    documentation="Tool invocations by terminal outcome",
    labelnames=["tool", "outcome"],
)

TOOL_DURATION_SECONDS = Histogram(
    name="sum_mcp_tool_duration_seconds",
    documentation="Handler execution time in seconds",
    labelnames=["tool"],
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 30.0),
)

RATE_LIMIT_REJECTIONS_TOTAL = Counter(
    name="sum_mcp_rate_limit_rejections_total",
    documentation="Requests rejected by the sliding window rate limiter",
)


# =============================================================================
# Helper Functions
# =============================================================================


def record_tool_invocation(tool: str, outcome: str) -> None:
    """
    Record the terminal outcome of one tool call.

    Args:
        tool: Registered tool name, or UNKNOWN_TOOL_LABEL
        outcome: "success" or a lower-cased ErrorKind value
    """
    TOOL_INVOCATIONS_TOTAL.labels(tool=tool, outcome=outcome).inc()


def record_tool_duration(tool: str, seconds: float) -> None:
    """Record handler execution time."""
    TOOL_DURATION_SECONDS.labels(tool=tool).observe(seconds)


def record_rate_limit_rejection() -> None:
    RATE_LIMIT_REJECTIONS_TOTAL.inc()


# =============================================================================
# MetricsMiddleware ASGI Middleware
# =============================================================================


class MetricsMiddleware:
    """
    ASGI middleware for Prometheus HTTP metrics.

    This middleware:
    - Increments request counter per method/path/status
    - Records request latency histogram
    - Excludes /metrics from metrics

    The server exposes a handful of fixed routes, so the raw path is used
    as the label.
    """

    def __init__(
        self,
        app: Callable[..., Any],
        exclude_paths: Optional[list[str]] = None,
    ) -> None:
        self.app = app
        self.exclude_paths = exclude_paths or ["/metrics", "/metrics/"]

    async def __call__(
        self,
        scope: dict[str, Any],
        receive: Callable[..., Any],
        send: Callable[..., Any],
    ) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "GET")
        path = scope.get("path", "/")

        if path in self.exclude_paths:
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        status_code = "500"

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = str(message.get("status", 500))
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration = time.perf_counter() - start_time
            HTTP_REQUESTS_TOTAL.labels(method=method, path=path, status=status_code).inc()
            HTTP_REQUEST_DURATION_SECONDS.labels(method=method, path=path).observe(duration)


# =============================================================================
# Metrics Endpoint
# =============================================================================


def get_metrics_app() -> Callable[..., Any]:
    """
    Get ASGI app for the /metrics endpoint.

    Returns:
        ASGI application that serves Prometheus metrics
    """
    return make_asgi_app()


def generate_metrics() -> str:
    """Generate Prometheus metrics text format."""
    return generate_latest(REGISTRY).decode("utf-8")
