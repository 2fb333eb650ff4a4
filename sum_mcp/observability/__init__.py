"""
Observability Package

This package provides observability infrastructure:
- Structured JSON logging with correlation IDs (structlog)
- Prometheus metrics for HTTP traffic and tool dispatch
"""

from sum_mcp.observability.logging import (
    clear_correlation_id,
    configure_logging,
    correlation_id_context,
    get_correlation_id,
    get_logger,
    set_correlation_id,
)
from sum_mcp.observability.metrics import (
    MetricsMiddleware,
    generate_metrics,
    get_metrics_app,
    record_rate_limit_rejection,
    record_tool_duration,
    record_tool_invocation,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    "correlation_id_context",
    # Metrics
    "MetricsMiddleware",
    "get_metrics_app",
    "generate_metrics",
    "record_tool_invocation",
    "record_tool_duration",
    "record_rate_limit_rejection",
]
