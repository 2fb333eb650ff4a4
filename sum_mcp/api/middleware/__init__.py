"""
API Middleware Package

Middleware Components:
- logging: Request/response logging with header redaction and request ids

Metrics are collected by sum_mcp.observability.metrics.MetricsMiddleware.
Authentication and rate limiting are not middleware: they run inside the
Dispatcher so every transport shares them.
"""

from sum_mcp.api.middleware.logging import (
    REQUEST_ID_HEADER,
    RequestLoggingMiddleware,
    redact_sensitive_headers,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "RequestLoggingMiddleware",
    "redact_sensitive_headers",
]
