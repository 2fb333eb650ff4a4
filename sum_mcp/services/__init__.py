"""
Services package - admission control and the optional tool store.

- auth: API key Auth Gate
- rate_limit: sliding window rate limiter
- store: optional Redis client handed to tools
"""

from sum_mcp.services.auth import API_KEY_HEADER, AuthGate
from sum_mcp.services.rate_limit import (
    ANONYMOUS_PARTITION,
    RateLimiter,
    RateLimitResult,
    SlidingWindowRateLimiter,
    partition_key_for,
)
from sum_mcp.services.store import close_tool_store, create_tool_store

__all__ = [
    "API_KEY_HEADER",
    "AuthGate",
    "ANONYMOUS_PARTITION",
    "RateLimiter",
    "RateLimitResult",
    "SlidingWindowRateLimiter",
    "partition_key_for",
    "create_tool_store",
    "close_tool_store",
]
