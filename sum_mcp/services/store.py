"""
Optional tool store.

Tools that need an external cache receive a Redis client through their
ToolContext. The store is optional: with no SUM_MCP_REDIS_URL configured,
or when Redis is unreachable at startup, handlers receive ``None`` and must
carry on without it.

The client is synchronous because sync handlers run in executor threads.

Pattern: Lazy initialization with graceful degradation
"""

import logging
from typing import Optional

import redis

from sum_mcp.core.config import Settings

logger = logging.getLogger(__name__)


def create_tool_store(settings: Settings) -> Optional[redis.Redis]:
    """
    Connect the tool store described by the settings.

    Args:
        settings: Application settings.

    Returns:
        A connected Redis client, or None if no store is configured, the
        URL is malformed or the server cannot be reached.
    """
    if not settings.redis_url:
        logger.debug("No Redis URL configured, tool store disabled")
        return None

    try:
        client = redis.Redis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=settings.redis_connect_timeout_seconds,
        )
    except ValueError as e:
        logger.warning(f"Invalid Redis URL, tool store disabled: {e}")
        return None

    try:
        client.ping()
    except redis.RedisError as e:
        logger.warning(f"Redis connection failed, tool store disabled: {e}")
        client.close()
        return None

    logger.info("Tool store connected")
    return client


def close_tool_store(store: Optional[redis.Redis]) -> None:
    """Close the tool store if one was created."""
    if store is not None:
        store.close()
