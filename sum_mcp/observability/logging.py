"""
Structured Logging Module

JSON log lines via structlog, written to stderr. Under the stdio transport
stdout carries protocol frames only, so nothing here may write to it.

Correlation ids live in structlog's context variables. The HTTP middleware
binds the request id for the lifetime of a request and the stdio worker
binds the JSON-RPC id of the request it is handling. Every line logged in
between carries it as ``correlation_id``.

Pattern: Singleton configuration (configure once at startup)
"""

import logging
import sys
from contextlib import contextmanager
from typing import Generator, Optional, TextIO

import structlog
from structlog.types import Processor

CORRELATION_ID_KEY = "correlation_id"

_configured: bool = False


# =============================================================================
# Correlation ID
# =============================================================================


def set_correlation_id(correlation_id: str) -> None:
    structlog.contextvars.bind_contextvars(**{CORRELATION_ID_KEY: correlation_id})


def get_correlation_id() -> Optional[str]:
    """Return the correlation id bound to the current context, if any."""
    return structlog.contextvars.get_contextvars().get(CORRELATION_ID_KEY)


def clear_correlation_id() -> None:
    structlog.contextvars.unbind_contextvars(CORRELATION_ID_KEY)


@contextmanager
def correlation_id_context(correlation_id: str) -> Generator[None, None, None]:
    """
    Bind a correlation id for the duration of a block.

    The previous value, if any, is restored on exit.

    Example:
        >>> with correlation_id_context("req-12345"):
        ...     logger.info("dispatching tool call")
    """
    with structlog.contextvars.bound_contextvars(**{CORRELATION_ID_KEY: correlation_id}):
        yield


# =============================================================================
# Configuration
# =============================================================================


def _processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(
    level: str = "INFO",
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Called once by each entry point (``serve-http``, ``serve-stdio``).
    Later calls are no-ops unless ``force`` is set.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        stream: Destination stream; stderr when omitted.
        force: Reconfigure even if already configured (tests).
    """
    global _configured

    if _configured and not force:
        return

    output = stream or sys.stderr
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )

    # Modules on logging.getLogger(__name__) write to the same stream
    logging.basicConfig(
        level=numeric_level,
        stream=output,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=force,
    )

    _configured = True


def reset_logging() -> None:
    """Forget that logging was configured. Tests only."""
    global _configured
    _configured = False


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger tagged with ``logger_name=name``.

    The returned logger is a lazy proxy, so module-level loggers created at
    import time pick up whatever configure_logging() sets later.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("tool call succeeded", tool="sum.math.add")
    """
    # "logger" is a positional parameter of wrap_logger, hence logger_name.
    # bind() would freeze the default stdout config into the proxy.
    return structlog.get_logger(logger_name=name)
