"""
Custom exceptions for the Sum MCP server.

This module provides the exception hierarchy used by the registry, the
argument binder and the tool handlers. All exceptions inherit from
SumMcpException and carry an error code that maps one-to-one onto the
failure kinds of the invocation envelope.
"""

from enum import Enum
from typing import Any, Optional


# =============================================================================
# Error Codes
# =============================================================================


class ErrorKind(str, Enum):
    """
    Failure kinds of an invocation.

    Every failed tool call terminates with exactly one of these. The
    transports translate them into their own framing (HTTP status codes,
    JSON-RPC error objects).
    """

    UNAUTHORIZED = "UNAUTHORIZED"
    RATE_LIMITED = "RATE_LIMITED"
    UNKNOWN_TOOL = "UNKNOWN_TOOL"
    INVALID_ARGUMENTS = "INVALID_ARGUMENTS"
    TOOL_ERROR = "TOOL_ERROR"
    CANCELLED = "CANCELLED"


class BindingFailure(str, Enum):
    """Why argument binding rejected a call."""

    MISSING_PARAMETER = "MISSING_PARAMETER"
    TYPE_MISMATCH = "TYPE_MISMATCH"


# =============================================================================
# Base Exception
# =============================================================================


class SumMcpException(Exception):
    """
    Base exception for all Sum MCP errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error kind.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorKind = ErrorKind.TOOL_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error kind.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


# =============================================================================
# ToolError
# =============================================================================


class ToolError(SumMcpException):
    """
    Domain failure signalled by a tool handler.

    Handlers raise this for malformed domain input (unparseable date text,
    invalid JSON, unknown timezone). The message is returned to the caller
    verbatim, so it must never contain internal details.
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, ErrorKind.TOOL_ERROR, **kwargs)


# =============================================================================
# BindingError
# =============================================================================


class BindingError(SumMcpException):
    """
    Raised when raw arguments cannot be bound to a tool's parameters.

    Attributes:
        reason: MISSING_PARAMETER or TYPE_MISMATCH.
        parameter: Name of the offending parameter.
        expected_kind: Declared kind of the parameter (type mismatches only).
    """

    def __init__(
        self,
        reason: BindingFailure,
        parameter: str,
        expected_kind: Optional[str] = None,
    ) -> None:
        if reason is BindingFailure.MISSING_PARAMETER:
            message = f"Missing required parameter: {parameter}"
        else:
            message = f"Invalid type for '{parameter}': expected {expected_kind}"
        super().__init__(message, ErrorKind.INVALID_ARGUMENTS)
        self.reason = reason
        self.parameter = parameter
        self.expected_kind = expected_kind


# =============================================================================
# Registry Errors
# =============================================================================


class ToolNotFoundError(SumMcpException):
    """Raised when a requested tool is not found in the registry."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Tool not found: {tool_name}", ErrorKind.UNKNOWN_TOOL)
        self.tool_name = tool_name


class DuplicateToolError(SumMcpException):
    """Raised when a tool name is registered twice."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Tool already registered: {tool_name}")
        self.tool_name = tool_name


class RegistryFrozenError(SumMcpException):
    """Raised when the registry is mutated after startup completed."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Registry is frozen, cannot register: {tool_name}")
        self.tool_name = tool_name
