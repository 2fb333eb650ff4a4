"""
Domain Models - tool descriptors, invocation requests and results.

This module contains the internal domain models of the dispatch layer:
parameter specs, tool descriptors, the per-call invocation request, and the
closed Success/Failure result union every call terminates with.

Pattern: Domain models as value objects (frozen Pydantic models)
Pattern: Closed tagged union for results (status discriminator)

Note: These models are distinct from the request/response models in
tools.py and jsonrpc.py, which describe the wire surface of the transports.
"""

import inspect
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from sum_mcp.core.exceptions import BindingFailure, ErrorKind


# =============================================================================
# ParameterKind / ParameterSpec
# =============================================================================


class ParameterKind(str, Enum):
    """Kinds the argument binder knows how to convert."""

    STRING = "string"
    OPTIONAL_STRING = "optional_string"
    NUMBER = "number"
    NUMBER_ARRAY = "number_array"


_JSON_SCHEMA_BY_KIND: dict[ParameterKind, dict[str, Any]] = {
    ParameterKind.STRING: {"type": "string"},
    ParameterKind.OPTIONAL_STRING: {"type": ["string", "null"]},
    ParameterKind.NUMBER: {"type": "number"},
    ParameterKind.NUMBER_ARRAY: {"type": "array", "items": {"type": "number"}},
}


class ParameterSpec(BaseModel):
    """
    Declaration of one tool parameter.

    Attributes:
        name: Argument key, matched case-sensitively.
        kind: Conversion applied by the binder.
        required: Whether the caller must supply the argument.
        default: Value substituted when an optional argument is omitted.
        description: Human-readable description used in the catalog.
    """

    name: str = Field(..., min_length=1)
    kind: ParameterKind
    required: bool = True
    default: Any = None
    description: Optional[str] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_required_has_no_default(self) -> "ParameterSpec":
        if self.required and self.default is not None:
            raise ValueError(f"Required parameter '{self.name}' cannot declare a default")
        if self.required and self.kind is ParameterKind.OPTIONAL_STRING:
            raise ValueError(f"Parameter '{self.name}' of kind optional_string cannot be required")
        return self

    def json_schema(self) -> dict[str, Any]:
        """JSON Schema fragment describing this parameter."""
        schema = dict(_JSON_SCHEMA_BY_KIND[self.kind])
        if self.description:
            schema["description"] = self.description
        if not self.required and self.default is not None:
            schema["default"] = self.default
        return schema


# =============================================================================
# ToolDescriptor
# =============================================================================


class ToolDescriptor(BaseModel):
    """
    A registered tool: metadata, parameter schema and handler.

    Immutable once built. The handler may be sync or async; it receives the
    bound arguments as keyword arguments, plus ``context`` (a ToolContext)
    when its signature declares a parameter of that name.

    Example:
        >>> ToolDescriptor(
        ...     name="sum.math.add",
        ...     description="Adds two numbers.",
        ...     parameters=(
        ...         ParameterSpec(name="a", kind=ParameterKind.NUMBER),
        ...         ParameterSpec(name="b", kind=ParameterKind.NUMBER),
        ...     ),
        ...     handler=math_add,
        ... )
    """

    name: str = Field(..., min_length=1, description="Unique, dot-namespaced tool name")
    description: str = Field(..., description="Human-readable description")
    parameters: tuple[ParameterSpec, ...] = Field(default=())
    handler: Callable[..., Any] = Field(..., description="Tool execution callable")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @model_validator(mode="after")
    def _check_unique_parameter_names(self) -> "ToolDescriptor":
        seen: set[str] = set()
        for spec in self.parameters:
            if spec.name in seen:
                raise ValueError(f"Duplicate parameter '{spec.name}' in tool '{self.name}'")
            seen.add(spec.name)
        return self

    @property
    def accepts_context(self) -> bool:
        """True when the handler declares a ``context`` parameter."""
        return "context" in inspect.signature(self.handler).parameters

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema of the tool's arguments, as published by discovery."""
        return {
            "type": "object",
            "properties": {spec.name: spec.json_schema() for spec in self.parameters},
            "required": [spec.name for spec in self.parameters if spec.required],
        }


# =============================================================================
# Cancellation and handler context
# =============================================================================


class CancellationToken:
    """
    Cancellation signal shared between a transport and one request.

    Backed by a threading.Event so sync handlers running in the executor
    can observe it.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"


@dataclass(frozen=True)
class ToolContext:
    """
    Capabilities handed to handlers that declare a ``context`` parameter.

    Attributes:
        cancellation: The request's cancellation token. Handlers doing I/O
            must check it.
        store: Optional Redis client. None when no store is configured,
            which handlers must treat as a normal case.
    """

    cancellation: CancellationToken
    store: Optional[Any] = None


# =============================================================================
# InvocationRequest
# =============================================================================


class InvocationRequest(BaseModel):
    """
    One inbound tool call, created by a transport and consumed once.

    Attributes:
        tool_name: Name of the tool to invoke.
        arguments: Untyped argument bag as received from the wire.
        credential: Value of the caller's credential header, if any.
        trusted: True for the local stdio transport, which bypasses the
            Auth Gate.
        cancellation: Signal the transport sets when the caller goes away.
    """

    tool_name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    credential: Optional[str] = None
    trusted: bool = False
    cancellation: CancellationToken = Field(default_factory=CancellationToken)

    model_config = {"arbitrary_types_allowed": True}


# =============================================================================
# InvocationResult - closed Success/Failure union
# =============================================================================


class InvocationSuccess(BaseModel):
    """Successful tool call carrying a JSON-compatible payload."""

    status: Literal["success"] = "success"
    payload: Any = None

    model_config = {"frozen": True}

    @property
    def is_success(self) -> bool:
        return True


class InvocationFailure(BaseModel):
    """
    Failed tool call.

    Attributes:
        kind: Failure kind.
        message: Human-readable message, safe to return to callers.
        reason: Why binding failed (INVALID_ARGUMENTS only).
        parameter: Offending parameter (INVALID_ARGUMENTS only).
        expected_kind: Expected parameter kind (type mismatches only).
        retry_after: Seconds until the caller may retry (RATE_LIMITED only).
    """

    status: Literal["failure"] = "failure"
    kind: ErrorKind
    message: str
    reason: Optional[BindingFailure] = None
    parameter: Optional[str] = None
    expected_kind: Optional[str] = None
    retry_after: Optional[int] = None

    model_config = {"frozen": True}

    @property
    def is_success(self) -> bool:
        return False


InvocationResult = Union[InvocationSuccess, InvocationFailure]
