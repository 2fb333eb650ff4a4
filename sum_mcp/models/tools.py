"""
Tool Models - discovery and REST execution surface.

This module contains Pydantic models for the tool catalog and for the
REST request/response pair of ``POST /v1/tools/execute``.

Anti-Patterns Avoided:
- Optional fields use Optional[T] with explicit None default
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from sum_mcp.core.exceptions import BindingFailure, ErrorKind


# =============================================================================
# ToolCatalogEntry
# =============================================================================


class ToolCatalogEntry(BaseModel):
    """
    Discovery entry for one registered tool.

    Attributes:
        name: Unique tool identifier
        description: Human-readable description
        input_schema: JSON Schema for tool arguments (``inputSchema`` on the wire)
    """

    name: str = Field(..., description="Unique tool identifier")
    description: str = Field(..., description="Tool description")
    input_schema: dict[str, Any] = Field(
        ..., alias="inputSchema", description="JSON Schema for tool arguments"
    )

    model_config = {"populate_by_name": True}


# =============================================================================
# ToolExecuteRequest
# =============================================================================


class ToolExecuteRequest(BaseModel):
    """
    Tool execution request model.

    Attributes:
        name: Tool name to execute
        arguments: Raw tool arguments, bound against the tool's parameters
    """

    name: str = Field(..., description="Tool name to execute")
    arguments: dict[str, Any] = Field(
        default_factory=dict, description="Tool arguments"
    )


# =============================================================================
# ToolExecuteResponse
# =============================================================================


class ToolExecuteResponse(BaseModel):
    """
    Tool execution response model (the REST rendering of the envelope).

    Attributes:
        name: Tool name that was executed
        success: Whether execution succeeded
        result: Tool payload on success
        error: Error message if execution failed
        error_kind: Failure kind if execution failed
        error_reason: Binding failure reason for INVALID_ARGUMENTS
    """

    name: str = Field(..., description="Tool name")
    success: bool = Field(..., description="Whether execution succeeded")
    result: Optional[Any] = Field(default=None, description="Execution result")
    error: Optional[str] = Field(default=None, description="Error message if failed")
    error_kind: Optional[ErrorKind] = Field(
        default=None, description="Failure kind if failed"
    )
    error_reason: Optional[BindingFailure] = Field(
        default=None, description="Binding failure reason if arguments were invalid"
    )
