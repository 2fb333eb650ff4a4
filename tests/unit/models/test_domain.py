"""
Tests for Domain Models - descriptors, invocation requests and results.

Pattern: Domain models as value objects
"""

import pytest
from pydantic import ValidationError

from sum_mcp.core.exceptions import ErrorKind
from sum_mcp.models.domain import (
    CancellationToken,
    InvocationFailure,
    InvocationRequest,
    InvocationSuccess,
    ParameterKind,
    ParameterSpec,
    ToolContext,
    ToolDescriptor,
)


def _noop(**kwargs):
    return {}


# =============================================================================
# ParameterSpec
# =============================================================================


class TestParameterSpec:
    """Tests for ParameterSpec invariants and schema output."""

    def test_required_parameter_cannot_have_default(self) -> None:
        with pytest.raises(ValidationError):
            ParameterSpec(name="a", kind=ParameterKind.NUMBER, required=True, default=1)

    def test_optional_string_cannot_be_required(self) -> None:
        with pytest.raises(ValidationError):
            ParameterSpec(name="tz", kind=ParameterKind.OPTIONAL_STRING)

    def test_number_array_schema(self) -> None:
        spec = ParameterSpec(name="values", kind=ParameterKind.NUMBER_ARRAY, description="Numbers")

        assert spec.json_schema() == {
            "type": "array",
            "items": {"type": "number"},
            "description": "Numbers",
        }

    def test_optional_default_appears_in_schema(self) -> None:
        spec = ParameterSpec(
            name="separator", kind=ParameterKind.OPTIONAL_STRING, required=False, default="-"
        )

        assert spec.json_schema()["default"] == "-"

    def test_is_frozen(self) -> None:
        spec = ParameterSpec(name="a", kind=ParameterKind.NUMBER)

        with pytest.raises(ValidationError):
            spec.name = "b"


# =============================================================================
# ToolDescriptor
# =============================================================================


class TestToolDescriptor:
    """Tests for ToolDescriptor."""

    def test_rejects_duplicate_parameter_names(self) -> None:
        with pytest.raises(ValidationError, match="Duplicate parameter"):
            ToolDescriptor(
                name="sum.bad",
                description="bad",
                parameters=(
                    ParameterSpec(name="a", kind=ParameterKind.NUMBER),
                    ParameterSpec(name="a", kind=ParameterKind.STRING),
                ),
                handler=_noop,
            )

    def test_input_schema_lists_required_parameters(self) -> None:
        descriptor = ToolDescriptor(
            name="sum.text.slugify",
            description="slug",
            parameters=(
                ParameterSpec(name="text", kind=ParameterKind.STRING),
                ParameterSpec(
                    name="separator",
                    kind=ParameterKind.OPTIONAL_STRING,
                    required=False,
                    default="-",
                ),
            ),
            handler=_noop,
        )

        schema = descriptor.input_schema()

        assert schema["type"] == "object"
        assert list(schema["properties"]) == ["text", "separator"]
        assert schema["required"] == ["text"]

    def test_accepts_context_detects_context_parameter(self) -> None:
        def with_context(text: str, context: ToolContext) -> dict:
            return {}

        plain = ToolDescriptor(name="a", description="a", handler=_noop)
        aware = ToolDescriptor(name="b", description="b", handler=with_context)

        assert plain.accepts_context is False
        assert aware.accepts_context is True


# =============================================================================
# Cancellation / InvocationRequest
# =============================================================================


class TestCancellationToken:
    def test_starts_uncancelled(self) -> None:
        assert CancellationToken().is_cancelled is False

    def test_cancel_is_sticky(self) -> None:
        token = CancellationToken()
        token.cancel()
        token.cancel()

        assert token.is_cancelled is True


class TestInvocationRequest:
    def test_defaults(self) -> None:
        request = InvocationRequest(tool_name="sum.echo")

        assert request.arguments == {}
        assert request.credential is None
        assert request.trusted is False
        assert request.cancellation.is_cancelled is False

    def test_each_request_gets_its_own_token(self) -> None:
        first = InvocationRequest(tool_name="sum.echo")
        second = InvocationRequest(tool_name="sum.echo")

        assert first.cancellation is not second.cancellation


# =============================================================================
# InvocationResult
# =============================================================================


class TestInvocationResult:
    def test_success(self) -> None:
        result = InvocationSuccess(payload={"result": 5.0})

        assert result.is_success is True
        assert result.status == "success"

    def test_failure(self) -> None:
        result = InvocationFailure(kind=ErrorKind.RATE_LIMITED, message="slow down", retry_after=3)

        assert result.is_success is False
        assert result.status == "failure"
        assert result.retry_after == 3
