"""
Unit tests for sum_mcp/core/exceptions.py - Custom Exception Classes.
"""

import pytest

from sum_mcp.core.exceptions import (
    BindingError,
    BindingFailure,
    DuplicateToolError,
    ErrorKind,
    RegistryFrozenError,
    SumMcpException,
    ToolError,
    ToolNotFoundError,
)


class TestSumMcpException:
    def test_carries_message_and_code(self):
        exc = SumMcpException("boom", ErrorKind.TOOL_ERROR)

        assert str(exc) == "boom"
        assert exc.message == "boom"
        assert exc.error_code is ErrorKind.TOOL_ERROR

    def test_extra_kwargs_become_attributes(self):
        exc = SumMcpException("boom", detail="x")

        assert exc.detail == "x"

    @pytest.mark.parametrize(
        "exc",
        [
            ToolError("bad"),
            BindingError(BindingFailure.MISSING_PARAMETER, "a"),
            ToolNotFoundError("sum.nope"),
            DuplicateToolError("sum.echo"),
            RegistryFrozenError("sum.echo"),
        ],
    )
    def test_hierarchy(self, exc):
        assert isinstance(exc, SumMcpException)


class TestToolError:
    def test_maps_to_tool_error_kind(self):
        exc = ToolError("Unrecognized date/time format.")

        assert exc.error_code is ErrorKind.TOOL_ERROR
        assert exc.message == "Unrecognized date/time format."


class TestBindingError:
    def test_missing_parameter_message(self):
        exc = BindingError(BindingFailure.MISSING_PARAMETER, "values")

        assert exc.message == "Missing required parameter: values"
        assert exc.parameter == "values"
        assert exc.expected_kind is None
        assert exc.error_code is ErrorKind.INVALID_ARGUMENTS

    def test_type_mismatch_message(self):
        exc = BindingError(BindingFailure.TYPE_MISMATCH, "a", expected_kind="number")

        assert exc.message == "Invalid type for 'a': expected number"
        assert exc.reason is BindingFailure.TYPE_MISMATCH


class TestToolNotFoundError:
    def test_message_names_tool(self):
        exc = ToolNotFoundError("sum.nope")

        assert exc.message == "Tool not found: sum.nope"
        assert exc.error_code is ErrorKind.UNKNOWN_TOOL
