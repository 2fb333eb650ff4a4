"""Math tools over numbers and number arrays."""

from typing import Any, Union

from sum_mcp.models.domain import ParameterKind, ParameterSpec, ToolDescriptor

_EXACT_INT_LIMIT = 2**53


def _number(value: float) -> Union[float, int]:
    """Integral results serialize as JSON integers (``5``, not ``5.0``)."""
    if value.is_integer() and abs(value) <= _EXACT_INT_LIMIT:
        return int(value)
    return value


def add(a: float, b: float) -> dict[str, Any]:
    return {"result": _number(float(a + b))}


def total(values: list[float]) -> dict[str, Any]:
    return {"count": len(values), "sum": _number(float(sum(values)))}


def average(values: list[float]) -> dict[str, Any]:
    """Average of the values; ``None`` for an empty array."""
    if not values:
        return {"count": 0, "average": None}
    return {"count": len(values), "average": _number(sum(values) / len(values))}


# =============================================================================
# Tool Definitions
# =============================================================================

_VALUES_PARAMETER = ParameterSpec(
    name="values", kind=ParameterKind.NUMBER_ARRAY, description="Array of numbers."
)

MATH_ADD_DESCRIPTOR = ToolDescriptor(
    name="sum.math.add",
    description="Adds two numbers.",
    parameters=(
        ParameterSpec(name="a", kind=ParameterKind.NUMBER, description="First number."),
        ParameterSpec(name="b", kind=ParameterKind.NUMBER, description="Second number."),
    ),
    handler=add,
)

MATH_SUM_DESCRIPTOR = ToolDescriptor(
    name="sum.math.sum",
    description="Sums an array of numbers.",
    parameters=(_VALUES_PARAMETER,),
    handler=total,
)

MATH_AVG_DESCRIPTOR = ToolDescriptor(
    name="sum.math.avg",
    description="Averages an array of numbers.",
    parameters=(_VALUES_PARAMETER,),
    handler=average,
)
