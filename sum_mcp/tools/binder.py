"""
Argument Binder - shapes an untyped argument bag into handler arguments.

Walks the declared parameters in order, applies defaults for omitted
optional parameters and converts present values according to their
ParameterKind. Unknown extra keys are ignored so older servers accept
arguments added by newer clients.

Pattern: Fail-fast validation at the dispatch boundary
"""

import copy
import math
from typing import Any, Callable, Mapping, Sequence

from sum_mcp.core.exceptions import BindingError, BindingFailure
from sum_mcp.models.domain import ParameterKind, ParameterSpec


class _Mismatch(Exception):
    """Internal signal: a value does not convert to the requested kind."""


def _to_number(value: Any) -> float:
    # bool is a subclass of int but never a valid number
    if isinstance(value, bool):
        raise _Mismatch
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise _Mismatch from None
    else:
        raise _Mismatch
    if math.isnan(number) or math.isinf(number):
        raise _Mismatch
    return number


def _to_number_array(value: Any) -> list[float]:
    if not isinstance(value, (list, tuple)):
        raise _Mismatch
    return [_to_number(item) for item in value]


def _to_string(value: Any) -> str:
    if not isinstance(value, str):
        raise _Mismatch
    return value


_CONVERTERS: dict[ParameterKind, Callable[[Any], Any]] = {
    ParameterKind.STRING: _to_string,
    ParameterKind.OPTIONAL_STRING: _to_string,
    ParameterKind.NUMBER: _to_number,
    ParameterKind.NUMBER_ARRAY: _to_number_array,
}


def bind_arguments(
    parameters: Sequence[ParameterSpec], raw_arguments: Mapping[str, Any]
) -> dict[str, Any]:
    """
    Bind raw arguments to a tool's declared parameters.

    An explicit ``null`` is treated the same as an omitted key.

    Args:
        parameters: The tool's ParameterSpecs, in declared order.
        raw_arguments: Argument bag as received from the transport. Not mutated.

    Returns:
        Mapping of parameter name to converted value, in declared order.

    Raises:
        BindingError: MISSING_PARAMETER for an absent required parameter,
            TYPE_MISMATCH for a value that does not convert.
    """
    bound: dict[str, Any] = {}
    for spec in parameters:
        value = raw_arguments.get(spec.name)
        if value is None:
            if spec.required:
                raise BindingError(BindingFailure.MISSING_PARAMETER, spec.name)
            bound[spec.name] = copy.deepcopy(spec.default)
            continue

        try:
            bound[spec.name] = _CONVERTERS[spec.kind](value)
        except _Mismatch:
            raise BindingError(
                BindingFailure.TYPE_MISMATCH, spec.name, expected_kind=spec.kind.value
            ) from None
    return bound
