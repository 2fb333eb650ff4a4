"""
JSON validation tool.
"""

import json
from typing import Any

from sum_mcp.core.exceptions import ToolError
from sum_mcp.models.domain import ParameterKind, ParameterSpec, ToolDescriptor


def validate_json(json_text: str) -> dict[str, Any]:
    """
    Validate a JSON document and pretty-print it.

    Returns:
        ``{"valid": True, "pretty": <indented document>}``

    Raises:
        ToolError: If the input is empty or is not valid JSON.
    """
    if not json_text or not json_text.strip():
        raise ToolError("Empty input.")
    try:
        document = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise ToolError(f"Invalid JSON: {e}") from e
    return {"valid": True, "pretty": json.dumps(document, indent=2, ensure_ascii=False)}


def _validate_handler(json: str) -> dict[str, Any]:
    return validate_json(json)


JSON_VALIDATE_DESCRIPTOR = ToolDescriptor(
    name="sum.json.validate",
    description="Validates JSON and returns pretty-printed output if valid.",
    parameters=(
        ParameterSpec(name="json", kind=ParameterKind.STRING, description="JSON string."),
    ),
    handler=_validate_handler,
)
