"""
Greeting, echo and identifier tools.

The simplest tools in the catalog; useful to check a client can reach the
server end to end.
"""

import uuid
from typing import Any, Optional

from sum_mcp.models.domain import ParameterKind, ParameterSpec, ToolDescriptor

DEFAULT_GREETING_NAME = "Sum Matrix"


def hello(name: Optional[str] = None) -> dict[str, Any]:
    """
    Return a friendly greeting.

    Blank or missing names fall back to DEFAULT_GREETING_NAME; other names
    are trimmed.
    """
    who = name.strip() if name and name.strip() else DEFAULT_GREETING_NAME
    return {"message": f"Hello {who}!"}


def echo(text: str) -> dict[str, Any]:
    return {"text": text}


def new_uuid() -> dict[str, Any]:
    """Generate a random (version 4) UUID."""
    return {"uuid": str(uuid.uuid4())}


# =============================================================================
# Tool Definitions
# =============================================================================

HELLO_DESCRIPTOR = ToolDescriptor(
    name="sum.hello",
    description="Returns a friendly greeting.",
    parameters=(
        ParameterSpec(
            name="name",
            kind=ParameterKind.OPTIONAL_STRING,
            required=False,
            description="Optional name to personalize the greeting.",
        ),
    ),
    handler=hello,
)

ECHO_DESCRIPTOR = ToolDescriptor(
    name="sum.echo",
    description="Echoes back the provided text.",
    parameters=(
        ParameterSpec(name="text", kind=ParameterKind.STRING, description="Any text to echo back."),
    ),
    handler=echo,
)

NEW_UUID_DESCRIPTOR = ToolDescriptor(
    name="sum.uuid.new",
    description="Generates a new UUID.",
    handler=new_uuid,
)
