"""
Text tools - slug generation and email extraction.
"""

import re
import unicodedata
from typing import Any

from sum_mcp.models.domain import ParameterKind, ParameterSpec, ToolDescriptor

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}")

# Characters turned into word breaks; everything else non-alphanumeric is dropped
_BREAK_CHARACTERS = frozenset("_-.+")


def slugify(text: str, separator: str = "-") -> dict[str, Any]:
    """
    Convert text to a URL-friendly slug.

    The text is lower-cased and decomposed (NFD) so accents can be dropped.
    Letters and digits are kept, whitespace and ``_ - . +`` separate words,
    and the remaining characters are removed. Words are joined with
    ``separator``.

    Example:
        >>> slugify("Hello, World!")
        {'slug': 'hello-world'}
    """
    kept = []
    for ch in unicodedata.normalize("NFD", text.lower()):
        if unicodedata.category(ch) == "Mn":
            continue
        if ch.isalnum():
            kept.append(ch)
        elif ch.isspace() or ch in _BREAK_CHARACTERS:
            kept.append(" ")
    return {"slug": separator.join("".join(kept).split())}


def extract_emails(text: str) -> dict[str, Any]:
    """Find email-like tokens; duplicates are dropped, first-seen order is kept."""
    emails = list(dict.fromkeys(EMAIL_PATTERN.findall(text)))
    return {"count": len(emails), "emails": emails}


# =============================================================================
# Tool Definitions
# =============================================================================

SLUGIFY_DESCRIPTOR = ToolDescriptor(
    name="sum.text.slugify",
    description="Converts text to a URL-friendly slug.",
    parameters=(
        ParameterSpec(name="text", kind=ParameterKind.STRING, description="Input text."),
        ParameterSpec(
            name="separator",
            kind=ParameterKind.OPTIONAL_STRING,
            required=False,
            default="-",
            description="Replace spaces with this character. Default: '-'",
        ),
    ),
    handler=slugify,
)

EXTRACT_EMAILS_DESCRIPTOR = ToolDescriptor(
    name="sum.text.extract_emails",
    description="Extracts email-like tokens from text.",
    parameters=(
        ParameterSpec(name="text", kind=ParameterKind.STRING, description="Text to scan."),
    ),
    handler=extract_emails,
)
