"""
Time tools - current time and date/time parsing.

Timezones are IANA names resolved through zoneinfo. An unknown timezone or
an unparseable input is reported to the caller as a ToolError rather than
as an ``error`` field inside a successful payload.
"""

from datetime import datetime, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sum_mcp.core.exceptions import ToolError
from sum_mcp.models.domain import ParameterKind, ParameterSpec, ToolDescriptor

# Tried in order after ISO-8601 parsing fails
_FALLBACK_FORMATS = (
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%d %b %Y %H:%M:%S",
    "%d %b %Y",
    "%b %d, %Y %H:%M:%S",
    "%b %d, %Y",
)


def _resolve_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError):
        raise ToolError(f"Invalid timezone id: {name}") from None


def _utc_iso(moment: datetime) -> str:
    """ISO-8601 in UTC with a trailing 'Z'."""
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ToolError("Unrecognized date/time format.")


def now(timezone_name: Optional[str] = None) -> dict[str, Any]:
    """
    Return the current time in UTC, and in an IANA timezone when given.

    Args:
        timezone_name: IANA timezone such as 'Europe/London'. Blank means
            UTC only.

    Raises:
        ToolError: If the timezone is unknown.
    """
    utc_now = datetime.now(timezone.utc)
    result: dict[str, Any] = {
        "utcIso": utc_now.isoformat(),
        "unixSeconds": int(utc_now.timestamp()),
    }
    if timezone_name is None or not timezone_name.strip():
        return result

    zone = _resolve_zone(timezone_name)
    result["localIso"] = utc_now.astimezone(zone).isoformat()
    result["timezone"] = zone.key
    return result


def parse(text: str, timezone_name: Optional[str] = None) -> dict[str, Any]:
    """
    Parse a date/time string into ISO-8601 (UTC) and Unix epoch seconds.

    Naive inputs are read in ``timezone_name`` when given, otherwise as
    UTC. Inputs carrying an offset keep their own offset.

    Raises:
        ToolError: On empty or unrecognised input, or an unknown timezone.
    """
    if not text or not text.strip():
        raise ToolError("Empty input.")

    parsed = _parse_datetime(text.strip())
    if parsed.tzinfo is None:
        if timezone_name is not None and timezone_name.strip():
            parsed = parsed.replace(tzinfo=_resolve_zone(timezone_name))
        else:
            parsed = parsed.replace(tzinfo=timezone.utc)

    return {"iso": _utc_iso(parsed), "unixSeconds": int(parsed.timestamp())}


def _now_handler(timezone: Optional[str] = None) -> dict[str, Any]:
    return now(timezone)


def _parse_handler(input: str, timezone: Optional[str] = None) -> dict[str, Any]:
    return parse(input, timezone)


# =============================================================================
# Tool Definitions
# =============================================================================

_TIMEZONE_PARAMETER = ParameterSpec(
    name="timezone",
    kind=ParameterKind.OPTIONAL_STRING,
    required=False,
    description="IANA timezone like 'Europe/London' or 'Asia/Jerusalem'.",
)

TIME_NOW_DESCRIPTOR = ToolDescriptor(
    name="sum.time.now",
    description="Returns current time in UTC and an optional IANA timezone.",
    parameters=(_TIMEZONE_PARAMETER,),
    handler=_now_handler,
)

TIME_PARSE_DESCRIPTOR = ToolDescriptor(
    name="sum.time.parse",
    description="Parses a date/time input into ISO-8601 and Unix epoch seconds.",
    parameters=(
        ParameterSpec(
            name="input",
            kind=ParameterKind.STRING,
            description="Date/time string, e.g. '2025-08-22T09:30:00Z' or '2025-08-22 09:30'.",
        ),
        _TIMEZONE_PARAMETER,
    ),
    handler=_parse_handler,
)
