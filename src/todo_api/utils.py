from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional


# PUBLIC_INTERFACE
def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


# PUBLIC_INTERFACE
def format_timestamp(value: datetime) -> str:
    """
    Format a datetime as an ISO8601 UTC string with millisecond precision.

    Naive datetimes are taken to be UTC already.

    Example:
        2021-12-30T14:48:00.000Z
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


# PUBLIC_INTERFACE
def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO8601 date or datetime string into an aware UTC datetime.

    - A trailing 'Z' is read as UTC.
    - Datetimes without an offset are taken to be UTC.
    - Date-only values become midnight UTC of that day.

    Raises:
        ValueError: if the value is not an ISO8601 date or datetime.
    """
    s = value.strip()
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(s)
    except ValueError:
        try:
            d = date.fromisoformat(s)
        except ValueError as e:
            raise ValueError(
                "Invalid timestamp. Use ISO8601 date or datetime string "
                "(e.g., '2025-01-31' or '2025-01-31T13:45:00Z')."
            ) from e
        parsed = datetime(d.year, d.month, d.day)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def try_parse_timestamp(value: object) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        return None
