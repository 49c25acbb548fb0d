"""
Timestamp helpers for EIP-4361 date-time fields.
"""

from datetime import datetime, timedelta, timezone
from typing import Union

from siwe_auth.utils.validation import ISO8601_PATTERN, validate_iso8601


def utc_now() -> datetime:
    """Get the current datetime as UTC timezone."""
    return datetime.now(tz=timezone.utc)


def to_iso8601(dt: datetime) -> str:
    """
    Format a datetime the way wallets emit it.

    Args:
        dt: Datetime (naive values are taken as UTC)

    Returns:
        UTC timestamp with millisecond precision, e.g. 2024-01-01T00:00:00.000Z
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return (
        dt.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def parse_iso8601(value: str) -> datetime:
    """
    Parse an ISO-8601 date-time string into an aware datetime.

    Fractions beyond microseconds are truncated and a leap second (":60")
    rolls over into the next minute.

    Args:
        value: Timestamp string

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If value is not a valid ISO-8601 date-time
    """
    if not validate_iso8601(value):
        raise ValueError(f"Invalid ISO-8601 date-time: {value!r}")

    match = ISO8601_PATTERN.match(value)

    fraction = match.group("fraction") or ""
    microsecond = int(fraction[1:7].ljust(6, "0")) if fraction else 0

    offset = match.group("offset")
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = offset[1:].split(":")
        tz = timezone(sign * timedelta(hours=int(hours), minutes=int(minutes)))

    second = int(match.group("second"))
    leap = second == 60

    parsed = datetime(
        int(match.group("year")),
        int(match.group("month")),
        int(match.group("day")),
        int(match.group("hour")),
        int(match.group("minute")),
        59 if leap else second,
        microsecond,
        tzinfo=tz,
    )
    if leap:
        parsed += timedelta(seconds=1)

    return parsed


def coerce_datetime(value: Union[str, datetime]) -> datetime:
    """
    Normalize a check time given as text or datetime.

    Args:
        value: ISO-8601 string or datetime (naive values are taken as UTC)

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If a string value is not ISO-8601
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    return parse_iso8601(value)
