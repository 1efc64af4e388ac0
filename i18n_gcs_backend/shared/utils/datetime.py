"""
UTC datetime utilities for object metadata timestamps.

GCS reports timestamps as RFC 3339 strings ("2024-05-01T10:00:00.123Z").
All datetimes leaving the gateway are timezone-aware UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def parse_rfc3339_utc(value: str) -> datetime:
    """
    Parse an RFC 3339 timestamp into a UTC-aware datetime.

    Accepts the trailing "Z" designator that GCS uses.

    Args:
        value: Timestamp string, e.g. "2024-05-01T10:00:00.123Z"

    Returns:
        UTC-aware datetime

    Raises:
        ValueError: If the string is not a valid timestamp
    """
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)
