"""Timestamp helpers."""

from datetime import datetime, timezone

UTC = timezone.utc


def utc_now() -> datetime:
    return datetime.now(UTC)


def iso_timestamp(dt: datetime | None = None) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    dt = (dt or utc_now()).astimezone(UTC)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
