"""Shared timestamp helper utilities."""

from __future__ import annotations

from datetime import datetime, timezone


def domain_utc_now() -> datetime:
    """Return the current instant as an aware UTC datetime."""

    return datetime.now(timezone.utc)


def domain_format_timestamp(moment: datetime | None = None) -> str:
    """Render one instant as an ISO-8601 UTC string with millisecond precision.

    Args:
        moment: Instant to render. Naive values are treated as UTC. Defaults to now.

    Returns:
        str: Timestamp such as `2024-01-31T12:00:00.123Z`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if moment is None:
        moment = domain_utc_now()
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
