"""Time parsing, rounding and formatting utilities."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Return `dt` as an aware UTC datetime. Naive values are taken to be UTC."""

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def round_instant(dt: datetime, step: timedelta) -> datetime:
    """Round `dt` to the nearest multiple of `step` counted from the Unix epoch.

    Halfway values round up.

    Args:
        dt: Aware datetime.
        step: Positive rounding granularity.

    Returns:
        Rounded aware UTC datetime.
    """

    dt = to_utc(dt)
    rem = (dt - EPOCH) % step
    floored = dt - rem
    if rem * 2 >= step:
        return floored + step
    return floored


def parse_instant(text: str) -> datetime:
    """Parse an ISO 8601 instant such as "2024-03-01T00:00:00Z".

    Raises:
        ValueError: If the text is not a valid ISO 8601 datetime.
    """

    s = text.strip()
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError as exc:
        raise ValueError(f"cannot parse instant {text!r}; expected e.g. 2024-03-01T00:00:00Z") from exc
    return to_utc(dt)


def format_rfc3339(dt: datetime) -> str:
    """Format as RFC 3339 in UTC with a trailing "Z" and whole seconds."""

    return to_utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")
