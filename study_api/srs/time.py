"""UTC time helpers for review scheduling.

Timestamps are stored as UTC ISO strings with second precision and a trailing 'Z':
YYYY-MM-DDTHH:MM:SSZ
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC 'now'."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Return `dt` as an aware UTC datetime. Naive values are taken to be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_datetime_to_iso_z(dt: datetime) -> str:
    """Format a datetime as UTC ISO string with second precision and trailing 'Z'."""
    dt = ensure_utc(dt).replace(microsecond=0)
    return dt.isoformat().replace("+00:00", "Z")


def utc_now_iso() -> str:
    return utc_datetime_to_iso_z(utc_now())


def parse_iso_z(s: str) -> datetime:
    """Parse an ISO-8601 string ending with 'Z' (or an explicit offset) into UTC datetime.

    Accepts both second precision and fractional seconds.
    """
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(s))


def as_utc_datetime(value: str | datetime) -> datetime:
    """Coerce a stored ISO string or a datetime to an aware UTC datetime."""
    if isinstance(value, str):
        return parse_iso_z(value)
    return ensure_utc(value)


def utc_date(value: str | datetime | None) -> date | None:
    """Return the UTC calendar date of a timestamp, or None when unset."""
    if value is None:
        return None
    return as_utc_datetime(value).date()


def add_days(now: datetime, days: int) -> datetime:
    return ensure_utc(now) + timedelta(days=days)
