"""
UTC time helpers.

Rows read back from some drivers carry naive datetimes; every domain
computation works on aware UTC values.

Dependencies: datetime (stdlib)
System role: Time normalization for domain logic
"""

from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Return the current aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Naive values are assumed to already be UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_date(value: datetime) -> date:
    """Calendar date of a datetime in UTC."""
    return ensure_utc(value).date()
