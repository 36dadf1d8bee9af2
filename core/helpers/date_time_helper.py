"""
date_time_helper.py

Helpers for conversion and formatting of date and time values.

Stored timestamps are always timezone-aware UTC and serialized as ISO-8601;
display strings use the machine's local timezone.
"""

from datetime import datetime, date, timedelta, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as local time; the result is aware UTC."""
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(timezone.utc)


def to_iso(value: datetime) -> str:
    """Serialize a datetime as an ISO-8601 UTC string (full precision)."""
    return ensure_utc(value).isoformat()


def from_iso(text: str) -> datetime:
    """
    Parse an ISO-8601 string (accepts a trailing 'Z') into an aware UTC datetime.

    :raises ValueError: if the string is not ISO-8601
    """
    return ensure_utc(datetime.fromisoformat(text))


def days_from(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)


def utc_to_local_str(utc_iso: str) -> str:
    """
    Formats a UTC ISO8601 timestamp as a human-readable local string.

    :param utc_iso: UTC time as ISO string (from DB/logs)
    :return: String in format "DD.MM.YYYY HH:mm:ss" (local time)
    """
    return datetime.fromisoformat(utc_iso).astimezone().strftime("%d.%m.%Y %H:%M:%S")


def format_date(value: datetime | date) -> str:
    """Short local date for list rows, e.g. '08 Dec 2025'."""
    if isinstance(value, datetime):
        value = value.astimezone().date()
    return value.strftime("%d %b %Y")


def parse_local_date(text: str) -> datetime:
    """
    Parse a 'YYYY-MM-DD' form value into an aware UTC datetime at local midnight.

    :raises ValueError: on malformed input
    """
    d = date.fromisoformat(text.strip())
    return ensure_utc(datetime(d.year, d.month, d.day))
