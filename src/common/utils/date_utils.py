"""Utility functions for timestamp handling on the document wire format."""

from datetime import datetime

import pytz


def utc_now() -> datetime:
    """Returns the current time as an aware UTC datetime."""
    return datetime.now(pytz.utc)


def format_datetime_for_document(dt: datetime | None) -> str | None:
    """Formats a datetime as an ISO-8601 string. Naive values are taken as UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt.astimezone(pytz.utc).isoformat().replace("+00:00", "Z")


def parse_datetime_from_document(value) -> datetime | None:
    """Parses an ISO-8601 string (or a datetime the store already decoded) into aware UTC."""
    if not value:
        return None
    if isinstance(value, datetime):
        dt_obj = value
    else:
        try:
            # Handle both Z and +00:00 for UTC, or local timezone
            dt_obj = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except (ValueError, TypeError):
            return None
    if dt_obj.tzinfo is None:
        return pytz.utc.localize(dt_obj)
    return dt_obj.astimezone(pytz.utc)
