"""Date helpers.

Everything handed to the core is normalised here: calendar dates become
``datetime.date`` and timestamps become naive UTC ``datetime`` values, so the
classifier and the grouping engine never compare aware and naive values.
"""
from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Any, Optional

from homepantry.utilities.constants import DATE_FORMAT
from homepantry.utilities.errors import InvalidInputError

__all__ = ["utcnow", "today", "parse_date", "parse_timestamp", "format_date", "format_timestamp"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (``Z`` suffix allowed) into naive UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, date):
        ts = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            ts = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidInputError(f"Invalid timestamp: {value!r}")
    else:
        raise InvalidInputError(f"Invalid timestamp: {value!r}")
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
    return ts


def parse_date(value: Any) -> Optional[date]:
    """Parse a calendar date. Accepts ``YYYY-MM-DD`` or a full timestamp (date part kept)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.strptime(text[:10], DATE_FORMAT).date()
        except ValueError:
            raise InvalidInputError(f"Invalid date (expected YYYY-MM-DD): {value!r}")
    raise InvalidInputError(f"Invalid date: {value!r}")


def format_date(value: Optional[date]) -> Optional[str]:
    return value.strftime(DATE_FORMAT) if value else None


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() + "Z" if value else None
