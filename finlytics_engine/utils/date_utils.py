"""Date manipulation utilities"""

from datetime import date, datetime
from typing import Union

DateLike = Union[date, datetime, str]


def to_date(value: DateLike | None = None) -> date:
    """Coerce a date, datetime or ISO string to a calendar date (default: today, local time)"""
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    # fromisoformat only learned the "Z" suffix in 3.11
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).date()


def to_iso(value: DateLike | None = None) -> str:
    """ISO YYYY-MM-DD string for a date-like value (default: today)"""
    return to_date(value).isoformat()


def to_iso_or_today(value: object) -> str:
    """Like to_iso, but anything that is not a recognisable date becomes today"""
    try:
        return to_iso(value)
    except (AttributeError, TypeError, ValueError):
        return date.today().isoformat()
