"""Date manipulation utilities"""

from datetime import date, datetime, time, timezone
from typing import Optional, Union


def to_naive_utc(value: Optional[Union[date, datetime, str]]) -> Optional[datetime]:
    """
    Normalize a date, datetime or ISO string to a naive UTC datetime.

    Plain dates become midnight. Unparseable strings and None return None.
    """
    if value is None:
        return None

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    return datetime.combine(value, time.min)


def sort_key_desc(value: Optional[datetime]) -> datetime:
    """Sort key placing missing dates last in a descending sort"""
    return value if value is not None else datetime.min
