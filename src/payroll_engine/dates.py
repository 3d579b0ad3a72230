from __future__ import annotations

from datetime import date, datetime
from typing import Union

DateLike = Union[str, date, datetime]


def parse_iso_datetime(value: DateLike) -> datetime:
    """Parse an ISO-8601 date or date-time into a ``datetime``.

    Date-only strings become midnight of that day. Offsets are kept as given;
    no timezone conversion is applied.
    """

    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        # tolerate trailing time junk after a valid calendar date
        return datetime.fromisoformat(text.split("T")[0])


def parse_iso_date(value: DateLike) -> date:
    return parse_iso_datetime(value).date()
