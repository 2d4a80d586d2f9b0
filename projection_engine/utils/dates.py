"""
Calendar helpers for monthly projections.

Month arithmetic clamps to the end of shorter months
(31 January + 1 month = 28/29 February).
"""

from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta

from ..errors import InvalidInputError

DateLike = Union[date, datetime, str]


def to_date(value: DateLike, field: str = "start_date") -> date:
    """Coerce a date, datetime or ISO-8601 string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            raise InvalidInputError(f"Invalid ISO date: {value!r}", field=field, value=value) from None
    raise InvalidInputError(f"{field} must be a date", field=field, value=value)


def add_months(start: date, months: int) -> date:
    """Shift a date by a whole number of months."""
    return start + relativedelta(months=months)


def month_starts(start: date, count: int) -> list[date]:
    """First day of each of ``count`` consecutive months beginning with start's month."""
    first = start.replace(day=1)
    return [first + relativedelta(months=i) for i in range(count)]
