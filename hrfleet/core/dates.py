"""
Day-granularity date helpers shared by the ledgers, the stats engine and the
reminder job. Every function normalizes its inputs with ``to_date`` first, so
a datetime with a time-of-day never shifts a comparison by one day.
"""
import calendar
from datetime import date, datetime
from typing import Tuple, Union

from hrfleet.core.errors import InvalidRangeError, ValidationError

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}") from None
    raise ValidationError(f"Invalid date: {value!r}")


def days_between_inclusive(start: DateLike, end: DateLike) -> int:
    start, end = to_date(start), to_date(end)
    if end < start:
        raise InvalidRangeError(
            f"End date {end.isoformat()} is before start date {start.isoformat()}"
        )
    return (end - start).days + 1


def is_within(point: DateLike, start: DateLike, end: DateLike) -> bool:
    return to_date(start) <= to_date(point) <= to_date(end)


def intervals_overlap(
    a_start: DateLike, a_end: DateLike, b_start: DateLike, b_end: DateLike
) -> bool:
    return to_date(a_start) <= to_date(b_end) and to_date(b_start) <= to_date(a_end)


def days_until(target: DateLike, today: DateLike) -> int:
    """Signed calendar-day distance; negative once ``target`` has passed."""
    return (to_date(target) - to_date(today)).days


def month_window(value: str | None) -> Tuple[date, date]:
    """``"2025-06"`` -> (2025-06-01, 2025-06-30)."""
    if not value:
        raise ValidationError("Date is required (YYYY-MM)")
    try:
        year_str, month_str = value.strip().split("-")[:2]
        year, month = int(year_str), int(month_str)
        last_day = calendar.monthrange(year, month)[1]
    except ValueError:
        raise ValidationError(f"Invalid month: {value!r}, expected YYYY-MM") from None
    return date(year, month, 1), date(year, month, last_day)
