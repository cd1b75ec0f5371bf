from datetime import date, datetime

import pytest

from hrfleet.core.dates import (
    days_between_inclusive,
    days_until,
    intervals_overlap,
    is_within,
    month_window,
    to_date,
)
from hrfleet.core.errors import InvalidRangeError, ValidationError


def test_single_day_counts_as_one():
    assert days_between_inclusive(date(2025, 6, 10), date(2025, 6, 10)) == 1


def test_range_is_inclusive_across_months():
    assert days_between_inclusive("2025-06-25", "2025-07-05") == 11


def test_time_of_day_is_ignored():
    start = datetime(2025, 6, 10, 23, 59)
    end = datetime(2025, 6, 11, 0, 1)
    assert days_between_inclusive(start, end) == 2


def test_end_before_start_is_rejected():
    with pytest.raises(InvalidRangeError):
        days_between_inclusive(date(2025, 6, 10), date(2025, 6, 9))


def test_garbage_date_is_rejected():
    with pytest.raises(ValidationError):
        to_date("not-a-date")
    with pytest.raises(ValidationError):
        to_date(42)


def test_is_within_includes_both_ends():
    assert is_within("2025-06-01", "2025-06-01", "2025-06-30")
    assert is_within("2025-06-30", "2025-06-01", "2025-06-30")
    assert not is_within("2025-07-01", "2025-06-01", "2025-06-30")


def test_intervals_overlap():
    assert intervals_overlap("2025-05-20", "2025-07-10", "2025-06-01", "2025-06-30")
    assert not intervals_overlap("2025-05-01", "2025-05-31", "2025-06-01", "2025-06-30")


def test_days_until_is_signed():
    today = date(2025, 6, 1)
    assert days_until(date(2025, 6, 11), today) == 10
    assert days_until(date(2025, 5, 30), today) == -2


def test_month_window():
    assert month_window("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_window("2025-12") == (date(2025, 12, 1), date(2025, 12, 31))


@pytest.mark.parametrize("value", [None, "", "2025", "2025-13", "june"])
def test_month_window_rejects_bad_input(value):
    with pytest.raises(ValidationError):
        month_window(value)
