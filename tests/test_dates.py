from datetime import date, datetime, timezone

import pytest

from studio.shared import dates


def test_to_utc_naive_reads_naive_values_as_local_time():
    # Warsaw is UTC+1 in winter
    local = datetime(2025, 1, 15, 10, 0)
    assert dates.to_utc_naive(local, "Europe/Warsaw") == datetime(2025, 1, 15, 9, 0)


def test_to_utc_naive_converts_aware_values():
    aware = datetime(2025, 7, 1, 12, 0, tzinfo=timezone.utc)
    assert dates.to_utc_naive(aware, "Europe/Warsaw") == datetime(2025, 7, 1, 12, 0)
    assert dates.to_utc_naive(None) is None


def test_calendar_day_covers_local_midnight_to_midnight():
    start, end = dates.calendar_date_to_utc_range("2025-07-01", "Europe/Warsaw")

    # Summer time, UTC+2
    assert start == datetime(2025, 6, 30, 22, 0)
    assert end.date() == date(2025, 7, 1)
    assert end.hour == 21 and end.minute == 59


def test_parse_calendar_date_accepts_timestamps():
    assert dates.parse_calendar_date("2025-03-14T18:30:00Z") == date(2025, 3, 14)
    assert dates.parse_calendar_date(datetime(2025, 3, 14, 23, 0)) == date(2025, 3, 14)
    with pytest.raises(ValueError):
        dates.parse_calendar_date("14/03/2025")


def test_booking_range_filter_requires_both_ends():
    assert dates.booking_range_filter(None, None, "Europe/Warsaw") == (None, None)
    with pytest.raises(ValueError):
        dates.booking_range_filter("2025-03-01", None, "Europe/Warsaw")
    with pytest.raises(ValueError):
        dates.booking_range_filter(None, "2025-03-31", "Europe/Warsaw")

    start, end = dates.booking_range_filter("2025-03-01", "2025-03-31", "UTC")
    assert start == datetime(2025, 3, 1, 0, 0)
    assert end.date() == date(2025, 3, 31)


def test_month_bounds_handles_month_length():
    start, end = dates.month_bounds(2024, 2, "UTC")
    assert start == datetime(2024, 2, 1)
    assert end.date() == date(2024, 2, 29)


def test_unknown_timezone_falls_back_to_default():
    assert not dates.is_valid_timezone("Mars/Olympus")
    assert dates.get_zone("Mars/Olympus").key == "Europe/Warsaw"
    assert dates.is_valid_timezone("America/New_York")
