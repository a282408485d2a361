"""
Calendar-date helpers.

Bookings are stored as naive UTC timestamps while the studio thinks in
calendar days of its own timezone. These helpers turn "2025-03-14 in
Europe/Warsaw" into the UTC interval that covers that day.
"""

import calendar
from datetime import date, datetime, time, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..config import DEFAULT_TIMEZONE


def get_zone(tz_name: Optional[str]) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name or DEFAULT_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(DEFAULT_TIMEZONE)


def is_valid_timezone(tz_name: str) -> bool:
    try:
        ZoneInfo(tz_name)
        return True
    except (ZoneInfoNotFoundError, ValueError):
        return False


def to_utc_naive(value: Optional[datetime], tz_name: Optional[str] = None) -> Optional[datetime]:
    """
    Normalize a datetime for storage. Aware values are converted to UTC;
    naive values are read as local time in tz_name.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=get_zone(tz_name))
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_calendar_date(value: Union[str, date, datetime]) -> date:
    """Accept YYYY-MM-DD or a full ISO timestamp and keep only the calendar date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def calendar_date_to_utc_range(day: Union[str, date], tz_name: Optional[str]) -> tuple[datetime, datetime]:
    """First and last instant of a calendar day in tz_name, as naive UTC"""
    day = parse_calendar_date(day)
    zone = get_zone(tz_name)
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day, time.max, tzinfo=zone)
    return to_utc_naive(start), to_utc_naive(end)


def booking_range_filter(
    from_day: Optional[Union[str, date]],
    to_day: Optional[Union[str, date]],
    tz_name: Optional[str],
) -> tuple[Optional[datetime], Optional[datetime]]:
    """UTC bounds for a from/to pair of calendar days; neither means no filter"""
    if not from_day and not to_day:
        return None, None
    if not from_day or not to_day:
        raise ValueError("Both from and to are required for a date range")
    start, _ = calendar_date_to_utc_range(from_day, tz_name)
    _, end = calendar_date_to_utc_range(to_day, tz_name)
    return start, end


def month_bounds(year: int, month: int, tz_name: Optional[str]) -> tuple[datetime, datetime]:
    last_day = calendar.monthrange(year, month)[1]
    start, _ = calendar_date_to_utc_range(date(year, month, 1), tz_name)
    _, end = calendar_date_to_utc_range(date(year, month, last_day), tz_name)
    return start, end


def today_in_timezone(tz_name: Optional[str]) -> date:
    return datetime.now(get_zone(tz_name)).date()
