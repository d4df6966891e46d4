"""Floor date helpers; calendar dates are always taken in the restaurant's time zone"""

from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from hostdesk.schemas.allocation import TimeWindow


def today_in(time_zone: str, now: Optional[datetime] = None) -> date:
    """Calendar date in `time_zone`, not the UTC date"""
    zone = ZoneInfo(time_zone)
    if now is None:
        return datetime.now(zone).date()
    if now.tzinfo is None:
        now = now.replace(tzinfo=zone)
    return now.astimezone(zone).date()


def shift_day(day: date, days: int) -> date:
    return day + timedelta(days=days)


def allocation_window(
    floor_date: date,
    time_zone: str,
    service_start_hour: int = 18,
    duration_minutes: int = 60,
    now: Optional[datetime] = None,
) -> TimeWindow:
    """
    Interval for a new seat-now or reserve allocation.

    On today's floor the allocation starts now; on any other date it starts
    at the service start hour. The fixed duration does not depend on the
    party or the table.
    """
    zone = ZoneInfo(time_zone)
    current = now or datetime.now(zone)
    if current.tzinfo is None:
        current = current.replace(tzinfo=zone)

    # Same calendar day, compared as YYYY-MM-DD in the restaurant zone
    if floor_date.isoformat() == today_in(time_zone, current).isoformat():
        start = current.astimezone(zone)
    else:
        start = datetime.combine(floor_date, time(hour=service_start_hour), tzinfo=zone)

    return TimeWindow(start_time=start, end_time=start + timedelta(minutes=duration_minutes))
