# benigna-api/benigna/core/schedule.py
"""Working-hours evaluation: open-now checks and delivery slots.

Schedules are same-day only. An entry whose closing time is earlier than its
opening time is never reported open, and the closing minute itself still
counts as open.
"""
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from benigna import config
from benigna.models.institution import WorkingHours

SLOT_INTERVAL_MINUTES = 30


def parse_hhmm(value: str) -> Tuple[int, int]:
    hour, minute = value.split(":")
    return int(hour), int(minute)


def minutes_since_midnight(value: str) -> int:
    hour, minute = parse_hhmm(value)
    return hour * 60 + minute


def day_of_week(day: date) -> int:
    """Weekday index with 0 = Sunday."""
    return (day.weekday() + 1) % 7


def hours_for_day(working_hours: Iterable[WorkingHours], weekday: int) -> Optional[WorkingHours]:
    for entry in working_hours:
        if entry.day_of_week == weekday:
            return entry
    return None


def is_open_now(working_hours: Iterable[WorkingHours], at: datetime) -> bool:
    today = hours_for_day(working_hours, day_of_week(at))
    if today is None or not today.is_open:
        return False

    now_minutes = at.hour * 60 + at.minute
    open_minutes = minutes_since_midnight(today.open_time)
    close_minutes = minutes_since_midnight(today.close_time)
    return open_minutes <= now_minutes <= close_minutes


def generate_time_slots(open_time: str, close_time: str, step: int = SLOT_INTERVAL_MINUTES) -> List[str]:
    close = parse_hhmm(close_time)
    hour, minute = parse_hhmm(open_time)

    slots = []
    while (hour, minute) < close:
        slots.append(f"{hour:02d}:{minute:02d}")
        minute += step
        # the counter restarts at the top of the next hour
        if minute >= 60:
            minute = 0
            hour += 1
    return slots


def available_slots(working_hours: Iterable[WorkingHours], day: date) -> List[str]:
    entry = hours_for_day(working_hours, day_of_week(day))
    if entry is None or not entry.is_open:
        return []
    return generate_time_slots(entry.open_time, entry.close_time)


def earliest_delivery_date(today: date) -> date:
    return today + timedelta(days=1)


def slot_datetime(day: date, time: str) -> datetime:
    """The instant a delivery slot starts, in the service's timezone."""
    hour, minute = parse_hhmm(time)
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=ZoneInfo(config.APP_TIMEZONE))


def local_now() -> datetime:
    """Current time in the service's timezone; used as a FastAPI dependency."""
    return datetime.now(ZoneInfo(config.APP_TIMEZONE))
