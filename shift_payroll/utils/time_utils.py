import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterator, Tuple

from shift_payroll.models.shared.enums import DayOfWeek

# date.weekday() order
WEEKDAY_NAMES = [
    DayOfWeek.MONDAY,
    DayOfWeek.TUESDAY,
    DayOfWeek.WEDNESDAY,
    DayOfWeek.THURSDAY,
    DayOfWeek.FRIDAY,
    DayOfWeek.SATURDAY,
    DayOfWeek.SUNDAY,
]

MINUTES_PER_DAY = 24 * 60


def time_to_minutes(value: str) -> int:
    """Parse a HH:mm clock string to minutes from midnight."""
    try:
        hours, minutes = (int(part) for part in value.split(":"))
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid clock time '{value}', expected HH:mm")
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Invalid clock time '{value}', expected HH:mm")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Format minutes from midnight as HH:mm."""
    minutes = minutes % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def clock_time(value: str) -> time:
    minutes = time_to_minutes(value)
    return time(minutes // 60, minutes % 60)


def get_shift_end(shift_date: date, start_time: str, end_time: str, is_night_shift: bool) -> datetime:
    """
    Instant a shift starting on ``shift_date`` ends.
    Night shifts whose end clock is before the start clock end on the next day.
    """
    end_date = shift_date
    if is_night_shift and time_to_minutes(end_time) < time_to_minutes(start_time):
        end_date = shift_date + timedelta(days=1)
    return datetime.combine(end_date, clock_time(end_time))


def get_shift_window(shift_date: date, start_time: str, end_time: str, is_night_shift: bool) -> Tuple[datetime, datetime]:
    """Return (shift_start, shift_end) datetimes for a shift worked on ``shift_date``"""
    shift_start = datetime.combine(shift_date, clock_time(start_time))
    return shift_start, get_shift_end(shift_date, start_time, end_time, is_night_shift)


def get_day_of_week(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()].value


def is_sunday(day: date) -> bool:
    return day.weekday() == 6


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def month_range(year: int, month: int) -> Tuple[date, date]:
    """Get first and last day of the month"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def count_non_sundays(start: date, end: date) -> int:
    return sum(1 for day in iter_dates(start, end) if not is_sunday(day))
