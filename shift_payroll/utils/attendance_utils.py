from datetime import date, datetime, timedelta, timezone
from typing import Optional

from shift_payroll.core.config import settings
from shift_payroll.models.shared.enums import AttendanceStatus
from shift_payroll.utils.time_utils import clock_time, get_shift_window


def ensure_utc(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC). Naive values and shift clocks are UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def is_late_check_in(
    check_in: datetime,
    shift_date: date,
    shift_start_time: str,
    grace_period_minutes: int,
) -> bool:
    """Check-in after shift start plus grace period. The shift starts on ``shift_date``, even when checked in after midnight."""
    shift_start = datetime.combine(shift_date, clock_time(shift_start_time))
    return ensure_utc(check_in) > ensure_utc(shift_start) + timedelta(minutes=grace_period_minutes)


def is_early_check_out(
    check_out: datetime,
    shift_date: date,
    shift_start_time: str,
    shift_end_time: str,
    grace_period_minutes: int,
    is_night_shift: bool,
) -> bool:
    """Check-out before shift end minus grace period. Night shifts end on the day after ``shift_date``."""
    _, shift_end = get_shift_window(shift_date, shift_start_time, shift_end_time, is_night_shift)
    return ensure_utc(check_out) < ensure_utc(shift_end) - timedelta(minutes=grace_period_minutes)


def calculate_working_minutes(
    check_in: datetime,
    check_out: datetime,
    break_duration_minutes: int = 0,
    is_break_paid: bool = False,
) -> int:
    total_minutes = int((ensure_utc(check_out) - ensure_utc(check_in)).total_seconds() // 60)
    working_minutes = total_minutes if is_break_paid else total_minutes - break_duration_minutes
    return max(0, working_minutes)


def determine_attendance_status(check_out: Optional[datetime], working_minutes: Optional[int]) -> AttendanceStatus:
    """
    Derive the attendance status from worked time:
    no check-out -> missed_checkout, full day -> present,
    at least half a day -> half_day, otherwise absent.
    """
    if check_out is None:
        return AttendanceStatus.MISSED_CHECKOUT

    if not working_minutes:
        return AttendanceStatus.ABSENT

    worked_hours = working_minutes / 60
    if worked_hours >= settings.MIN_WORKING_HOURS:
        return AttendanceStatus.PRESENT
    if worked_hours >= settings.HALF_DAY_HOURS:
        return AttendanceStatus.HALF_DAY
    return AttendanceStatus.ABSENT
