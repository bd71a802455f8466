from typing import Optional, Tuple

from shift_payroll.utils.time_utils import time_to_minutes


def validate_shift_times(start_time: str, end_time: str, is_night_shift: bool) -> Tuple[bool, Optional[str]]:
    """
    Check that a shift window is legal.
    Day shifts must end after they start on the same day; night shifts end on
    the following day, so only identical start and end clocks are rejected.
    """
    start_minutes = time_to_minutes(start_time)
    end_minutes = time_to_minutes(end_time)

    if not is_night_shift and end_minutes <= start_minutes:
        return False, "End time must be after start time for non-night shifts"

    if is_night_shift and end_minutes == start_minutes:
        return False, "Start and end times cannot be the same"

    return True, None


def is_valid_shift(start_time: str, end_time: str, is_night_shift: bool) -> bool:
    valid, _ = validate_shift_times(start_time, end_time, is_night_shift)
    return valid
