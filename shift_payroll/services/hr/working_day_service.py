import logging
from typing import Optional, Union
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession

from shift_payroll.core.exceptions import ValidationError
from shift_payroll.models.shared.enums import WorkingDaysRule
from shift_payroll.services.hr.shift_service import ShiftService, is_working_day
from shift_payroll.utils.time_utils import count_non_sundays, iter_dates

logger = logging.getLogger(__name__)


def parse_working_days_rule(rule: Union[WorkingDaysRule, str]) -> WorkingDaysRule:
    try:
        return WorkingDaysRule(rule)
    except ValueError:
        raise ValidationError(f"Unknown working days rule '{rule}'")


class WorkingDayService:
    def __init__(self, session: AsyncSession, shift_service: Optional[ShiftService] = None):
        self.session = session
        self.shift_service = shift_service or ShiftService(session)

    async def count_working_days(
        self,
        employee_id: int,
        period_start: date,
        period_end: date,
        rule: Union[WorkingDaysRule, str],
        fixed_days: Optional[int] = None
    ) -> int:
        """
        Count the days in [period_start, period_end] the employee is expected to work.
        - fixed_days: the configured constant, whatever the period
        - calendar_days: every day except Sundays (Saturdays count)
        - shift_based: days whose resolved shift lists that weekday
        """
        rule = parse_working_days_rule(rule)
        if period_end < period_start:
            raise ValidationError(f"Period end {period_end} is before period start {period_start}")

        if rule == WorkingDaysRule.FIXED_DAYS:
            if fixed_days is None:
                raise ValidationError("fixed_working_days is required when working_days_rule is fixed_days")
            return fixed_days

        if rule == WorkingDaysRule.CALENDAR_DAYS:
            return count_non_sundays(period_start, period_end)

        working_days = 0
        for day in iter_dates(period_start, period_end):
            shift = await self.shift_service.resolve_shift(employee_id, day)
            if shift is not None and is_working_day(shift, day):
                working_days += 1

        logger.debug(f"Shift based working days for employee {employee_id} {period_start}..{period_end}: {working_days}")
        return working_days
