import logging
from functools import reduce
from typing import Any, Dict, Iterable, Optional
from datetime import date
from decimal import Decimal
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from shift_payroll.core.config import settings
from shift_payroll.core.exceptions import NotFoundError, ValidationError
from shift_payroll.models.hr.attendance import Attendance
from shift_payroll.models.hr.employee import Employee
from shift_payroll.models.hr.leave import Leave
from shift_payroll.models.shared.enums import AttendanceStatus, DayKind, HalfDayDeductionRule, LeaveStatus, WorkingDaysRule
from shift_payroll.schemas.hr.payroll_schema import (
    DayClassification, DeductionBreakdown, PayrollCalculationResult,
    PayrollTally, SalaryStructureConfig
)
from shift_payroll.services.hr.shift_service import ShiftService, is_working_day
from shift_payroll.services.hr.working_day_service import WorkingDayService
from shift_payroll.utils.time_utils import is_sunday, iter_dates, month_range

logger = logging.getLogger(__name__)

HALF = Decimal("0.5")
ZERO = Decimal("0")

OVERCOUNT_ANOMALY = "Attendance/leave days exceed total working days"

# Tally counter each day kind feeds; kinds not listed count nowhere
_TALLY_FIELD = {
    DayKind.PRESENT: "present_days",
    DayKind.ABSENT: "absent_days",
    DayKind.UNRECORDED: "absent_days",
    DayKind.HALF_DAY: "half_days",
    DayKind.PAID_LEAVE: "paid_leave_days",
    DayKind.UNPAID_LEAVE: "unpaid_leave_days",
}

_ATTENDANCE_KIND = {
    AttendanceStatus.PRESENT: DayKind.PRESENT,
    AttendanceStatus.ABSENT: DayKind.ABSENT,
    AttendanceStatus.HALF_DAY: DayKind.HALF_DAY,
    AttendanceStatus.MISSED_CHECKOUT: DayKind.MISSED_CHECKOUT,
}


def _accumulate(tally: PayrollTally, classification: DayClassification) -> PayrollTally:
    update: Dict[str, Any] = {}
    field = _TALLY_FIELD.get(classification.kind)
    if field:
        update[field] = getattr(tally, field) + 1
    if classification.kind == DayKind.PRESENT and classification.is_late:
        update["late_arrivals"] = tally.late_arrivals + 1
    if classification.anomaly:
        update["anomalies"] = tally.anomalies + [classification.anomaly]
    return tally.model_copy(update=update) if update else tally


def tally_days(classifications: Iterable[DayClassification]) -> PayrollTally:
    """Fold classified days, in walk order, into day counts and anomalies"""
    return reduce(_accumulate, classifications, PayrollTally())


class PayrollService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.shift_service = ShiftService(session)
        self.working_day_service = WorkingDayService(session, self.shift_service)

    async def calculate_payroll(
        self,
        employee_id: int,
        month: int,
        year: int,
        salary_structure: SalaryStructureConfig
    ) -> PayrollCalculationResult:
        """
        Classify every day of the month for the employee and derive payable days,
        deductions and net pay. Read-only: calling it again on unchanged data
        returns an identical result.
        """
        self._validate_period(month, year)
        period_start, period_end = month_range(year, month)

        attendance_by_day = await self._attendance_by_day(employee_id, period_start, period_end)
        leave_by_day = await self._approved_leave_by_day(employee_id, period_start, period_end)

        total_working_days = await self.working_day_service.count_working_days(
            employee_id,
            period_start,
            period_end,
            salary_structure.working_days_rule,
            salary_structure.fixed_working_days
        )
        if total_working_days <= 0:
            raise ValidationError(
                f"No working days for employee {employee_id} in {month:02d}/{year} "
                f"under the {salary_structure.working_days_rule.value} rule"
            )

        classifications = []
        for day in iter_dates(period_start, period_end):
            classification = await self._classify_day(
                employee_id,
                day,
                salary_structure,
                attendance_by_day.get(day),
                leave_by_day.get(day)
            )
            classifications.append(classification)

        tally = tally_days(classifications)
        anomalies = list(tally.anomalies)
        if tally.classified_days > total_working_days:
            anomalies.append(OVERCOUNT_ANOMALY)

        per_day_salary = salary_structure.gross_monthly_salary / Decimal(total_working_days)

        # Both half-day rules credit half a day; only half_day deducts for it
        payable_days = Decimal(tally.present_days + tally.paid_leave_days) + tally.half_days * HALF

        unpaid_leave_deduction = tally.unpaid_leave_days * per_day_salary
        if salary_structure.half_day_deduction_rule == HalfDayDeductionRule.HALF_DAY:
            half_day_deduction = tally.half_days * per_day_salary * HALF
        else:
            half_day_deduction = ZERO
        late_penalty = ZERO
        total_deductions = unpaid_leave_deduction + half_day_deduction + late_penalty

        gross_payable = payable_days * per_day_salary
        net_payable = gross_payable - total_deductions

        if anomalies:
            logger.warning(f"Payroll anomalies for employee {employee_id} in {month:02d}/{year}: {anomalies}")

        logger.info(
            f"Payroll calculated for employee {employee_id} for {month:02d}/{year} | "
            f"Working Days: {total_working_days} | Payable Days: {payable_days} | "
            f"Gross: {gross_payable} | Deductions: {total_deductions} | Net: {net_payable}"
        )

        return PayrollCalculationResult(
            employee_id=employee_id,
            month=month,
            year=year,
            total_working_days=total_working_days,
            present_days=tally.present_days,
            absent_days=tally.absent_days,
            half_days=tally.half_days,
            paid_leave_days=tally.paid_leave_days,
            unpaid_leave_days=tally.unpaid_leave_days,
            late_arrivals=tally.late_arrivals,
            payable_days=payable_days,
            per_day_salary=per_day_salary,
            gross_payable=gross_payable,
            deductions=DeductionBreakdown(
                unpaid_leave=unpaid_leave_deduction,
                half_day=half_day_deduction,
                late_penalty=late_penalty,
                total=total_deductions
            ),
            net_payable=net_payable,
            anomalies=anomalies
        )

    async def calculate_bulk_payroll(
        self,
        salary_structures: Dict[int, SalaryStructureConfig],
        month: int,
        year: int
    ) -> Dict[str, Any]:
        """Calculate payroll for several employees; a failure for one employee is recorded, not raised"""
        self._validate_period(month, year)

        res = await self.session.execute(
            select(Employee).where(
                Employee.id.in_(list(salary_structures.keys())),
                Employee.is_active == True
            )
        )
        employees = {emp.id: emp for emp in res.scalars().all()}

        stats: Dict[str, Any] = {
            "month": month,
            "year": year,
            "total_employees": len(salary_structures),
            "successful": 0,
            "failed": 0,
            "results": [],
            "errors": [],
        }

        for employee_id, structure in salary_structures.items():
            try:
                if employee_id not in employees:
                    raise NotFoundError(f"Employee {employee_id} not found or inactive")
                result = await self.calculate_payroll(employee_id, month, year, structure)
                stats["successful"] += 1
                stats["results"].append(result)
            except HTTPException as he:
                stats["failed"] += 1
                stats["errors"].append({"employee_id": employee_id, "error": he.detail})
            except Exception as e:
                stats["failed"] += 1
                logger.error(f"Error calculating payroll for employee {employee_id}: {e}")
                stats["errors"].append({"employee_id": employee_id, "error": str(e)})

        logger.info(
            f"Bulk payroll calculated for {month:02d}/{year} | "
            f"Success: {stats['successful']} | Failed: {stats['failed']}"
        )
        return stats

    # region Helpers

    def _validate_period(self, month: int, year: int) -> None:
        if not (1 <= month <= 12):
            raise ValidationError("Month must be between 1 and 12")
        if not (settings.PAYROLL_MIN_YEAR <= year <= settings.PAYROLL_MAX_YEAR):
            raise ValidationError(
                f"Year must be between {settings.PAYROLL_MIN_YEAR} and {settings.PAYROLL_MAX_YEAR}"
            )

    async def _attendance_by_day(self, employee_id: int, start: date, end: date) -> Dict[date, Attendance]:
        res = await self.session.execute(
            select(Attendance).where(
                Attendance.employee_id == employee_id,
                Attendance.attendance_date.between(start, end)
            ).order_by(Attendance.attendance_date, Attendance.id)
        )
        by_day: Dict[date, Attendance] = {}
        for record in res.scalars().all():
            by_day.setdefault(record.attendance_date, record)
        return by_day

    async def _approved_leave_by_day(self, employee_id: int, start: date, end: date) -> Dict[date, Leave]:
        """Approved leave per date of the period; the earliest leave wins an overlapping date"""
        res = await self.session.execute(
            select(Leave).where(
                Leave.employee_id == employee_id,
                Leave.status == LeaveStatus.APPROVED,
                Leave.start_date <= end,
                Leave.end_date >= start
            ).order_by(Leave.start_date, Leave.id)
        )
        by_day: Dict[date, Leave] = {}
        for leave in res.scalars().all():
            for day in iter_dates(max(leave.start_date, start), min(leave.end_date, end)):
                by_day.setdefault(day, leave)
        return by_day

    async def _classify_day(
        self,
        employee_id: int,
        day: date,
        salary_structure: SalaryStructureConfig,
        attendance: Optional[Attendance],
        leave: Optional[Leave]
    ) -> DayClassification:
        if salary_structure.working_days_rule == WorkingDaysRule.CALENDAR_DAYS and is_sunday(day):
            return DayClassification(day=day, kind=DayKind.SKIPPED)

        # Leave takes precedence over any attendance on the same date
        if leave is not None:
            if leave.leave_type in salary_structure.paid_leave_types:
                return DayClassification(day=day, kind=DayKind.PAID_LEAVE)
            if leave.leave_type in salary_structure.unpaid_leave_types:
                return DayClassification(day=day, kind=DayKind.UNPAID_LEAVE)
            logger.warning(
                f"Leave type '{leave.leave_type}' on {day} for employee {employee_id} "
                f"is neither paid nor unpaid, day not counted"
            )
            return DayClassification(day=day, kind=DayKind.UNCLASSIFIED_LEAVE)

        if attendance is not None:
            kind = _ATTENDANCE_KIND[AttendanceStatus(attendance.status)]
            if kind == DayKind.MISSED_CHECKOUT:
                # TODO: settle whether a missed check-out should count as present or half day
                logger.warning(f"Missed check-out on {day} for employee {employee_id}, day not counted")
            return DayClassification(day=day, kind=kind, is_late=bool(attendance.is_late))

        shift = await self.shift_service.resolve_shift(employee_id, day)
        if shift is not None and is_working_day(shift, day):
            return DayClassification(
                day=day,
                kind=DayKind.UNRECORDED,
                anomaly=f"Missing attendance record for {day.isoformat()}"
            )
        return DayClassification(day=day, kind=DayKind.NON_WORKING)

    # endregion
