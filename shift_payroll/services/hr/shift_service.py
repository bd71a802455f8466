import logging
from typing import List, Optional
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from shift_payroll.models.hr.employee import Employee
from shift_payroll.models.hr.leave import Leave
from shift_payroll.models.hr.roster import Roster
from shift_payroll.models.hr.shift import Shift
from shift_payroll.models.hr.shift_assignment import ShiftAssignment
from shift_payroll.models.shared.enums import AssignmentScope, AssignmentType, LeaveStatus, ShiftSource
from shift_payroll.schemas.hr.shift_schema import ConflictReport, ResolvedShift
from shift_payroll.utils.time_utils import get_day_of_week

logger = logging.getLogger(__name__)


def is_working_day(shift: Shift, day: date) -> bool:
    """Whether ``day`` falls on one of the shift's working weekdays"""
    return get_day_of_week(day) in (shift.working_days or [])


class ShiftService:
    def __init__(self, session: AsyncSession):
        self.session = session
        # Resolution order, first match wins
        self._strategies = [
            self._resolve_from_roster,
            self._resolve_from_temporary_assignment,
            self._resolve_from_permanent_assignment,
            self._resolve_from_team_assignment,
            self._resolve_from_department_assignment,
        ]

    # region Shift Resolution

    async def resolve_shift(self, employee_id: int, day: date) -> Optional[Shift]:
        """Shift the employee is expected to work on ``day``, or None (unassigned or off)"""
        resolved = await self.resolve_shift_assignment(employee_id, day)
        return resolved.shift if resolved else None

    async def resolve_shift_assignment(self, employee_id: int, day: date) -> Optional[ResolvedShift]:
        """
        Walk the assignment sources in precedence order:
        roster > temporary > permanent > team > department.
        A rostered weekly off resolves with no shift; None means nothing applies.
        """
        for strategy in self._strategies:
            resolved = await strategy(employee_id, day)
            if resolved is not None:
                return resolved
        return None

    async def _resolve_from_roster(self, employee_id: int, day: date) -> Optional[ResolvedShift]:
        result = await self.session.execute(
            select(Roster)
            .options(selectinload(Roster.shift))
            .where(
                Roster.employee_id == employee_id,
                Roster.roster_date == day
            )
        )
        roster = result.scalars().first()
        if not roster:
            return None
        # A rostered shift always wins, even on a row flagged as weekly off
        if roster.shift:
            return ResolvedShift(shift=roster.shift, source=ShiftSource.ROSTER)
        if roster.is_weekly_off:
            return ResolvedShift(shift=None, source=ShiftSource.ROSTER, is_weekly_off=True)
        return None

    async def _resolve_from_temporary_assignment(self, employee_id: int, day: date) -> Optional[ResolvedShift]:
        result = await self.session.execute(
            select(ShiftAssignment)
            .options(selectinload(ShiftAssignment.shift))
            .where(
                ShiftAssignment.assignment_scope == AssignmentScope.EMPLOYEE,
                ShiftAssignment.employee_id == employee_id,
                ShiftAssignment.assignment_type == AssignmentType.TEMPORARY,
                ShiftAssignment.is_active == True,
                ShiftAssignment.start_date <= day,
                ShiftAssignment.end_date >= day
            )
            .order_by(ShiftAssignment.start_date.desc(), ShiftAssignment.id.desc())
            .limit(1)
        )
        assignment = result.scalars().first()
        if assignment and assignment.shift:
            return ResolvedShift(shift=assignment.shift, source=ShiftSource.TEMPORARY)
        return None

    async def _resolve_from_permanent_assignment(self, employee_id: int, day: date) -> Optional[ResolvedShift]:
        assignment = await self._latest_permanent_assignment(
            day,
            ShiftAssignment.assignment_scope == AssignmentScope.EMPLOYEE,
            ShiftAssignment.employee_id == employee_id
        )
        if assignment and assignment.shift:
            return ResolvedShift(shift=assignment.shift, source=ShiftSource.PERMANENT)
        return None

    async def _resolve_from_team_assignment(self, employee_id: int, day: date) -> Optional[ResolvedShift]:
        employee = await self.session.get(Employee, employee_id)
        if not employee or not employee.manager_id:
            return None
        assignment = await self._latest_permanent_assignment(
            day,
            ShiftAssignment.assignment_scope == AssignmentScope.TEAM,
            ShiftAssignment.team_manager_id == employee.manager_id
        )
        if assignment and assignment.shift:
            return ResolvedShift(shift=assignment.shift, source=ShiftSource.TEAM)
        return None

    async def _resolve_from_department_assignment(self, employee_id: int, day: date) -> Optional[ResolvedShift]:
        employee = await self.session.get(Employee, employee_id)
        if not employee or not employee.role:
            return None
        assignment = await self._latest_permanent_assignment(
            day,
            ShiftAssignment.assignment_scope == AssignmentScope.DEPARTMENT,
            ShiftAssignment.department_role == employee.role
        )
        if assignment and assignment.shift:
            return ResolvedShift(shift=assignment.shift, source=ShiftSource.DEPARTMENT)
        return None

    async def _latest_permanent_assignment(self, day: date, *conditions) -> Optional[ShiftAssignment]:
        """Active permanent assignment with the most recent effective date on or before ``day``"""
        result = await self.session.execute(
            select(ShiftAssignment)
            .options(selectinload(ShiftAssignment.shift))
            .where(
                ShiftAssignment.assignment_type == AssignmentType.PERMANENT,
                ShiftAssignment.is_active == True,
                ShiftAssignment.effective_date <= day,
                *conditions
            )
            .order_by(ShiftAssignment.effective_date.desc(), ShiftAssignment.id.desc())
            .limit(1)
        )
        return result.scalars().first()

    # endregion

    # region Conflicts

    async def check_conflicts(self, employee_id: int, day: date, shift_id: int) -> ConflictReport:
        """
        Report every reason a proposed (employee, day, shift) assignment collides
        with existing data. Fails open: lookup errors are logged and reported as no conflict.
        """
        try:
            conflicts: List[str] = []

            leave_res = await self.session.execute(
                select(Leave).where(
                    Leave.employee_id == employee_id,
                    Leave.status.in_([LeaveStatus.PENDING, LeaveStatus.APPROVED]),
                    Leave.start_date <= day,
                    Leave.end_date >= day
                ).limit(1)
            )
            leave = leave_res.scalars().first()
            if leave:
                conflicts.append(f"Employee has {leave.status.value} leave on this date")

            shift = await self.session.get(Shift, shift_id)
            if shift and not is_working_day(shift, day):
                conflicts.append(f"Shift is not active on {get_day_of_week(day)}")

            roster_res = await self.session.execute(
                select(Roster).where(
                    Roster.employee_id == employee_id,
                    Roster.roster_date == day
                )
            )
            roster = roster_res.scalars().first()
            if roster and roster.shift_id != shift_id:
                conflicts.append("Employee already has a different shift assigned on this date")

            return ConflictReport(has_conflict=len(conflicts) > 0, conflicts=conflicts)

        except Exception as e:
            # Never block an assignment on a lookup failure
            logger.error(f"Error checking shift conflicts for employee {employee_id} on {day}: {e}")
            return ConflictReport(has_conflict=False, conflicts=[])

    # endregion

    # region Assignment Targets

    async def get_team_employee_ids(self, manager_id: int) -> List[int]:
        """Active direct reports covered by a team assignment"""
        result = await self.session.execute(
            select(Employee.id)
            .where(Employee.manager_id == manager_id, Employee.is_active == True)
            .order_by(Employee.id)
        )
        return list(result.scalars().all())

    async def get_department_employee_ids(self, role: str) -> List[int]:
        """Active employees covered by a department assignment"""
        result = await self.session.execute(
            select(Employee.id)
            .where(Employee.role == role, Employee.is_active == True)
            .order_by(Employee.id)
        )
        return list(result.scalars().all())

    # endregion
