import pytest
from datetime import date

from shift_payroll.models.shared.enums import AssignmentScope, ShiftSource
from shift_payroll.services.hr.shift_service import ShiftService

DAY = date(2025, 6, 11)  # Wednesday


@pytest.mark.asyncio
class TestShiftResolution:
    """Shift precedence: roster > temporary > permanent > team > department"""

    async def test_roster_beats_temporary_and_permanent(self, session, factory):
        employee = await factory.employee()
        rostered = await factory.shift(name="Rostered")
        temporary = await factory.shift(name="Temporary")
        permanent = await factory.shift(name="Permanent")
        await factory.permanent(permanent, date(2025, 1, 1), employee_id=employee.id)
        await factory.temporary(temporary, employee.id, date(2025, 6, 1), date(2025, 6, 30))
        await factory.roster(employee.id, DAY, rostered)

        resolved = await ShiftService(session).resolve_shift_assignment(employee.id, DAY)

        assert resolved.shift.id == rostered.id
        assert resolved.source == ShiftSource.ROSTER
        assert (await ShiftService(session).resolve_shift(employee.id, DAY)).id == rostered.id

    async def test_temporary_beats_permanent_inside_its_range(self, session, factory):
        employee = await factory.employee()
        temporary = await factory.shift(name="Temporary")
        permanent = await factory.shift(name="Permanent")
        await factory.permanent(permanent, date(2025, 1, 1), employee_id=employee.id)
        await factory.temporary(temporary, employee.id, date(2025, 6, 10), date(2025, 6, 12))
        service = ShiftService(session)

        assert (await service.resolve_shift(employee.id, date(2025, 6, 10))).id == temporary.id
        assert (await service.resolve_shift(employee.id, date(2025, 6, 12))).id == temporary.id
        assert (await service.resolve_shift(employee.id, date(2025, 6, 13))).id == permanent.id
        assert (await service.resolve_shift(employee.id, date(2025, 6, 9))).id == permanent.id

    async def test_inactive_temporary_is_ignored(self, session, factory):
        employee = await factory.employee()
        temporary = await factory.shift(name="Temporary")
        permanent = await factory.shift(name="Permanent")
        await factory.permanent(permanent, date(2025, 1, 1), employee_id=employee.id)
        await factory.temporary(temporary, employee.id, date(2025, 6, 1), date(2025, 6, 30), is_active=False)

        shift = await ShiftService(session).resolve_shift(employee.id, DAY)
        assert shift.id == permanent.id

    async def test_most_recent_effective_permanent_wins(self, session, factory):
        employee = await factory.employee()
        old = await factory.shift(name="Old")
        current = await factory.shift(name="Current")
        future = await factory.shift(name="Future")
        await factory.permanent(current, date(2025, 5, 1), employee_id=employee.id)
        await factory.permanent(old, date(2025, 1, 1), employee_id=employee.id)
        await factory.permanent(future, date(2025, 7, 1), employee_id=employee.id)
        service = ShiftService(session)

        assert (await service.resolve_shift(employee.id, DAY)).id == current.id
        assert (await service.resolve_shift(employee.id, date(2025, 3, 1))).id == old.id
        assert (await service.resolve_shift(employee.id, date(2025, 7, 1))).id == future.id
        assert await service.resolve_shift(employee.id, date(2024, 12, 31)) is None

    async def test_team_assignment_through_manager(self, session, factory):
        manager = await factory.employee(role="lead")
        employee = await factory.employee(manager_id=manager.id)
        team_shift = await factory.shift(name="Team")
        await factory.permanent(team_shift, date(2025, 1, 1), scope=AssignmentScope.TEAM, team_manager_id=manager.id)

        resolved = await ShiftService(session).resolve_shift_assignment(employee.id, DAY)

        assert resolved.shift.id == team_shift.id
        assert resolved.source == ShiftSource.TEAM

    async def test_employee_assignment_beats_team_and_department(self, session, factory):
        manager = await factory.employee(role="lead")
        employee = await factory.employee(role="engineer", manager_id=manager.id)
        own = await factory.shift(name="Own")
        team_shift = await factory.shift(name="Team")
        dept_shift = await factory.shift(name="Department")
        await factory.permanent(dept_shift, date(2025, 1, 1), scope=AssignmentScope.DEPARTMENT, department_role="engineer")
        await factory.permanent(team_shift, date(2025, 1, 1), scope=AssignmentScope.TEAM, team_manager_id=manager.id)
        await factory.permanent(own, date(2025, 1, 1), employee_id=employee.id)

        shift = await ShiftService(session).resolve_shift(employee.id, DAY)
        assert shift.id == own.id

    async def test_team_beats_department(self, session, factory):
        manager = await factory.employee(role="lead")
        employee = await factory.employee(role="engineer", manager_id=manager.id)
        team_shift = await factory.shift(name="Team")
        dept_shift = await factory.shift(name="Department")
        await factory.permanent(dept_shift, date(2025, 1, 1), scope=AssignmentScope.DEPARTMENT, department_role="engineer")
        await factory.permanent(team_shift, date(2025, 1, 1), scope=AssignmentScope.TEAM, team_manager_id=manager.id)

        shift = await ShiftService(session).resolve_shift(employee.id, DAY)
        assert shift.id == team_shift.id

    async def test_department_assignment_through_role(self, session, factory):
        employee = await factory.employee(role="warehouse")
        dept_shift = await factory.shift(name="Warehouse")
        await factory.permanent(dept_shift, date(2025, 1, 1), scope=AssignmentScope.DEPARTMENT, department_role="warehouse")
        await factory.permanent(await factory.shift(name="Other"), date(2025, 1, 1),
                                scope=AssignmentScope.DEPARTMENT, department_role="sales")

        resolved = await ShiftService(session).resolve_shift_assignment(employee.id, DAY)

        assert resolved.shift.id == dept_shift.id
        assert resolved.source == ShiftSource.DEPARTMENT

    async def test_no_manager_and_no_role_skip_group_assignments(self, session, factory):
        employee = await factory.employee(role=None)
        await factory.permanent(await factory.shift(), date(2025, 1, 1),
                                scope=AssignmentScope.DEPARTMENT, department_role="engineer")

        assert await ShiftService(session).resolve_shift_assignment(employee.id, DAY) is None

    async def test_weekly_off_roster_resolves_without_shift(self, session, factory):
        employee = await factory.employee()
        await factory.permanent(await factory.shift(), date(2025, 1, 1), employee_id=employee.id)
        await factory.roster(employee.id, DAY, is_weekly_off=True)
        service = ShiftService(session)

        resolved = await service.resolve_shift_assignment(employee.id, DAY)

        assert resolved is not None
        assert resolved.is_weekly_off is True
        assert resolved.shift is None
        assert await service.resolve_shift(employee.id, DAY) is None

    async def test_rostered_shift_wins_over_weekly_off_flag(self, session, factory):
        employee = await factory.employee()
        rostered = await factory.shift(name="Rostered")
        await factory.roster(employee.id, DAY, rostered, is_weekly_off=True)

        resolved = await ShiftService(session).resolve_shift_assignment(employee.id, DAY)

        assert resolved.shift.id == rostered.id
        assert resolved.is_weekly_off is False
        assert resolved.source == ShiftSource.ROSTER

    async def test_roster_row_without_shift_or_off_flag_falls_through(self, session, factory):
        employee = await factory.employee()
        permanent = await factory.shift(name="Permanent")
        await factory.permanent(permanent, date(2025, 1, 1), employee_id=employee.id)
        await factory.roster(employee.id, DAY)

        resolved = await ShiftService(session).resolve_shift_assignment(employee.id, DAY)

        assert resolved.shift.id == permanent.id
        assert resolved.source == ShiftSource.PERMANENT

    async def test_unassigned_employee_resolves_to_none(self, session, factory):
        employee = await factory.employee()
        assert await ShiftService(session).resolve_shift_assignment(employee.id, DAY) is None

    async def test_assignment_targets(self, session, factory):
        manager = await factory.employee(role="lead")
        first = await factory.employee(role="engineer", manager_id=manager.id)
        second = await factory.employee(role="support", manager_id=manager.id)
        await factory.employee(role="engineer", manager_id=manager.id, is_active=False)
        service = ShiftService(session)

        assert await service.get_team_employee_ids(manager.id) == [first.id, second.id]
        assert await service.get_department_employee_ids("engineer") == [first.id]
