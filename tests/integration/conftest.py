import pytest
import pytest_asyncio
from datetime import date, datetime, time
from typing import AsyncGenerator, Iterable, Optional
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from shift_payroll.core.config import settings
from shift_payroll.models import Base, Attendance, Employee, Leave, Roster, Shift, ShiftAssignment
from shift_payroll.models.shared.enums import AssignmentScope, AssignmentType, AttendanceStatus, LeaveStatus
from shift_payroll.utils.time_utils import iter_dates

# Test database URL
TEST_DATABASE_URL = settings.DATABASE_TEST_URL

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]


@pytest_asyncio.fixture
async def session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database per test"""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    TestingSessionLocal = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with TestingSessionLocal() as s:
        yield s

    await test_engine.dispose()


class RecordFactory:
    """Creates HR records the engine reads"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._counter = 0

    async def _save(self, obj):
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def employee(self, role: Optional[str] = "engineer", manager_id: Optional[int] = None, is_active: bool = True) -> Employee:
        self._counter += 1
        return await self._save(Employee(
            employee_code=f"EMP{self._counter:04d}",
            name=f"Employee {self._counter}",
            email=f"employee{self._counter}@example.com",
            role=role,
            manager_id=manager_id,
            is_active=is_active,
        ))

    async def shift(
        self,
        name: Optional[str] = None,
        start_time: str = "09:00",
        end_time: str = "18:00",
        working_days: Iterable[str] = WEEKDAYS,
        is_night_shift: bool = False,
    ) -> Shift:
        self._counter += 1
        return await self._save(Shift(
            name=name or f"Shift {self._counter}",
            start_time=start_time,
            end_time=end_time,
            working_days=list(working_days),
            is_night_shift=is_night_shift,
        ))

    async def permanent(self, shift: Shift, effective_date: date, scope: AssignmentScope = AssignmentScope.EMPLOYEE,
                        employee_id: Optional[int] = None, team_manager_id: Optional[int] = None,
                        department_role: Optional[str] = None, is_active: bool = True) -> ShiftAssignment:
        return await self._save(ShiftAssignment(
            shift_id=shift.id,
            assignment_type=AssignmentType.PERMANENT,
            assignment_scope=scope,
            employee_id=employee_id,
            team_manager_id=team_manager_id,
            department_role=department_role,
            effective_date=effective_date,
            is_active=is_active,
        ))

    async def temporary(self, shift: Shift, employee_id: int, start_date: date, end_date: date,
                        is_active: bool = True) -> ShiftAssignment:
        return await self._save(ShiftAssignment(
            shift_id=shift.id,
            assignment_type=AssignmentType.TEMPORARY,
            assignment_scope=AssignmentScope.EMPLOYEE,
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            effective_date=start_date,
            is_active=is_active,
        ))

    async def roster(self, employee_id: int, roster_date: date, shift: Optional[Shift] = None,
                     is_weekly_off: bool = False) -> Roster:
        return await self._save(Roster(
            employee_id=employee_id,
            shift_id=shift.id if shift else None,
            roster_date=roster_date,
            month=roster_date.month,
            year=roster_date.year,
            is_weekly_off=is_weekly_off,
        ))

    async def attendance(self, employee_id: int, attendance_date: date,
                         status: AttendanceStatus = AttendanceStatus.PRESENT, is_late: bool = False) -> Attendance:
        return await self._save(Attendance(
            employee_id=employee_id,
            attendance_date=attendance_date,
            check_in=datetime.combine(attendance_date, time(9, 0)),
            status=status,
            is_late=is_late,
        ))

    async def attendance_range(self, employee_id: int, start: date, end: date,
                               status: AttendanceStatus = AttendanceStatus.PRESENT, skip: Iterable[date] = ()):
        skipped = set(skip)
        for day in iter_dates(start, end):
            if day not in skipped:
                await self.attendance(employee_id, day, status)

    async def leave(self, employee_id: int, start_date: date, end_date: date, leave_type: str = "paid",
                    status: LeaveStatus = LeaveStatus.APPROVED) -> Leave:
        return await self._save(Leave(
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            number_of_days=(end_date - start_date).days + 1,
            reason="test",
            status=status,
        ))


@pytest.fixture
def factory(session: AsyncSession) -> RecordFactory:
    return RecordFactory(session)
