from pydantic import BaseModel, validator
from typing import List, Optional
from datetime import date

from shift_payroll.core.config import settings
from shift_payroll.models.hr.shift import Shift
from shift_payroll.models.shared.enums import AssignmentScope, AssignmentType, DayOfWeek, ShiftKind, ShiftSource
from shift_payroll.utils.time_utils import time_to_minutes
from shift_payroll.utils.validators.validation_utils import validate_shift_times


class ShiftBase(BaseModel):
    name: str
    shift_type: ShiftKind = ShiftKind.FIXED
    start_time: str
    end_time: str
    grace_period_minutes: int = settings.DEFAULT_GRACE_PERIOD_MINUTES
    early_exit_grace_period_minutes: int = settings.DEFAULT_GRACE_PERIOD_MINUTES
    minimum_working_minutes: int = 0
    break_duration_minutes: int = settings.DEFAULT_BREAK_DURATION_MINUTES
    is_break_paid: bool = False
    working_days: List[DayOfWeek]
    is_night_shift: bool = False
    description: Optional[str] = None

class ShiftCreate(ShiftBase):
    @validator('name')
    def validate_name(cls, v):
        if not v or len(v.strip()) < 2:
            raise ValueError('Shift name must be at least 2 characters')
        return v.strip()

    @validator('start_time', 'end_time')
    def validate_clock(cls, v):
        time_to_minutes(v)
        return v

    @validator('grace_period_minutes', 'early_exit_grace_period_minutes', 'minimum_working_minutes', 'break_duration_minutes')
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError('Minutes cannot be negative')
        return v

    @validator('working_days')
    def validate_working_days(cls, v):
        if not v:
            raise ValueError('At least one working day must be specified')
        if len(v) != len(set(v)):
            raise ValueError('Duplicate working days found')
        return v

    @validator('is_night_shift', always=True)
    def validate_window(cls, v, values):
        # start/end already failed their own validation when missing here
        if 'start_time' in values and 'end_time' in values:
            valid, error = validate_shift_times(values['start_time'], values['end_time'], v)
            if not valid:
                raise ValueError(error)
        return v

class ShiftAssignmentCreate(BaseModel):
    shift_id: int
    assignment_type: AssignmentType
    assignment_scope: AssignmentScope
    employee_id: Optional[int] = None
    team_manager_id: Optional[int] = None
    department_role: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    effective_date: date
    reason: Optional[str] = None

    @validator('employee_id', always=True)
    def validate_employee_target(cls, v, values):
        if values.get('assignment_scope') == AssignmentScope.EMPLOYEE and not v:
            raise ValueError('employee_id is required for employee assignment')
        return v

    @validator('team_manager_id', always=True)
    def validate_team_target(cls, v, values):
        if values.get('assignment_scope') == AssignmentScope.TEAM and not v:
            raise ValueError('team_manager_id is required for team assignment')
        return v

    @validator('department_role', always=True)
    def validate_department_target(cls, v, values):
        if values.get('assignment_scope') == AssignmentScope.DEPARTMENT and not v:
            raise ValueError('department_role is required for department assignment')
        return v

    @validator('end_date', always=True)
    def validate_temporary_range(cls, v, values):
        if values.get('assignment_type') != AssignmentType.TEMPORARY:
            return v
        start = values.get('start_date')
        if not start or not v:
            raise ValueError('start_date and end_date are required for temporary assignments')
        if start >= v:
            raise ValueError('end_date must be after start_date')
        return v


class ResolvedShift(BaseModel):
    """Outcome of shift resolution for one employee and date"""
    shift: Optional[Shift] = None
    source: ShiftSource
    is_weekly_off: bool = False

    class Config:
        arbitrary_types_allowed = True


class ConflictReport(BaseModel):
    has_conflict: bool = False
    conflicts: List[str] = []
