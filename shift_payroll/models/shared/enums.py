from sqlalchemy.orm import declarative_base
from enum import Enum

Base = declarative_base()

# Enums
class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

class ShiftKind(str, Enum):
    FIXED = "fixed"
    ROTATIONAL = "rotational"
    FLEXIBLE = "flexible"

class AssignmentType(str, Enum):
    PERMANENT = "permanent"
    TEMPORARY = "temporary"

class AssignmentScope(str, Enum):
    EMPLOYEE = "employee"
    TEAM = "team"           # all direct reports of a manager
    DEPARTMENT = "department"   # all employees sharing a role

class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half_day"
    MISSED_CHECKOUT = "missed_checkout"

class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

# region Payroll Enums

class WorkingDaysRule(str, Enum):
    SHIFT_BASED = "shift_based"
    CALENDAR_DAYS = "calendar_days"
    FIXED_DAYS = "fixed_days"

class HalfDayDeductionRule(str, Enum):
    HALF_DAY = "half_day"
    PROPORTIONAL = "proportional"

class ShiftSource(str, Enum):
    ROSTER = "roster"
    TEMPORARY = "temporary"
    PERMANENT = "permanent"
    TEAM = "team"
    DEPARTMENT = "department"

class DayKind(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half_day"
    PAID_LEAVE = "paid_leave"
    UNPAID_LEAVE = "unpaid_leave"
    UNRECORDED = "unrecorded"               # working day with no attendance or leave
    UNCLASSIFIED_LEAVE = "unclassified_leave"
    MISSED_CHECKOUT = "missed_checkout"
    NON_WORKING = "non_working"
    SKIPPED = "skipped"                     # Sunday under calendar_days

# endregion
