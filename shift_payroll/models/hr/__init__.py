# shift_payroll/models/hr/__init__.py

# Import models in dependency order
from .employee import Employee
from .shift import Shift
from .shift_assignment import ShiftAssignment
from .roster import Roster
from .attendance import Attendance
from .leave import Leave

# Make sure all models are available
__all__ = [
    "Employee",
    "Shift",
    "ShiftAssignment",
    "Roster",
    "Attendance",
    "Leave",
]
