from shift_payroll.models.shared.enums import Base
from shift_payroll.models.hr.employee import Employee
from shift_payroll.models.hr.shift import Shift
from shift_payroll.models.hr.shift_assignment import ShiftAssignment
from shift_payroll.models.hr.roster import Roster
from shift_payroll.models.hr.attendance import Attendance
from shift_payroll.models.hr.leave import Leave
