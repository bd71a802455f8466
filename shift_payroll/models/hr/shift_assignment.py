from sqlalchemy import Column, Integer, String, Boolean, Text, Date, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from shift_payroll.db.base import BaseModel
from shift_payroll.models.shared.enums import AssignmentScope, AssignmentType

class ShiftAssignment(BaseModel):
    __tablename__ = 'shift_assignments'

    shift_id = Column(Integer, ForeignKey('shifts.id'), nullable=False, index=True)
    assignment_type = Column(SQLEnum(AssignmentType), nullable=False)
    assignment_scope = Column(SQLEnum(AssignmentScope), nullable=False)

    # Exactly one target, matching the scope
    employee_id = Column(Integer, ForeignKey('employees.id'), index=True)
    team_manager_id = Column(Integer, ForeignKey('employees.id'), index=True)
    department_role = Column(String(50), index=True)

    start_date = Column(Date)  # temporary only
    end_date = Column(Date)    # temporary only, inclusive
    effective_date = Column(Date, nullable=False)
    reason = Column(Text)
    assigned_by = Column(Integer)
    is_active = Column(Boolean, default=True)

    # Relationships
    shift = relationship("Shift", back_populates="assignments")
