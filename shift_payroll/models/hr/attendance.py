from sqlalchemy import Column, Integer, Boolean, Text, Date, DateTime, ForeignKey, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
from shift_payroll.db.base import BaseModel
from shift_payroll.models.shared.enums import AttendanceStatus

class Attendance(BaseModel):
    __tablename__ = 'attendances'
    __table_args__ = (
        UniqueConstraint('employee_id', 'attendance_date', name='uq_attendance_employee_date'),
    )

    employee_id = Column(Integer, ForeignKey('employees.id'), nullable=False, index=True)
    attendance_date = Column(Date, nullable=False, index=True)
    check_in = Column(DateTime(timezone=True), nullable=False)
    check_out = Column(DateTime(timezone=True))
    working_minutes = Column(Integer)
    is_late = Column(Boolean, default=False)
    is_early_exit = Column(Boolean, default=False)
    status = Column(SQLEnum(AttendanceStatus), nullable=False)
    notes = Column(Text)
    corrected_by = Column(Integer)  # HR user who made a manual correction

    # Relationships
    employee = relationship("Employee", back_populates="attendances")
