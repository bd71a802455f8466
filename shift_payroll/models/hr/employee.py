from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from shift_payroll.db.base import BaseModel

class Employee(BaseModel):
    __tablename__ = 'employees'

    employee_code = Column(String(20), unique=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False)
    role = Column(String(50), index=True)  # department identifier for shift assignments
    manager_id = Column(Integer, ForeignKey('employees.id'), nullable=True, index=True)
    is_active = Column(Boolean, default=True)

    # Relationships
    attendances = relationship("Attendance", back_populates="employee")
    leaves = relationship("Leave", back_populates="employee")
    roster_entries = relationship("Roster", back_populates="employee")
