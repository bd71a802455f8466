from sqlalchemy import Column, Integer, String, Text, Date, Numeric, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from shift_payroll.db.base import BaseModel
from shift_payroll.models.shared.enums import LeaveStatus

class Leave(BaseModel):
    __tablename__ = 'leaves'

    employee_id = Column(Integer, ForeignKey('employees.id'), nullable=False, index=True)
    leave_type = Column(String(30), nullable=False)  # free-form: paid, unpaid, sick, ...
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False)
    number_of_days = Column(Numeric(4, 1))
    reason = Column(Text)
    status = Column(SQLEnum(LeaveStatus), nullable=False, default=LeaveStatus.PENDING, index=True)
    approved_by = Column(Integer)

    # Relationships
    employee = relationship("Employee", back_populates="leaves")
