from sqlalchemy import Column, Integer, Boolean, Text, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from shift_payroll.db.base import BaseModel

class Roster(BaseModel):
    __tablename__ = 'rosters'
    __table_args__ = (
        UniqueConstraint('employee_id', 'roster_date', name='uq_roster_employee_date'),
    )

    employee_id = Column(Integer, ForeignKey('employees.id'), nullable=False, index=True)
    shift_id = Column(Integer, ForeignKey('shifts.id'))  # NULL on a weekly off
    roster_date = Column(Date, nullable=False, index=True)
    week_number = Column(Integer)
    month = Column(Integer)
    year = Column(Integer, nullable=False)
    is_weekly_off = Column(Boolean, default=False)
    notes = Column(Text)

    # Relationships
    employee = relationship("Employee", back_populates="roster_entries")
    shift = relationship("Shift", back_populates="roster_entries")
