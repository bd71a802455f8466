from sqlalchemy import Column, Integer, String, Boolean, Text, JSON, Enum as SQLEnum
from sqlalchemy.orm import relationship
from shift_payroll.core.config import settings
from shift_payroll.db.base import BaseModel
from shift_payroll.models.shared.enums import ShiftKind

class Shift(BaseModel):
    __tablename__ = 'shifts'

    name = Column(String(50), nullable=False, unique=True)
    shift_type = Column(SQLEnum(ShiftKind), nullable=False, default=ShiftKind.FIXED)
    start_time = Column(String(5), nullable=False)  # HH:mm
    end_time = Column(String(5), nullable=False)    # HH:mm, next day when is_night_shift
    grace_period_minutes = Column(Integer, default=settings.DEFAULT_GRACE_PERIOD_MINUTES)
    early_exit_grace_period_minutes = Column(Integer, default=settings.DEFAULT_GRACE_PERIOD_MINUTES)
    minimum_working_minutes = Column(Integer, default=0)
    break_duration_minutes = Column(Integer, default=settings.DEFAULT_BREAK_DURATION_MINUTES)
    is_break_paid = Column(Boolean, default=False)
    working_days = Column(JSON, nullable=False, default=list)  # ["monday", ...]
    is_night_shift = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)
    description = Column(Text)

    # Relationships
    assignments = relationship("ShiftAssignment", back_populates="shift")
    roster_entries = relationship("Roster", back_populates="shift")
