from pydantic import BaseModel, validator
from typing import List, Optional
from datetime import date
from decimal import Decimal

from shift_payroll.models.shared.enums import DayKind, HalfDayDeductionRule, WorkingDaysRule


class SalaryStructureConfig(BaseModel):
    """Payroll-relevant salary structure, already resolved for one employee"""
    gross_monthly_salary: Decimal
    working_days_rule: WorkingDaysRule = WorkingDaysRule.SHIFT_BASED
    fixed_working_days: Optional[int] = None
    paid_leave_types: List[str] = ["paid"]
    unpaid_leave_types: List[str] = ["unpaid"]
    half_day_deduction_rule: HalfDayDeductionRule = HalfDayDeductionRule.HALF_DAY

    @validator('gross_monthly_salary')
    def validate_gross(cls, v):
        if v < 0:
            raise ValueError('Gross monthly salary cannot be negative')
        return v

    @validator('fixed_working_days', always=True)
    def validate_fixed_working_days(cls, v, values):
        if v is not None and not (1 <= v <= 31):
            raise ValueError('Fixed working days must be between 1 and 31')
        if values.get('working_days_rule') == WorkingDaysRule.FIXED_DAYS and v is None:
            raise ValueError('fixed_working_days is required when working_days_rule is fixed_days')
        return v

    class Config:
        from_attributes = True


class DayClassification(BaseModel):
    day: date
    kind: DayKind
    is_late: bool = False
    anomaly: Optional[str] = None


class PayrollTally(BaseModel):
    """Day counts accumulated over a payroll period"""
    present_days: int = 0
    absent_days: int = 0
    half_days: int = 0
    paid_leave_days: int = 0
    unpaid_leave_days: int = 0
    late_arrivals: int = 0
    anomalies: List[str] = []

    @property
    def classified_days(self) -> int:
        return (
            self.present_days + self.absent_days + self.half_days
            + self.paid_leave_days + self.unpaid_leave_days
        )


class DeductionBreakdown(BaseModel):
    unpaid_leave: Decimal = Decimal("0")
    half_day: Decimal = Decimal("0")
    late_penalty: Decimal = Decimal("0")
    total: Decimal = Decimal("0")


class PayrollCalculationResult(BaseModel):
    employee_id: int
    month: int
    year: int
    total_working_days: int
    present_days: int
    absent_days: int
    half_days: int
    paid_leave_days: int
    unpaid_leave_days: int
    late_arrivals: int
    payable_days: Decimal
    per_day_salary: Decimal
    gross_payable: Decimal
    deductions: DeductionBreakdown
    net_payable: Decimal  # negative allowed
    anomalies: List[str] = []
