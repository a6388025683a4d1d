from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import date
from typing import List, Optional

from app.models.payroll import PayrollStatus
from app.schemas.dtr import BulkError

class DeductionItem(BaseModel):
    type: str
    amount: float
    description: Optional[str] = None

class PayrollCreate(BaseModel):
    """Manually entered payroll record."""
    employee_id: int
    pay_period_start: date
    pay_period_end: date
    total_regular_hours: float = Field(0.0, ge=0)
    total_overtime_hours: float = Field(0.0, ge=0)
    gross_pay: float = Field(..., ge=0)
    total_deductions: float = Field(0.0, ge=0)
    net_pay: float
    status: PayrollStatus = PayrollStatus.PENDING

    @model_validator(mode="after")
    def check_period(self):
        if self.pay_period_end < self.pay_period_start:
            raise ValueError("pay_period_end must not be before pay_period_start")
        return self

class PayrollResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    pay_period_start: date
    pay_period_end: date
    source: str
    total_regular_hours: float
    total_overtime_hours: float
    regular_pay: float
    overtime_pay: float
    gross_pay: float
    deductions: Optional[List[DeductionItem]] = None
    total_deductions: float
    net_pay: float
    status: str
    processed_by: Optional[int] = None
    processed_date: Optional[date] = None
    payment_date: Optional[date] = None

class GeneratePayrollRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    period_start: date = Field(..., alias="periodStart")
    period_end: date = Field(..., alias="periodEnd")

    @model_validator(mode="after")
    def check_period(self):
        if self.period_end < self.period_start:
            raise ValueError("periodEnd must not be before periodStart")
        return self

class SkippedEmployee(BaseModel):
    employee_id: int
    reason: str

class GeneratePayrollResponse(BaseModel):
    message: str
    payrolls: List[PayrollResponse]
    skipped: List[SkippedEmployee]

class BulkPayrollResponse(BaseModel):
    success: bool
    processed: int
    total: int
    results: List[PayrollResponse]
    errors: List[BulkError]
