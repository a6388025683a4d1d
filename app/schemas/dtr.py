from pydantic import BaseModel, ConfigDict, Field
import datetime
from typing import List, Optional

from app.models.dtr import DTRType

CLOCK_PATTERN = r"^([01]?\d|2[0-3]):[0-5]\d$"

class DTRBase(BaseModel):
    date: datetime.date
    type: DTRType = DTRType.DAILY
    time_in: str = Field(..., pattern=CLOCK_PATTERN, examples=["08:00"])
    time_out: str = Field(..., pattern=CLOCK_PATTERN, examples=["17:00"])
    break_hours: float = Field(1.0, ge=0)
    overtime_hours: float = Field(0.0, ge=0)
    remarks: Optional[str] = None

class DTRCreate(DTRBase):
    employee_id: int

class EmployeeDTRCreate(DTRBase):
    """Self-service submission; the employee comes from the logged-in user."""

class DTRUpdate(BaseModel):
    date: Optional[datetime.date] = None
    type: Optional[DTRType] = None
    time_in: Optional[str] = Field(None, pattern=CLOCK_PATTERN)
    time_out: Optional[str] = Field(None, pattern=CLOCK_PATTERN)
    break_hours: Optional[float] = Field(None, ge=0)
    overtime_hours: Optional[float] = Field(None, ge=0)
    remarks: Optional[str] = None

class DTRResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    date: datetime.date
    type: str
    time_in: str
    time_out: str
    break_hours: float
    regular_hours: float
    overtime_hours: float
    remarks: Optional[str] = None
    status: str
    submission_date: datetime.date
    approved_by: Optional[int] = None
    approval_date: Optional[datetime.date] = None
    payroll_id: Optional[int] = None

class RevisionRequest(BaseModel):
    remarks: Optional[str] = None

class BulkDTRRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dtr_ids: List[int] = Field(..., alias="dtrIds", min_length=1)

class BulkError(BaseModel):
    id: int
    message: str

class BulkDTRResponse(BaseModel):
    success: bool
    processed: int
    total: int
    results: List[DTRResponse]
    errors: List[BulkError]
