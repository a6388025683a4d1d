from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import date, datetime
from typing import Optional

from app.models.employee import EmployeeType

class EmployeeBase(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str
    position: str
    department: str
    employee_type: EmployeeType = EmployeeType.REGULAR
    date_hired: date
    # Monthly for Regular employees, hourly otherwise
    salary: float = Field(..., gt=0)
    company_id: Optional[int] = None

class EmployeeCreate(EmployeeBase):
    pass

class EmployeeUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    employee_type: Optional[EmployeeType] = None
    date_hired: Optional[date] = None
    salary: Optional[float] = Field(None, gt=0)
    company_id: Optional[int] = None

class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    position: str
    department: str
    employee_type: str
    date_hired: date
    salary: float
    company_id: Optional[int] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
