from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import Optional

class CompanyBase(BaseModel):
    name: str = Field(..., min_length=1)
    address: str
    contact_person: str
    contact_email: EmailStr
    contact_phone: str

class CompanyCreate(CompanyBase):
    pass

class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    contact_person: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None

class CompanyResponse(CompanyBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    created_at: Optional[datetime] = None
