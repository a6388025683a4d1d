from pydantic import BaseModel, EmailStr, ConfigDict, Field
from typing import Optional
from app.models.user import UserRole
from datetime import datetime

class UserBase(BaseModel):
    username: str = Field(..., min_length=3)
    email: EmailStr
    first_name: str
    last_name: str
    role: UserRole = UserRole.STAFF

class RegisterRequest(UserBase):
    password: str = Field(..., min_length=8)
    employee_id: Optional[int] = None

class UserResponse(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    employee_id: Optional[int] = None
    created_at: Optional[datetime] = None

class LoginRequest(BaseModel):
    # Username or email
    username: str
    password: str

class Token(BaseModel):
    access_token: str
    token_type: str
    user: Optional[UserResponse] = None
