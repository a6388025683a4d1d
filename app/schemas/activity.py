from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

class ActivityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[int] = None
    action: str
    description: str
    timestamp: Optional[datetime] = None
    read: bool

class DashboardStats(BaseModel):
    total_employees: int
    pending_dtrs: int
    payroll_total: float
    active_clients: int
