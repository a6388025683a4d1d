from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Any, Dict, Optional

class DtrFormatCreate(BaseModel):
    name: str = Field(..., min_length=1)
    company_id: Optional[int] = None
    pattern: str = ""
    extraction_rules: Dict[str, Any] = Field(default_factory=dict)
    example: str = ""

class DtrFormatResponse(DtrFormatCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None

class UnknownDtrFormatCreate(BaseModel):
    raw_text: str = Field(..., min_length=1)
    parsed_data: Optional[Dict[str, Any]] = None
    image_data: Optional[str] = None
    company_id: Optional[int] = None

class UnknownDtrFormatResponse(UnknownDtrFormatCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    is_processed: bool
    created_at: Optional[datetime] = None

class ApproveFormatRequest(BaseModel):
    name: str = Field(..., min_length=1)
    pattern: str = ""
    extraction_rules: Dict[str, Any] = Field(default_factory=dict)
