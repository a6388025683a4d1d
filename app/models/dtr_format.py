from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, JSON
from sqlalchemy.sql import func
from app.database import Base

class DtrFormat(Base):
    """A known DTR document layout used when reading scanned time sheets."""
    __tablename__ = "dtr_formats"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=True)
    pattern = Column(Text, default="")
    extraction_rules = Column(JSON, default=dict)
    example = Column(Text, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class UnknownDtrFormat(Base):
    __tablename__ = "unknown_dtr_formats"

    id = Column(Integer, primary_key=True, index=True)
    raw_text = Column(Text, nullable=False)
    parsed_data = Column(JSON, nullable=True)
    image_data = Column(Text, nullable=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=True)
    is_processed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
