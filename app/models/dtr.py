"""
Daily Time Record model.

Lifecycle:
    Pending -> Approved | Rejected
    Rejected -> Pending (revision requested)
    Approved -> Processing -> Processed -> Paid
"""
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum

class DTRStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    PROCESSING = "Processing"
    PROCESSED = "Processed"
    PAID = "Paid"

class DTRType(str, enum.Enum):
    DAILY = "Daily"
    BI_WEEKLY = "Bi-Weekly"
    PROJECT_BASED = "Project-based"

# Statuses in which a DTR is owned by a payroll run and no longer editable
LOCKED_STATUSES = {DTRStatus.PROCESSING.value, DTRStatus.PROCESSED.value, DTRStatus.PAID.value}

class DTR(Base):
    __tablename__ = "dtrs"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    type = Column(String, default=DTRType.DAILY.value, nullable=False)
    time_in = Column(String(5), nullable=False)  # HH:MM
    time_out = Column(String(5), nullable=False)  # HH:MM
    break_hours = Column(Float, default=1.0, nullable=False)
    regular_hours = Column(Float, default=0.0, nullable=False)  # derived from time_in/time_out/break_hours
    overtime_hours = Column(Float, default=0.0, nullable=False)
    remarks = Column(Text, nullable=True)
    status = Column(String, default=DTRStatus.PENDING.value, nullable=False, index=True)
    submission_date = Column(Date, nullable=False)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    approval_date = Column(Date, nullable=True)
    payroll_id = Column(Integer, ForeignKey("payrolls.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employee = relationship("Employee", back_populates="dtrs")
    payroll = relationship("Payroll", back_populates="dtrs")

    def __repr__(self):
        return f"<DTR {self.id} emp={self.employee_id} {self.date} ({self.status})>"
