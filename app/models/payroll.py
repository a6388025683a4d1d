from sqlalchemy import Column, Integer, Float, Date, DateTime, ForeignKey, JSON, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum

class PayrollStatus(str, enum.Enum):
    PENDING = "Pending"
    PROCESSED = "Processed"
    PAID = "Paid"

class PayrollSource(str, enum.Enum):
    PERIOD = "period"  # generated over a pay period
    DTR = "dtr"  # processed from a single DTR

class Payroll(Base):
    __tablename__ = "payrolls"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    pay_period_start = Column(Date, nullable=False, index=True)
    pay_period_end = Column(Date, nullable=False, index=True)
    source = Column(String, default=PayrollSource.PERIOD.value, nullable=False)
    total_regular_hours = Column(Float, default=0.0)
    total_overtime_hours = Column(Float, default=0.0)
    regular_pay = Column(Float, default=0.0)
    overtime_pay = Column(Float, default=0.0)
    gross_pay = Column(Float, nullable=False)
    deductions = Column(JSON, nullable=True)  # [{"type", "amount", "description"}]
    total_deductions = Column(Float, default=0.0)
    net_pay = Column(Float, nullable=False)
    status = Column(String, default=PayrollStatus.PENDING.value, nullable=False, index=True)
    processed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    processed_date = Column(Date, nullable=True)
    payment_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", back_populates="payrolls")
    dtrs = relationship("DTR", back_populates="payroll")

    def __repr__(self):
        return f"<Payroll {self.id} emp={self.employee_id} {self.pay_period_start}..{self.pay_period_end} ({self.status})>"
