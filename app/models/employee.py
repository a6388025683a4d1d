from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from app.models.company import RecordStatus
import enum

class EmployeeType(str, enum.Enum):
    """
    Employment type decides how `salary` is read:
    - REGULAR: monthly salary, pro-rated over the pay period
    - CONTRACT / PROJECT_BASED: hourly rate
    """
    REGULAR = "Regular"
    CONTRACT = "Contract"
    PROJECT_BASED = "Project-based"

class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=False)
    position = Column(String, nullable=False)
    department = Column(String, nullable=False)
    employee_type = Column(String, default=EmployeeType.REGULAR.value, nullable=False)
    date_hired = Column(Date, nullable=False)
    salary = Column(Float, nullable=False)
    status = Column(String, default=RecordStatus.ACTIVE.value, nullable=False, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    company = relationship("Company", back_populates="employees")
    dtrs = relationship("DTR", back_populates="employee")
    payrolls = relationship("Payroll", back_populates="employee")
    user = relationship("User", back_populates="employee", uselist=False)

    def __repr__(self):
        return f"<Employee {self.full_name} ({self.employee_type})>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
