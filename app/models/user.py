"""
User Model with role-based access.
"""
from sqlalchemy import Column, Integer, String, Enum, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from app.database import Base
from app.models.company import RecordStatus


class UserRole(str, enum.Enum):
    """
    User roles.

    - ADMIN: Full access, including user registration
    - MANAGER: DTR approvals and payroll runs
    - STAFF: Read access, plus self-service when linked to an employee
    """
    ADMIN = "Admin"
    MANAGER = "Manager"
    STAFF = "Staff"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)

    role = Column(Enum(UserRole, values_callable=lambda e: [m.value for m in e]), default=UserRole.STAFF, nullable=False)
    status = Column(String, default=RecordStatus.ACTIVE.value, nullable=False)

    # Explicit link to the employee record for self-service
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=True, unique=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employee = relationship("Employee", back_populates="user")
    activities = relationship("Activity", back_populates="user")

    def __repr__(self):
        return f"<User {self.username} ({self.role.value})>"

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE.value
