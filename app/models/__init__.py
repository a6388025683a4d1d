# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import (
    company, employee, user, dtr, payroll, activity, dtr_format
)

# Explicit class exports for cleaner imports
from .company import Company, RecordStatus
from .employee import Employee, EmployeeType
from .user import User, UserRole
from .dtr import DTR, DTRStatus, DTRType
from .payroll import Payroll, PayrollStatus, PayrollSource
from .activity import Activity
from .dtr_format import DtrFormat, UnknownDtrFormat

__all__ = [
    "Company",
    "RecordStatus",
    "Employee",
    "EmployeeType",
    "User",
    "UserRole",
    "DTR",
    "DTRStatus",
    "DTRType",
    "Payroll",
    "PayrollStatus",
    "PayrollSource",
    "Activity",
    "DtrFormat",
    "UnknownDtrFormat",
]
