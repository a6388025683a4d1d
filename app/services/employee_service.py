from typing import List, Optional

from app.core.exceptions import NotFoundError, ValidationFailedError
from app.models.company import Company, RecordStatus
from app.models.employee import Employee
from app.schemas.employee import EmployeeCreate, EmployeeUpdate
from app.services.activity import ActivityService
from app.services.base import BaseService


class EmployeeService(BaseService):
    """
    Employee records.

    Employees are never hard-deleted; deactivation keeps their DTR and
    payroll history intact.
    """

    def __init__(self, db, actor=None):
        super().__init__(db, actor)
        self.activity = ActivityService(db, actor)

    def get(self, employee_id: int) -> Employee:
        employee = self.db.query(Employee).filter(Employee.id == employee_id).first()
        if not employee:
            raise NotFoundError("Employee", employee_id)
        return employee

    def list(self, company_id: Optional[int] = None, status: Optional[str] = None) -> List[Employee]:
        query = self.db.query(Employee)
        if company_id is not None:
            query = query.filter(Employee.company_id == company_id)
        if status:
            query = query.filter(Employee.status == status)
        return query.order_by(Employee.last_name, Employee.first_name).all()

    def _check_email(self, email: str, exclude_id: Optional[int] = None):
        query = self.db.query(Employee).filter(Employee.email == email)
        if exclude_id is not None:
            query = query.filter(Employee.id != exclude_id)
        if query.first():
            raise ValidationFailedError("Email already in use by another employee", field="email")

    def _check_company(self, company_id: Optional[int]):
        if company_id is not None and not self.db.query(Company).filter(Company.id == company_id).first():
            raise NotFoundError("Company", company_id)

    def create(self, data: EmployeeCreate) -> Employee:
        self._check_email(data.email)
        self._check_company(data.company_id)

        employee = Employee(
            **data.model_dump(exclude={"employee_type"}),
            employee_type=data.employee_type.value,
            status=RecordStatus.ACTIVE.value,
        )
        self.db.add(employee)
        self.activity.log_action("employee_added", f"New employee added: {employee.full_name}")
        self.commit()
        self.db.refresh(employee)
        self.log_info(f"Employee {employee.id} created")
        return employee

    def update(self, employee_id: int, data: EmployeeUpdate) -> Employee:
        employee = self.get(employee_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("email"):
            self._check_email(changes["email"], exclude_id=employee.id)
        if "company_id" in changes:
            self._check_company(changes["company_id"])

        for field, value in changes.items():
            if value is None and field != "company_id":
                continue
            if field == "employee_type":
                value = value.value
            setattr(employee, field, value)

        self.activity.log_action("employee_updated", f"Employee updated: {employee.full_name}")
        self.commit()
        self.db.refresh(employee)
        return employee

    def set_status(self, employee_id: int, status: RecordStatus) -> Employee:
        employee = self.get(employee_id)
        employee.status = status.value
        verb = "activated" if status == RecordStatus.ACTIVE else "deactivated"
        self.activity.log_action(f"employee_{verb}", f"Employee {verb}: {employee.full_name}")
        self.commit()
        self.db.refresh(employee)
        return employee
