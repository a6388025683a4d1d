from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models.company import RecordStatus
from app.models.user import User
from app.routers.auth_deps import get_current_user, require_approver
from app.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from app.services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=List[EmployeeResponse])
def list_employees(
    company_id: Optional[int] = Query(None, alias="companyId"),
    status_filter: Optional[RecordStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return EmployeeService(db, current_user).list(
        company_id=company_id, status=status_filter.value if status_filter else None
    )


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def create_employee(
    data: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    return EmployeeService(db, current_user).create(data)


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(employee_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return EmployeeService(db, current_user).get(employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    return EmployeeService(db, current_user).update(employee_id, data)


@router.patch("/{employee_id}/activate", response_model=EmployeeResponse)
def activate_employee(employee_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_approver())):
    return EmployeeService(db, current_user).set_status(employee_id, RecordStatus.ACTIVE)


@router.patch("/{employee_id}/deactivate", response_model=EmployeeResponse)
def deactivate_employee(employee_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_approver())):
    return EmployeeService(db, current_user).set_status(employee_id, RecordStatus.INACTIVE)
