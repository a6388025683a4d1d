"""
Employee self-service.

Every route resolves the employee through the logged-in user's
employee_id link; users without one get a 404.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models.employee import Employee
from app.models.user import User
from app.routers.auth_deps import get_current_employee, get_current_user
from app.schemas.activity import ActivityResponse
from app.schemas.dtr import DTRCreate, DTRResponse, EmployeeDTRCreate
from app.schemas.employee import EmployeeResponse
from app.schemas.payroll import PayrollResponse
from app.services.activity import ActivityService
from app.services.dtr_service import DTRService
from app.services.payroll_service import PayrollService

router = APIRouter(prefix="/employee", tags=["employee self-service"])


@router.get("/profile", response_model=EmployeeResponse)
def my_profile(employee: Employee = Depends(get_current_employee)):
    return employee


@router.get("/dtrs", response_model=List[DTRResponse])
def my_dtrs(
    week: Optional[str] = Query(None, pattern="^current$"),
    recent: Optional[int] = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    employee: Employee = Depends(get_current_employee),
):
    service = DTRService(db, current_user)
    if week == "current":
        return service.current_week(employee.id)
    if recent:
        return service.recent(limit=recent, employee_id=employee.id)
    return service.list(employee_id=employee.id)


@router.post("/dtrs", response_model=DTRResponse, status_code=status.HTTP_201_CREATED)
def submit_dtr(
    data: EmployeeDTRCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    employee: Employee = Depends(get_current_employee),
):
    # Always lands as Pending, whatever the caller sends
    payload = DTRCreate(**data.model_dump(), employee_id=employee.id)
    return DTRService(db, current_user).create(payload)


@router.get("/payslips", response_model=List[PayrollResponse])
def my_payslips(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    employee: Employee = Depends(get_current_employee),
):
    return PayrollService(db, current_user).list(employee_id=employee.id)


@router.get("/payslip-latest", response_model=PayrollResponse)
def my_latest_payslip(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    employee: Employee = Depends(get_current_employee),
):
    payroll = PayrollService(db, current_user).latest_for_employee(employee.id)
    if not payroll:
        raise HTTPException(status_code=404, detail="No payslip available yet")
    return payroll


@router.get("/notifications", response_model=List[ActivityResponse])
def my_notifications(
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    employee: Employee = Depends(get_current_employee),
):
    return ActivityService(db, current_user).list_recent(limit=limit, user_id=current_user.id)
