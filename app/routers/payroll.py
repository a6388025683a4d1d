"""
Payroll Router

Handles HTTP endpoints for payroll operations.
All business logic is delegated to the payroll service layer.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models.payroll import PayrollStatus
from app.models.user import User
from app.routers.auth_deps import get_current_user, require_approver
from app.schemas.payroll import (
    GeneratePayrollRequest,
    GeneratePayrollResponse,
    PayrollCreate,
    PayrollResponse,
)
from app.services.payroll_service import PayrollService


router = APIRouter(tags=["payroll"])


@router.get("/payrolls", response_model=List[PayrollResponse])
def list_payrolls(
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    status_filter: Optional[PayrollStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PayrollService(db, current_user).list(
        employee_id=employee_id, status=status_filter.value if status_filter else None
    )


@router.post("/payrolls", response_model=PayrollResponse, status_code=status.HTTP_201_CREATED)
def create_payroll(
    data: PayrollCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    """Record a manually computed payroll."""
    return PayrollService(db, current_user).create(data)


@router.post("/payrolls/generate", response_model=GeneratePayrollResponse)
def generate_payrolls(
    data: GeneratePayrollRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    """
    Generate payrolls for every active employee with approved DTRs in the
    period. Employees already paid for the exact period are reported in
    `skipped`.
    """
    return PayrollService(db, current_user).generate(data.period_start, data.period_end)


@router.get("/payrolls/{payroll_id}", response_model=PayrollResponse)
def get_payroll(payroll_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return PayrollService(db, current_user).get(payroll_id)


@router.patch("/payrolls/{payroll_id}/process", response_model=PayrollResponse)
def mark_payroll_processed(
    payroll_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    return PayrollService(db, current_user).mark_processed(payroll_id)


@router.patch("/payrolls/{payroll_id}/mark-paid", response_model=PayrollResponse)
def mark_payroll_paid(
    payroll_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    return PayrollService(db, current_user).mark_paid(payroll_id)


@router.post("/payroll/process/{dtr_id}", response_model=PayrollResponse, status_code=status.HTTP_201_CREATED)
def process_dtr_payroll(
    dtr_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    """Compute a payroll straight from one approved DTR."""
    return PayrollService(db, current_user).process_dtr(dtr_id)
