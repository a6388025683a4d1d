from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional

from app.database import get_db
from app.models.dtr import DTRStatus
from app.models.user import User
from app.routers.auth_deps import get_current_user, require_approver
from app.schemas.dtr import (
    BulkDTRRequest,
    BulkDTRResponse,
    DTRCreate,
    DTRResponse,
    DTRUpdate,
    RevisionRequest,
)
from app.schemas.payroll import BulkPayrollResponse
from app.services.dtr_service import DTRService
from app.services.payroll_service import PayrollService

router = APIRouter(prefix="/dtrs", tags=["dtrs"])


@router.get("", response_model=List[DTRResponse])
def list_dtrs(
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    status_filter: Optional[DTRStatus] = Query(None, alias="status"),
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    date_to: Optional[date] = Query(None, alias="dateTo"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return DTRService(db, current_user).list(
        employee_id=employee_id,
        status=status_filter.value if status_filter else None,
        date_from=date_from,
        date_to=date_to,
    )


@router.get("/recent", response_model=List[DTRResponse])
def recent_dtrs(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return DTRService(db, current_user).recent(limit=limit)


@router.post("", response_model=DTRResponse, status_code=status.HTTP_201_CREATED)
def create_dtr(data: DTRCreate, db: Session = Depends(get_db), current_user: User = Depends(require_approver())):
    return DTRService(db, current_user).create(data)


@router.get("/{dtr_id}", response_model=DTRResponse)
def get_dtr(dtr_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return DTRService(db, current_user).get(dtr_id)


@router.put("/{dtr_id}", response_model=DTRResponse)
def update_dtr(
    dtr_id: int,
    data: DTRUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    return DTRService(db, current_user).update(dtr_id, data)


@router.delete("/{dtr_id}")
def delete_dtr(dtr_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_approver())):
    DTRService(db, current_user).delete(dtr_id)
    return {"success": True, "message": "DTR deleted"}


# ---------------------------------------------------------------------------
# Status transitions
# ---------------------------------------------------------------------------

@router.patch("/{dtr_id}/approve", response_model=DTRResponse)
def approve_dtr(dtr_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_approver())):
    return DTRService(db, current_user).approve(dtr_id)


@router.patch("/{dtr_id}/reject", response_model=DTRResponse)
def reject_dtr(dtr_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_approver())):
    return DTRService(db, current_user).reject(dtr_id)


@router.patch("/{dtr_id}/request-revision", response_model=DTRResponse)
def request_revision(
    dtr_id: int,
    data: Optional[RevisionRequest] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    return DTRService(db, current_user).request_revision(dtr_id, data.remarks if data else None)


# ---------------------------------------------------------------------------
# Bulk
# ---------------------------------------------------------------------------

@router.post("/bulk/approve", response_model=BulkDTRResponse)
def bulk_approve(data: BulkDTRRequest, db: Session = Depends(get_db), current_user: User = Depends(require_approver())):
    return DTRService(db, current_user).bulk_approve(data.dtr_ids)


@router.post("/bulk/reject", response_model=BulkDTRResponse)
def bulk_reject(data: BulkDTRRequest, db: Session = Depends(get_db), current_user: User = Depends(require_approver())):
    return DTRService(db, current_user).bulk_reject(data.dtr_ids)


@router.post("/bulk/process-payroll", response_model=BulkPayrollResponse)
def bulk_process_payroll(
    data: BulkDTRRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    return PayrollService(db, current_user).bulk_process_dtrs(data.dtr_ids)
