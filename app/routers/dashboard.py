from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.models.company import Company, RecordStatus
from app.models.dtr import DTR, DTRStatus
from app.models.employee import Employee
from app.models.payroll import Payroll
from app.models.user import User
from app.routers.auth_deps import get_current_user
from app.schemas.activity import ActivityResponse, DashboardStats
from app.services.activity import ActivityService

router = APIRouter(tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_stats(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Headline numbers for the admin dashboard."""
    payroll_total = db.query(func.coalesce(func.sum(Payroll.net_pay), 0.0)).scalar()
    return {
        "total_employees": db.query(Employee).count(),
        "pending_dtrs": db.query(DTR).filter(DTR.status == DTRStatus.PENDING.value).count(),
        "payroll_total": round(float(payroll_total or 0.0), 2),
        "active_clients": db.query(Company).filter(Company.status == RecordStatus.ACTIVE.value).count(),
    }


@router.get("/activities", response_model=List[ActivityResponse])
def list_activities(
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ActivityService(db, current_user).list_recent(limit=limit)


@router.post("/activities/mark-read")
def mark_activities_read(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    updated = ActivityService(db, current_user).mark_all_read()
    return {"success": True, "updated": updated}
