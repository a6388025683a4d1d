from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models.company import RecordStatus
from app.models.user import User
from app.routers.auth_deps import get_current_user, require_approver
from app.schemas.company import CompanyCreate, CompanyResponse, CompanyUpdate
from app.services.company_service import CompanyService

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=List[CompanyResponse])
def list_companies(
    status_filter: Optional[RecordStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return CompanyService(db, current_user).list(status=status_filter.value if status_filter else None)


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
def create_company(data: CompanyCreate, db: Session = Depends(get_db), current_user: User = Depends(require_approver())):
    return CompanyService(db, current_user).create(data)


@router.get("/{company_id}", response_model=CompanyResponse)
def get_company(company_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return CompanyService(db, current_user).get(company_id)


@router.put("/{company_id}", response_model=CompanyResponse)
def update_company(
    company_id: int,
    data: CompanyUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    return CompanyService(db, current_user).update(company_id, data)


@router.patch("/{company_id}/activate", response_model=CompanyResponse)
def activate_company(company_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_approver())):
    return CompanyService(db, current_user).set_status(company_id, RecordStatus.ACTIVE)


@router.patch("/{company_id}/deactivate", response_model=CompanyResponse)
def deactivate_company(company_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_approver())):
    return CompanyService(db, current_user).set_status(company_id, RecordStatus.INACTIVE)
