"""
Known and unrecognised DTR document layouts.

Unknown layouts are queued here by the capture client and promoted to a
known format once an admin has written extraction rules for them.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models.dtr_format import DtrFormat, UnknownDtrFormat
from app.models.user import User
from app.routers.auth_deps import get_current_user, require_approver
from app.schemas.dtr_format import (
    ApproveFormatRequest,
    DtrFormatCreate,
    DtrFormatResponse,
    UnknownDtrFormatCreate,
    UnknownDtrFormatResponse,
)
from app.services.activity import ActivityService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dtr formats"])


@router.get("/dtr-formats", response_model=List[DtrFormatResponse])
def list_formats(
    company_id: Optional[int] = Query(None, alias="companyId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(DtrFormat)
    if company_id is not None:
        query = query.filter(DtrFormat.company_id == company_id)
    return query.order_by(DtrFormat.name).all()


@router.post("/dtr-formats", response_model=DtrFormatResponse, status_code=status.HTTP_201_CREATED)
def create_format(
    data: DtrFormatCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    fmt = DtrFormat(**data.model_dump())
    db.add(fmt)
    ActivityService.log(db, current_user, "dtr_format_added", f"DTR format added: {fmt.name}")
    db.commit()
    db.refresh(fmt)
    return fmt


@router.get("/unknown-dtr-formats", response_model=List[UnknownDtrFormatResponse])
def list_unknown_formats(
    include_processed: bool = Query(False, alias="includeProcessed"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(UnknownDtrFormat)
    if not include_processed:
        query = query.filter(UnknownDtrFormat.is_processed.is_(False))
    return query.order_by(UnknownDtrFormat.created_at.desc(), UnknownDtrFormat.id.desc()).all()


@router.post("/unknown-dtr-formats", response_model=UnknownDtrFormatResponse, status_code=status.HTTP_201_CREATED)
def queue_unknown_format(
    data: UnknownDtrFormatCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    unknown = UnknownDtrFormat(**data.model_dump(), is_processed=False)
    db.add(unknown)
    db.commit()
    db.refresh(unknown)
    logger.info(f"Unknown DTR format {unknown.id} queued for review")
    return unknown


@router.post("/unknown-dtr-formats/{format_id}/approve", response_model=DtrFormatResponse)
def approve_unknown_format(
    format_id: int,
    data: ApproveFormatRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_approver()),
):
    """Promote a queued layout to a known DtrFormat."""
    unknown = db.query(UnknownDtrFormat).filter(UnknownDtrFormat.id == format_id).first()
    if not unknown:
        raise HTTPException(status_code=404, detail="Unknown DTR format not found")
    if unknown.is_processed:
        raise HTTPException(status_code=400, detail="Format has already been processed")

    fmt = DtrFormat(
        name=data.name,
        company_id=unknown.company_id,
        pattern=data.pattern,
        extraction_rules=data.extraction_rules,
        example=unknown.raw_text,
    )
    db.add(fmt)
    unknown.is_processed = True
    ActivityService.log(db, current_user, "dtr_format_approved", f"DTR format approved: {fmt.name}")
    db.commit()
    db.refresh(fmt)
    return fmt
