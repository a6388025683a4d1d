from typing import List, Optional

from app.core.exceptions import NotFoundError
from app.models.company import Company, RecordStatus
from app.schemas.company import CompanyCreate, CompanyUpdate
from app.services.activity import ActivityService
from app.services.base import BaseService


class CompanyService(BaseService):
    """Client companies. Deactivated instead of deleted."""

    def __init__(self, db, actor=None):
        super().__init__(db, actor)
        self.activity = ActivityService(db, actor)

    def get(self, company_id: int) -> Company:
        company = self.db.query(Company).filter(Company.id == company_id).first()
        if not company:
            raise NotFoundError("Company", company_id)
        return company

    def list(self, status: Optional[str] = None) -> List[Company]:
        query = self.db.query(Company)
        if status:
            query = query.filter(Company.status == status)
        return query.order_by(Company.name).all()

    def create(self, data: CompanyCreate) -> Company:
        company = Company(**data.model_dump(), status=RecordStatus.ACTIVE.value)
        self.db.add(company)
        self.activity.log_action("company_added", f"New client added: {company.name}")
        self.commit()
        self.db.refresh(company)
        return company

    def update(self, company_id: int, data: CompanyUpdate) -> Company:
        company = self.get(company_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(company, field, value)
        self.activity.log_action("company_updated", f"Client updated: {company.name}")
        self.commit()
        self.db.refresh(company)
        return company

    def set_status(self, company_id: int, status: RecordStatus) -> Company:
        company = self.get(company_id)
        company.status = status.value
        verb = "activated" if status == RecordStatus.ACTIVE else "deactivated"
        self.activity.log_action(f"company_{verb}", f"Client {verb}: {company.name}")
        self.commit()
        self.db.refresh(company)
        return company
