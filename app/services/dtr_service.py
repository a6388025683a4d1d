"""
DTR Service Layer

Hours computation and the DTR status lifecycle. Routers stay thin and
delegate every state change to this module so the transition guards live
in one place.
"""
import re
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.core.exceptions import InvalidStateError, NotFoundError, ValidationFailedError
from app.models.dtr import DTR, DTRStatus, LOCKED_STATUSES
from app.models.employee import Employee
from app.schemas.dtr import DTRCreate, DTRUpdate
from app.services.activity import ActivityService
from app.services.base import BaseService
from app.services.bulk import run_bulk

_CLOCK_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")
MINUTES_PER_DAY = 24 * 60


def parse_clock(value: str) -> int:
    """Parse an HH:MM string into minutes after midnight."""
    match = _CLOCK_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValidationFailedError(f"Invalid time '{value}', expected HH:MM", field="time")
    return int(match.group(1)) * 60 + int(match.group(2))


def calculate_regular_hours(time_in: str, time_out: str, break_hours: Optional[float] = None) -> float:
    """
    Worked hours between time_in and time_out minus the break, never negative.

    A time_out earlier than time_in is an overnight shift ending the next day.
    """
    if break_hours is None:
        break_hours = settings.payroll.default_break_hours
    if break_hours < 0:
        raise ValidationFailedError("break_hours must not be negative", field="break_hours")

    start = parse_clock(time_in)
    end = parse_clock(time_out)
    if end < start:
        end += MINUTES_PER_DAY

    worked = (end - start) / 60
    return round(max(0.0, worked - break_hours), 2)


def describe_dtr(dtr: DTR) -> str:
    employee = dtr.employee
    name = employee.full_name if employee else f"Employee #{dtr.employee_id}"
    return f"{name} - {dtr.date.isoformat()}"


class DTRService(BaseService):
    """Domain service for daily time records."""

    def __init__(self, db, actor=None):
        super().__init__(db, actor)
        self.activity = ActivityService(db, actor)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, dtr_id: int) -> DTR:
        dtr = self.db.query(DTR).filter(DTR.id == dtr_id).first()
        if not dtr:
            raise NotFoundError("DTR", dtr_id)
        return dtr

    def list(
        self,
        employee_id: Optional[int] = None,
        status: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[DTR]:
        query = self.db.query(DTR)
        if employee_id is not None:
            query = query.filter(DTR.employee_id == employee_id)
        if status:
            query = query.filter(DTR.status == status)
        if date_from:
            query = query.filter(DTR.date >= date_from)
        if date_to:
            query = query.filter(DTR.date <= date_to)
        return query.order_by(DTR.date.desc(), DTR.id.desc()).all()

    def recent(self, limit: int = 10, employee_id: Optional[int] = None) -> List[DTR]:
        query = self.db.query(DTR)
        if employee_id is not None:
            query = query.filter(DTR.employee_id == employee_id)
        return query.order_by(DTR.submission_date.desc(), DTR.id.desc()).limit(limit).all()

    def current_week(self, employee_id: int, today: Optional[date] = None) -> List[DTR]:
        today = today or date.today()
        monday = today - timedelta(days=today.weekday())
        return self.list(employee_id=employee_id, date_from=monday, date_to=monday + timedelta(days=6))

    # ------------------------------------------------------------------
    # Submission & edits
    # ------------------------------------------------------------------
    def create(self, data: DTRCreate) -> DTR:
        employee = self.db.query(Employee).filter(Employee.id == data.employee_id).first()
        if not employee:
            raise NotFoundError("Employee", data.employee_id)

        dtr = DTR(
            employee_id=employee.id,
            date=data.date,
            type=data.type.value,
            time_in=data.time_in,
            time_out=data.time_out,
            break_hours=data.break_hours,
            regular_hours=calculate_regular_hours(data.time_in, data.time_out, data.break_hours),
            overtime_hours=data.overtime_hours,
            remarks=data.remarks,
            status=DTRStatus.PENDING.value,
            submission_date=date.today(),
        )
        dtr.employee = employee
        self.db.add(dtr)
        self.activity.log_action("dtr_submitted", f"DTR submitted for {describe_dtr(dtr)}")
        self.commit()
        self.db.refresh(dtr)
        self.log_info(f"DTR {dtr.id} submitted for employee {employee.id}")
        return dtr

    def update(self, dtr_id: int, data: DTRUpdate) -> DTR:
        dtr = self.get(dtr_id)
        if dtr.status in LOCKED_STATUSES:
            raise InvalidStateError(
                f"DTR in {dtr.status} status can no longer be edited", current_status=dtr.status
            )

        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and field != "remarks":
                continue
            if field == "type":
                value = value.value
            setattr(dtr, field, value)

        if {"time_in", "time_out", "break_hours"} & changes.keys():
            dtr.regular_hours = calculate_regular_hours(dtr.time_in, dtr.time_out, dtr.break_hours)

        self.activity.log_action("dtr_updated", f"DTR updated for {describe_dtr(dtr)}")
        self.commit()
        self.db.refresh(dtr)
        return dtr

    def delete(self, dtr_id: int):
        dtr = self.get(dtr_id)
        if dtr.status in LOCKED_STATUSES:
            raise InvalidStateError(
                f"DTR in {dtr.status} status can no longer be deleted", current_status=dtr.status
            )
        self.activity.log_action("dtr_deleted", f"DTR deleted for {describe_dtr(dtr)}")
        self.db.delete(dtr)
        self.commit()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _decide(self, dtr_id: int, new_status: DTRStatus, verb: str) -> DTR:
        dtr = self.get(dtr_id)
        if dtr.status != DTRStatus.PENDING.value:
            raise InvalidStateError(
                f"DTR must be in Pending status to {verb}", current_status=dtr.status
            )

        dtr.status = new_status.value
        dtr.approved_by = self.actor_id
        dtr.approval_date = date.today()

        self.activity.log_action(f"dtr_{new_status.value.lower()}", f"DTR {new_status.value.lower()} for {describe_dtr(dtr)}")
        self.commit()
        self.db.refresh(dtr)
        return dtr

    def approve(self, dtr_id: int) -> DTR:
        return self._decide(dtr_id, DTRStatus.APPROVED, "approve")

    def reject(self, dtr_id: int) -> DTR:
        return self._decide(dtr_id, DTRStatus.REJECTED, "reject")

    def request_revision(self, dtr_id: int, remarks: Optional[str] = None) -> DTR:
        """Send a DTR back to Pending with a revision note appended to its remarks."""
        dtr = self.get(dtr_id)
        if dtr.status not in (DTRStatus.REJECTED.value, DTRStatus.PENDING.value):
            raise InvalidStateError(
                "Revision can only be requested for Rejected or Pending DTRs", current_status=dtr.status
            )

        note = remarks or "Needs revision"
        dtr.remarks = f"{dtr.remarks} | {note}" if dtr.remarks else note
        dtr.status = DTRStatus.PENDING.value
        dtr.approved_by = None
        dtr.approval_date = None

        self.activity.log_action(
            "dtr_revision_requested", f"Revision requested for {describe_dtr(dtr)}"
        )
        self.commit()
        self.db.refresh(dtr)
        return dtr

    # ------------------------------------------------------------------
    # Bulk
    # ------------------------------------------------------------------
    def bulk_approve(self, dtr_ids: List[int]) -> Dict[str, Any]:
        outcome = run_bulk(self.db, dtr_ids, self.approve)
        self._log_batch("bulk_dtr_approved", f"{outcome['processed']} DTRs approved in bulk")
        return outcome

    def bulk_reject(self, dtr_ids: List[int]) -> Dict[str, Any]:
        outcome = run_bulk(self.db, dtr_ids, self.reject)
        self._log_batch("bulk_dtr_rejected", f"{outcome['processed']} DTRs rejected in bulk")
        return outcome

    def _log_batch(self, action: str, description: str):
        self.activity.log_action(action, description)
        try:
            self.commit()
        except Exception as e:
            self.log_error(f"Failed to record batch activity: {e}")
