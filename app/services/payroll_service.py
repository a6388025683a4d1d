"""
Payroll Service Layer

This module provides the business logic layer for payroll operations.
It encapsulates all database access, keeping the routers focused on HTTP
request/response handling.

Two computation paths coexist:

- Per-DTR processing: hours x salary, overtime at 1.5x, flat deduction of
  10% (single) or 15% (bulk) of gross.
- Period generation: Regular employees are paid a pro-rated monthly salary,
  Contract / Project-based employees are paid hourly; overtime at 1.25x and
  a flat 10% tax.

Rates live in settings.payroll.
"""
import calendar
from datetime import date
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.core.exceptions import InvalidStateError, NotFoundError
from app.models.company import RecordStatus
from app.models.dtr import DTR, DTRStatus
from app.models.employee import Employee, EmployeeType
from app.models.payroll import Payroll, PayrollSource, PayrollStatus
from app.schemas.payroll import PayrollCreate
from app.services.activity import ActivityService
from app.services.base import BaseService
from app.services.bulk import run_bulk
from app.services.dtr_service import describe_dtr


def _money(value: float) -> float:
    return round(value, 2)


def _tax_line(gross: float, rate: float) -> Dict[str, Any]:
    return {
        "type": "Tax",
        "amount": _money(gross * rate),
        "description": f"Withholding tax ({rate * 100:g}%)",
    }


def calculate_dtr_pay(
    regular_hours: float,
    overtime_hours: float,
    salary: float,
    deduction_rate: float,
) -> Dict[str, Any]:
    """
    Pay for a single DTR with `salary` read as an hourly rate.
    """
    regular_pay = regular_hours * salary
    overtime_pay = overtime_hours * salary * settings.payroll.dtr_overtime_multiplier
    gross_pay = _money(regular_pay + overtime_pay)

    deductions = [_tax_line(gross_pay, deduction_rate)]
    total_deductions = _money(sum(d["amount"] for d in deductions))

    return {
        "regular_pay": _money(regular_pay),
        "overtime_pay": _money(overtime_pay),
        "gross_pay": gross_pay,
        "deductions": deductions,
        "total_deductions": total_deductions,
        "net_pay": _money(gross_pay - total_deductions),
    }


def calculate_period_pay(
    employee_type: str,
    salary: float,
    total_regular_hours: float,
    total_overtime_hours: float,
    period_start: date,
    period_end: date,
) -> Dict[str, Any]:
    """
    Pay for a pay period.

    Regular employees: salary is monthly and pro-rated by the number of days
    in the period over the days in the month of period_start. Overtime is
    paid at the derived hourly rate (salary / days_in_month / 8) x 1.25.

    Contract / Project-based employees: salary is an hourly rate applied to
    the period's regular hours, overtime at salary x 1.25.
    """
    cfg = settings.payroll
    days_in_month = calendar.monthrange(period_start.year, period_start.month)[1]
    period_days = (period_end - period_start).days + 1

    if employee_type == EmployeeType.REGULAR.value:
        regular_pay = salary * (period_days / days_in_month)
        hourly_rate = salary / days_in_month / cfg.hours_per_day
        overtime_pay = total_overtime_hours * hourly_rate * cfg.period_overtime_multiplier
    else:
        regular_pay = total_regular_hours * salary
        overtime_pay = total_overtime_hours * salary * cfg.period_overtime_multiplier

    gross_pay = _money(regular_pay + overtime_pay)
    deductions = [_tax_line(gross_pay, cfg.period_tax_rate)]
    total_deductions = _money(sum(d["amount"] for d in deductions))

    return {
        "regular_pay": _money(regular_pay),
        "overtime_pay": _money(overtime_pay),
        "gross_pay": gross_pay,
        "deductions": deductions,
        "total_deductions": total_deductions,
        "net_pay": _money(gross_pay - total_deductions),
        "period_days": period_days,
        "days_in_month": days_in_month,
    }


class PayrollService(BaseService):
    """Domain service for payroll records and their effect on DTRs."""

    def __init__(self, db, actor=None):
        super().__init__(db, actor)
        self.activity = ActivityService(db, actor)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, payroll_id: int) -> Payroll:
        payroll = self.db.query(Payroll).filter(Payroll.id == payroll_id).first()
        if not payroll:
            raise NotFoundError("Payroll", payroll_id)
        return payroll

    def list(self, employee_id: Optional[int] = None, status: Optional[str] = None) -> List[Payroll]:
        query = self.db.query(Payroll)
        if employee_id is not None:
            query = query.filter(Payroll.employee_id == employee_id)
        if status:
            query = query.filter(Payroll.status == status)
        return query.order_by(Payroll.pay_period_end.desc(), Payroll.id.desc()).all()

    def latest_for_employee(self, employee_id: int) -> Optional[Payroll]:
        return (
            self.db.query(Payroll)
            .filter(Payroll.employee_id == employee_id)
            .order_by(Payroll.pay_period_end.desc(), Payroll.id.desc())
            .first()
        )

    def find_existing(self, employee_id: int, period_start: date, period_end: date) -> Optional[Payroll]:
        return self.db.query(Payroll).filter(
            Payroll.employee_id == employee_id,
            Payroll.pay_period_start == period_start,
            Payroll.pay_period_end == period_end,
        ).first()

    def _employee(self, employee_id: int) -> Employee:
        employee = self.db.query(Employee).filter(Employee.id == employee_id).first()
        if not employee:
            raise NotFoundError("Employee", employee_id)
        return employee

    # ------------------------------------------------------------------
    # Manual entry
    # ------------------------------------------------------------------
    def create(self, data: PayrollCreate) -> Payroll:
        employee = self._employee(data.employee_id)
        payroll = Payroll(
            **data.model_dump(exclude={"status"}),
            status=data.status.value,
            regular_pay=0.0,
            overtime_pay=0.0,
            deductions=[],
            source=PayrollSource.PERIOD.value,
            processed_by=self.actor_id,
        )
        self.db.add(payroll)
        self.activity.log_action(
            "payroll_created",
            f"Payroll created for {employee.full_name} - "
            f"{data.pay_period_start.isoformat()} to {data.pay_period_end.isoformat()}",
        )
        self.commit()
        self.db.refresh(payroll)
        return payroll

    # ------------------------------------------------------------------
    # Per-DTR processing
    # ------------------------------------------------------------------
    def process_dtr(self, dtr_id: int, bulk: bool = False) -> Payroll:
        """
        Create a payroll from one Approved DTR and move the DTR to Processing.

        The single path leaves the payroll Pending; the bulk path records it
        as Processed straight away.
        """
        dtr = self.db.query(DTR).filter(DTR.id == dtr_id).first()
        if not dtr:
            raise NotFoundError("DTR", dtr_id)
        if dtr.status != DTRStatus.APPROVED.value:
            raise InvalidStateError(
                "DTR must be in Approved status to process payroll", current_status=dtr.status
            )
        employee = self._employee(dtr.employee_id)

        rate = settings.payroll.bulk_deduction_rate if bulk else settings.payroll.single_deduction_rate
        pay = calculate_dtr_pay(dtr.regular_hours, dtr.overtime_hours or 0.0, employee.salary, rate)

        payroll = Payroll(
            employee_id=employee.id,
            pay_period_start=dtr.date,
            pay_period_end=dtr.date,
            source=PayrollSource.DTR.value,
            total_regular_hours=dtr.regular_hours,
            total_overtime_hours=dtr.overtime_hours or 0.0,
            regular_pay=pay["regular_pay"],
            overtime_pay=pay["overtime_pay"],
            gross_pay=pay["gross_pay"],
            deductions=pay["deductions"],
            total_deductions=pay["total_deductions"],
            net_pay=pay["net_pay"],
            status=(PayrollStatus.PROCESSED if bulk else PayrollStatus.PENDING).value,
            processed_by=self.actor_id,
            processed_date=date.today(),
        )
        self.db.add(payroll)

        dtr.status = DTRStatus.PROCESSING.value
        dtr.payroll = payroll

        self.activity.log_action("payroll_processed", f"Payroll processed for {describe_dtr(dtr)}")
        self.commit()
        self.db.refresh(payroll)
        return payroll

    def bulk_process_dtrs(self, dtr_ids: List[int]) -> Dict[str, Any]:
        outcome = run_bulk(self.db, dtr_ids, lambda dtr_id: self.process_dtr(dtr_id, bulk=True))
        self.activity.log_action(
            "bulk_payroll_processed", f"{outcome['processed']} payrolls processed in bulk"
        )
        try:
            self.commit()
        except Exception as e:
            self.log_error(f"Failed to record batch activity: {e}")
        return outcome

    # ------------------------------------------------------------------
    # Period generation
    # ------------------------------------------------------------------
    def generate(self, period_start: date, period_end: date) -> Dict[str, Any]:
        """
        Generate payrolls for every Active employee with Approved DTRs in the
        period. Employees that already have a payroll for exactly this period
        are skipped.
        """
        employees = (
            self.db.query(Employee)
            .filter(Employee.status == RecordStatus.ACTIVE.value)
            .order_by(Employee.id)
            .all()
        )

        payrolls: List[Payroll] = []
        skipped: List[Dict[str, Any]] = []

        for employee in employees:
            if self.find_existing(employee.id, period_start, period_end):
                skipped.append({"employee_id": employee.id, "reason": "Payroll already exists for this period"})
                continue

            dtrs = self.db.query(DTR).filter(
                DTR.employee_id == employee.id,
                DTR.status == DTRStatus.APPROVED.value,
                DTR.date >= period_start,
                DTR.date <= period_end,
            ).all()
            if not dtrs:
                skipped.append({"employee_id": employee.id, "reason": "No approved DTRs in period"})
                continue

            try:
                payrolls.append(self._generate_for(employee, dtrs, period_start, period_end))
            except Exception as e:
                self.db.rollback()
                self.log_error(f"Payroll generation failed for employee {employee.id}: {e}")
                skipped.append({"employee_id": employee.id, "reason": "Failed to generate payroll"})

        self.log_info(
            f"Generated {len(payrolls)} payrolls for {period_start} to {period_end}",
            generated=len(payrolls),
            skipped=len(skipped),
        )
        return {
            "message": f"{len(payrolls)} payrolls generated successfully",
            "payrolls": payrolls,
            "skipped": skipped,
        }

    def _generate_for(self, employee: Employee, dtrs: List[DTR], period_start: date, period_end: date) -> Payroll:
        total_regular = sum(d.regular_hours or 0.0 for d in dtrs)
        total_overtime = sum(d.overtime_hours or 0.0 for d in dtrs)
        pay = calculate_period_pay(
            employee.employee_type, employee.salary, total_regular, total_overtime, period_start, period_end
        )

        payroll = Payroll(
            employee_id=employee.id,
            pay_period_start=period_start,
            pay_period_end=period_end,
            source=PayrollSource.PERIOD.value,
            total_regular_hours=round(total_regular, 2),
            total_overtime_hours=round(total_overtime, 2),
            regular_pay=pay["regular_pay"],
            overtime_pay=pay["overtime_pay"],
            gross_pay=pay["gross_pay"],
            deductions=pay["deductions"],
            total_deductions=pay["total_deductions"],
            net_pay=pay["net_pay"],
            status=PayrollStatus.PENDING.value,
            processed_by=self.actor_id,
            processed_date=date.today(),
        )
        self.db.add(payroll)

        for dtr in dtrs:
            dtr.status = DTRStatus.PROCESSING.value
            dtr.payroll = payroll

        self.activity.log_action(
            "payroll_generated",
            f"Payroll generated for {employee.full_name} - {period_start.isoformat()} to {period_end.isoformat()}",
        )
        self.commit()
        self.db.refresh(payroll)
        return payroll

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _dtrs_in_period(self, payroll: Payroll, status: Optional[str] = None) -> List[DTR]:
        query = self.db.query(DTR).filter(
            DTR.employee_id == payroll.employee_id,
            DTR.date >= payroll.pay_period_start,
            DTR.date <= payroll.pay_period_end,
        )
        if status:
            query = query.filter(DTR.status == status)
        return query.all()

    def mark_processed(self, payroll_id: int) -> Payroll:
        payroll = self.get(payroll_id)
        if payroll.status != PayrollStatus.PENDING.value:
            raise InvalidStateError(
                "Payroll must be in Pending status to process", current_status=payroll.status
            )

        payroll.status = PayrollStatus.PROCESSED.value
        payroll.processed_by = self.actor_id
        payroll.processed_date = date.today()

        # Only DTRs already handed to payroll move on
        for dtr in self._dtrs_in_period(payroll, DTRStatus.PROCESSING.value):
            dtr.status = DTRStatus.PROCESSED.value

        self.activity.log_action(
            "payroll_marked_processed",
            f"Payroll processed for {self._period_label(payroll)}",
        )
        self.commit()
        self.db.refresh(payroll)
        return payroll

    def mark_paid(self, payroll_id: int) -> Payroll:
        payroll = self.get(payroll_id)
        if payroll.status == PayrollStatus.PAID.value:
            raise InvalidStateError("Payroll is already Paid", current_status=payroll.status)

        today = date.today()
        payroll.status = PayrollStatus.PAID.value
        payroll.payment_date = today
        if payroll.processed_date is None:
            payroll.processed_by = self.actor_id
            payroll.processed_date = today

        for dtr in self._dtrs_in_period(payroll):
            dtr.status = DTRStatus.PAID.value

        self.activity.log_action("payroll_paid", f"Payroll paid for {self._period_label(payroll)}")
        self.commit()
        self.db.refresh(payroll)
        return payroll

    @staticmethod
    def _period_label(payroll: Payroll) -> str:
        employee = payroll.employee
        name = employee.full_name if employee else f"Employee #{payroll.employee_id}"
        return f"{name} - {payroll.pay_period_start.isoformat()} to {payroll.pay_period_end.isoformat()}"
