import pytest
from sqlalchemy import event
from datetime import date
from app.models.activity import Activity
from app.models.dtr import DTR, DTRStatus
from app.models.employee import EmployeeType
from app.models.payroll import Payroll

def _assert_counts(data):
    assert data["success"] is True
    assert data["processed"] + len(data["errors"]) == data["total"]
    assert len(data["results"]) == data["processed"]

def test_bulk_approve_mixed_batch(client, admin_headers, make_dtr, employee):
    pending = make_dtr(employee, date(2024, 3, 4))
    approved = make_dtr(employee, date(2024, 3, 5), status=DTRStatus.APPROVED)

    response = client.post(
        "/api/dtrs/bulk/approve", headers=admin_headers, json={"dtrIds": [pending.id, approved.id, 9999]}
    )
    assert response.status_code == 200
    data = response.json()
    _assert_counts(data)
    assert data["total"] == 3
    assert data["processed"] == 1
    assert data["results"][0]["id"] == pending.id
    assert data["results"][0]["status"] == "Approved"
    errors = {e["id"]: e["message"] for e in data["errors"]}
    assert errors[approved.id] == "DTR must be in Pending status to approve"
    assert errors[9999] == "DTR not found"

def test_bulk_reject_accepts_snake_case(client, admin_headers, make_dtr, employee):
    dtrs = [make_dtr(employee, date(2024, 3, d)) for d in (4, 5)]
    response = client.post(
        "/api/dtrs/bulk/reject", headers=admin_headers, json={"dtr_ids": [d.id for d in dtrs]}
    )
    data = response.json()
    _assert_counts(data)
    assert data["processed"] == 2
    assert {r["status"] for r in data["results"]} == {"Rejected"}

def test_bulk_empty_list_is_400(client, admin_headers):
    response = client.post("/api/dtrs/bulk/approve", headers=admin_headers, json={"dtrIds": []})
    assert response.status_code == 400

def test_bulk_writes_summary_activity(client, admin_headers, make_dtr, employee, db_session):
    dtr = make_dtr(employee, date(2024, 3, 4))
    client.post("/api/dtrs/bulk/approve", headers=admin_headers, json={"dtrIds": [dtr.id]})
    summary = db_session.query(Activity).filter(Activity.action == "bulk_dtr_approved").one()
    assert summary.description == "1 DTRs approved in bulk"

def test_bulk_process_payroll(client, admin_headers, make_dtr, make_employee, db_session):
    contractor = make_employee(employee_type=EmployeeType.CONTRACT, salary=100.0)
    approved = make_dtr(contractor, date(2024, 3, 4), status=DTRStatus.APPROVED, overtime_hours=2)
    pending = make_dtr(contractor, date(2024, 3, 5))

    response = client.post(
        "/api/dtrs/bulk/process-payroll", headers=admin_headers, json={"dtrIds": [approved.id, pending.id]}
    )
    assert response.status_code == 200
    data = response.json()
    _assert_counts(data)
    assert data["processed"] == 1
    assert data["errors"] == [
        {"id": pending.id, "message": "DTR must be in Approved status to process payroll"}
    ]

    payroll = data["results"][0]
    # 8h x 100 + 2h x 100 x 1.5, less 15%
    assert payroll["gross_pay"] == 1100.0
    assert payroll["total_deductions"] == 165.0
    assert payroll["net_pay"] == 935.0
    assert payroll["status"] == "Processed"

    db_session.refresh(approved)
    db_session.refresh(pending)
    assert approved.status == DTRStatus.PROCESSING.value
    assert approved.payroll_id == payroll["id"]
    assert pending.status == DTRStatus.PENDING.value
    assert db_session.query(Payroll).count() == 1

def test_bulk_requires_approver(client, staff_user, auth_headers, make_dtr, employee):
    dtr = make_dtr(employee, date(2024, 3, 4))
    response = client.post(
        "/api/dtrs/bulk/approve", headers=auth_headers(staff_user), json={"dtrIds": [dtr.id]}
    )
    assert response.status_code == 403

def test_bulk_unexpected_error_is_isolated(client, admin_headers, make_dtr, employee, db_session):
    first, broken, last = (make_dtr(employee, date(2024, 3, d)) for d in (4, 5, 6))
    broken_id = broken.id

    def fail_one_update(mapper, connection, target):
        if target.id == broken_id:
            raise RuntimeError("disk I/O error")

    event.listen(DTR, "before_update", fail_one_update)
    try:
        response = client.post(
            "/api/dtrs/bulk/approve", headers=admin_headers, json={"dtrIds": [first.id, broken_id, last.id]}
        )
    finally:
        event.remove(DTR, "before_update", fail_one_update)

    assert response.status_code == 200
    data = response.json()
    _assert_counts(data)
    assert data["total"] == 3
    assert data["processed"] == 2
    assert data["errors"] == [{"id": broken_id, "message": "Failed to process"}]
    assert [r["id"] for r in data["results"]] == [first.id, last.id]

    for dtr in (first, broken, last):
        db_session.refresh(dtr)
    assert first.status == DTRStatus.APPROVED.value
    assert broken.status == DTRStatus.PENDING.value
    assert last.status == DTRStatus.APPROVED.value
