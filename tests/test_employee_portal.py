import pytest
from datetime import date, timedelta
from app.models.activity import Activity
from app.models.dtr import DTRStatus
from app.models.payroll import Payroll

def test_profile(client, staff_user, auth_headers, employee):
    response = client.get("/api/employee/profile", headers=auth_headers(staff_user))
    assert response.status_code == 200
    assert response.json()["id"] == employee.id

def test_unlinked_user_gets_404(client, manager_user, auth_headers):
    response = client.get("/api/employee/profile", headers=auth_headers(manager_user))
    assert response.status_code == 404

def test_submit_own_dtr_is_pending(client, staff_user, auth_headers, employee):
    response = client.post("/api/employee/dtrs", headers=auth_headers(staff_user), json={
        "date": "2024-03-04",
        "time_in": "09:00",
        "time_out": "18:30",
        "break_hours": 1,
        "status": "Approved",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["employee_id"] == employee.id
    assert data["status"] == "Pending"
    assert data["regular_hours"] == 8.5

def test_own_dtrs_only(client, staff_user, auth_headers, employee, make_employee, make_dtr):
    make_dtr(employee, date(2024, 3, 4))
    make_dtr(make_employee(), date(2024, 3, 4))
    response = client.get("/api/employee/dtrs", headers=auth_headers(staff_user))
    assert [d["employee_id"] for d in response.json()] == [employee.id]

def test_current_week_filter(client, staff_user, auth_headers, employee, make_dtr):
    today = date.today()
    monday = today - timedelta(days=today.weekday())
    make_dtr(employee, monday)
    make_dtr(employee, monday - timedelta(days=1))
    response = client.get("/api/employee/dtrs", headers=auth_headers(staff_user), params={"week": "current"})
    assert [d["date"] for d in response.json()] == [monday.isoformat()]

def test_recent_filter(client, staff_user, auth_headers, employee, make_dtr):
    for day in range(1, 6):
        make_dtr(employee, date(2024, 3, day))
    response = client.get("/api/employee/dtrs", headers=auth_headers(staff_user), params={"recent": 2})
    assert [d["date"] for d in response.json()] == ["2024-03-05", "2024-03-04"]

def test_payslips(client, staff_user, auth_headers, employee, db_session):
    for start, end in [(date(2024, 3, 1), date(2024, 3, 15)), (date(2024, 3, 16), date(2024, 3, 31))]:
        db_session.add(Payroll(
            employee_id=employee.id, pay_period_start=start, pay_period_end=end,
            gross_pay=10000, total_deductions=1000, net_pay=9000,
        ))
    db_session.commit()

    headers = auth_headers(staff_user)
    assert len(client.get("/api/employee/payslips", headers=headers).json()) == 2
    latest = client.get("/api/employee/payslip-latest", headers=headers).json()
    assert latest["pay_period_start"] == "2024-03-16"

def test_no_payslip_yet(client, staff_user, auth_headers):
    response = client.get("/api/employee/payslip-latest", headers=auth_headers(staff_user))
    assert response.status_code == 404

def test_notifications_are_own_activities(client, staff_user, admin_user, auth_headers, db_session):
    db_session.add_all([
        Activity(user_id=staff_user.id, action="dtr_submitted", description="mine"),
        Activity(user_id=admin_user.id, action="dtr_approved", description="not mine"),
    ])
    db_session.commit()
    response = client.get("/api/employee/notifications", headers=auth_headers(staff_user))
    assert [a["description"] for a in response.json()] == ["mine"]
