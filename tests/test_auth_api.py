import pytest
from fastapi import status
from app.models.user import User, UserRole

def test_login_success(client, admin_user):
    """Test successful login with valid credentials."""
    response = client.post("/api/auth/login", json={"username": "admin", "password": "AdminPassword123!"})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"
    assert data["user"]["role"] == "Admin"

def test_login_invalid_credentials(client, admin_user):
    """Test login failure with wrong password."""
    response = client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["errors"][0]["code"] == "AUTH_FAILED"

def test_login_missing_field_is_400(client):
    response = client.post("/api/auth/login", json={"username": "admin"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["success"] is False

def test_me_requires_token(client):
    response = client.get("/api/auth/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

def test_me_rejects_bad_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

def test_me_returns_current_user(client, staff_user, auth_headers, employee):
    response = client.get("/api/auth/me", headers=auth_headers(staff_user))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["username"] == "staff"
    assert data["employee_id"] == employee.id

def test_inactive_user_is_forbidden(client, staff_user, auth_headers, db_session):
    staff_user.status = "Inactive"
    db_session.commit()
    response = client.get("/api/auth/me", headers=auth_headers(staff_user))
    assert response.status_code == status.HTTP_403_FORBIDDEN

def test_admin_registers_user_linked_to_employee(client, admin_headers, employee, db_session):
    response = client.post("/api/auth/register", headers=admin_headers, json={
        "username": "jdelacruz",
        "email": "jdelacruz@worktrack.com",
        "first_name": "Juan",
        "last_name": "Dela Cruz",
        "password": "Sup3rSecret!",
        "role": "Staff",
        "employee_id": employee.id,
    })
    assert response.status_code == status.HTTP_201_CREATED
    user = db_session.query(User).filter(User.username == "jdelacruz").first()
    assert user.employee_id == employee.id
    assert user.role == UserRole.STAFF

def test_register_rejects_duplicate_username(client, admin_headers, admin_user):
    response = client.post("/api/auth/register", headers=admin_headers, json={
        "username": "admin",
        "email": "other@worktrack.com",
        "first_name": "Other",
        "last_name": "Admin",
        "password": "Sup3rSecret!",
    })
    assert response.status_code == status.HTTP_400_BAD_REQUEST

def test_register_is_admin_only(client, manager_user, auth_headers):
    response = client.post("/api/auth/register", headers=auth_headers(manager_user), json={
        "username": "someone",
        "email": "someone@worktrack.com",
        "first_name": "Some",
        "last_name": "One",
        "password": "Sup3rSecret!",
    })
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["errors"][0]["code"] == "PERMISSION_DENIED"
