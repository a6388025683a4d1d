import pytest
from datetime import timedelta
from app.services import auth as auth_service
from app.models.user import User, UserRole

def test_password_hashing():
    """Test that password hashing and verification works correctly."""
    password = "MySecurePassword123!"
    hashed = auth_service.get_password_hash(password)
    assert hashed != password
    assert auth_service.verify_password(password, hashed)
    assert not auth_service.verify_password("WrongPassword", hashed)

def test_verify_password_with_malformed_hash():
    assert not auth_service.verify_password("anything", "not-a-bcrypt-hash")

def test_create_user(db_session):
    """Test creating a new user directly on the model."""
    password = "Password123!"
    user = User(
        username="newuser",
        email="newuser@worktrack.com",
        hashed_password=auth_service.get_password_hash(password),
        first_name="New",
        last_name="User",
        role=UserRole.STAFF,
    )
    db_session.add(user)
    db_session.commit()

    saved_user = db_session.query(User).filter(User.username == "newuser").first()
    assert saved_user is not None
    assert saved_user.role == UserRole.STAFF
    assert saved_user.is_active
    assert auth_service.verify_password(password, saved_user.hashed_password)

def test_authenticate_by_username_or_email(db_session, admin_user):
    assert auth_service.authenticate_user(db_session, "admin", "AdminPassword123!").id == admin_user.id
    assert auth_service.authenticate_user(db_session, "admin@worktrack.com", "AdminPassword123!").id == admin_user.id
    assert auth_service.authenticate_user(db_session, "admin", "wrong") is None
    assert auth_service.authenticate_user(db_session, "ghost", "AdminPassword123!") is None

def test_token_round_trip(admin_user):
    token = auth_service.token_for_user(admin_user)
    payload = auth_service.decode_access_token(token)
    assert payload["sub"] == "admin"
    assert payload["role"] == "Admin"
    assert payload["type"] == "access"

def test_expired_token_is_flagged():
    token = auth_service.create_access_token({"sub": "admin"}, expires_delta=timedelta(minutes=-5))
    assert auth_service.decode_access_token(token) == {"error": "TOKEN_EXPIRED"}

def test_garbage_token_is_rejected():
    assert auth_service.decode_access_token("not.a.token") is None
