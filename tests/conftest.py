import pytest
import os
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from app.database import Base, enable_sqlite_savepoints, get_db
from app.main import app
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = enable_sqlite_savepoints(create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
))
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_PASSWORD = "AdminPassword123!"

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    # Session commits and rollbacks stay inside a savepoint of the test transaction
    session = TestingSessionLocal(bind=connection, join_transaction_mode="create_savepoint")

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def company(db_session):
    from app.models.company import Company
    company = Company(
        name="Acme Staffing",
        address="12 Rizal Ave, Makati",
        contact_person="Maria Santos",
        contact_email="maria@acme-staffing.com",
        contact_phone="+63 917 000 0000",
    )
    db_session.add(company)
    db_session.commit()
    return company

@pytest.fixture(scope="function")
def make_employee(db_session, company):
    """Factory for employees; Regular with a 20000 monthly salary by default."""
    from app.models.employee import Employee, EmployeeType
    counter = {"n": 0}

    def _make_employee(employee_type=EmployeeType.REGULAR, salary=20000.0, **overrides):
        counter["n"] += 1
        fields = dict(
            first_name="Juan",
            last_name=f"Dela Cruz {counter['n']}",
            email=f"juan{counter['n']}@worktrack.com",
            phone="09170000000",
            position="Technician",
            department="Operations",
            employee_type=employee_type.value,
            date_hired=date(2023, 1, 9),
            salary=salary,
            company_id=company.id,
        )
        fields.update(overrides)
        employee = Employee(**fields)
        db_session.add(employee)
        db_session.commit()
        return employee
    return _make_employee

@pytest.fixture(scope="function")
def employee(make_employee):
    return make_employee()

@pytest.fixture(scope="function")
def make_dtr(db_session):
    """Factory for DTRs stored directly with a given status."""
    from app.models.dtr import DTR, DTRStatus
    from app.services.dtr_service import calculate_regular_hours

    def _make_dtr(employee, day, status=DTRStatus.PENDING, time_in="08:00", time_out="17:00",
                  break_hours=1.0, overtime_hours=0.0, remarks=None):
        dtr = DTR(
            employee_id=employee.id,
            date=day,
            time_in=time_in,
            time_out=time_out,
            break_hours=break_hours,
            regular_hours=calculate_regular_hours(time_in, time_out, break_hours),
            overtime_hours=overtime_hours,
            remarks=remarks,
            status=status.value,
            submission_date=day,
        )
        db_session.add(dtr)
        db_session.commit()
        return dtr
    return _make_dtr

def _make_user(db_session, username, role, employee_id=None):
    from app.models.user import User
    from app.services import auth as auth_service

    user = User(
        username=username,
        email=f"{username}@worktrack.com",
        hashed_password=auth_service.get_password_hash(ADMIN_PASSWORD),
        first_name=username.title(),
        last_name="Tester",
        role=role,
        employee_id=employee_id,
    )
    db_session.add(user)
    db_session.commit()
    return user

@pytest.fixture(scope="function")
def admin_user(db_session):
    """Create a default Admin user for tests."""
    from app.models.user import UserRole
    return _make_user(db_session, "admin", UserRole.ADMIN)

@pytest.fixture(scope="function")
def manager_user(db_session):
    from app.models.user import UserRole
    return _make_user(db_session, "manager", UserRole.MANAGER)

@pytest.fixture(scope="function")
def staff_user(db_session, employee):
    """A Staff user linked to the default employee."""
    from app.models.user import UserRole
    return _make_user(db_session, "staff", UserRole.STAFF, employee_id=employee.id)

@pytest.fixture(scope="function")
def get_token():
    """Helper fixture to create access tokens for a user."""
    from app.services.auth import token_for_user

    def _get_token(user):
        return token_for_user(user)
    return _get_token

@pytest.fixture(scope="function")
def auth_headers(get_token):
    def _auth_headers(user):
        return {"Authorization": f"Bearer {get_token(user)}"}
    return _auth_headers

@pytest.fixture(scope="function")
def admin_headers(admin_user, auth_headers):
    return auth_headers(admin_user)

@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
