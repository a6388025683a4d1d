from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
import logging
from app.core.config import settings
from app.core.exceptions import AccessDeniedError, AuthenticationError
from app.core.limiter import limiter
from app.database import get_db
from app.models.employee import Employee
from app.models.user import User
from app.routers.auth_deps import get_current_user, require_admin
from app.services import auth as auth_service
from app.services.activity import ActivityService
from app.schemas.auth import LoginRequest, RegisterRequest, Token, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)

@router.post("/login", response_model=Token)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, login_data: LoginRequest, db: Session = Depends(get_db)):
    # JSON body instead of form-data for frontend compatibility
    user = auth_service.authenticate_user(db, login_data.username, login_data.password)
    if not user:
        logger.info(f"Failed login for {login_data.username}")
        raise AuthenticationError("Incorrect username or password")
    if not user.is_active:
        raise AccessDeniedError("User is inactive")

    ActivityService.log(db, user, "login", f"{user.username} signed in")
    db.commit()

    return {
        "access_token": auth_service.token_for_user(user),
        "token_type": "bearer",
        "user": user,
    }

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    """Create a user account. Admin only."""
    existing = db.query(User).filter(
        (User.username == data.username) | (User.email == data.email)
    ).first()
    if existing:
        raise HTTPException(status_code=400, detail="Username or email already registered")

    if data.employee_id is not None:
        if not db.query(Employee).filter(Employee.id == data.employee_id).first():
            raise HTTPException(status_code=404, detail="Employee not found")
        if db.query(User).filter(User.employee_id == data.employee_id).first():
            raise HTTPException(status_code=400, detail="Employee already has a user account")

    user = User(
        **data.model_dump(exclude={"password"}),
        hashed_password=auth_service.get_password_hash(data.password),
    )
    db.add(user)
    ActivityService.log(db, current_user, "user_registered", f"User registered: {data.username}")
    db.commit()
    db.refresh(user)
    logger.info(f"User {user.username} registered by {current_user.username}")
    return user

@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user
