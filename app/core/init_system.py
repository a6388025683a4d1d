import logging
import secrets
from app.core.config import settings
from app.database import SessionLocal
from app.models.user import User, UserRole
from app.services import auth as auth_service

logger = logging.getLogger(__name__)

def init_system_data():
    """
    Checks if the system needs initialization.
    If no user exists yet, creates the default admin account.
    """
    db = SessionLocal()
    try:
        user_count = db.query(User).count()
        if user_count > 0:
            logger.info(f"System initialization check: {user_count} user(s) found.")
            return

        logger.info("Running startup initialization...")
        password = settings.default_admin_password
        if not password:
            password = secrets.token_urlsafe(12)
            logger.warning(
                f"DEFAULT_ADMIN_PASSWORD not set, generated one-time admin password: {password}"
            )

        admin_user = User(
            username=settings.default_admin_username,
            email=settings.default_admin_email,
            hashed_password=auth_service.get_password_hash(password),
            first_name="System",
            last_name="Administrator",
            role=UserRole.ADMIN,
        )
        db.add(admin_user)
        db.commit()
        logger.info(f"Created default admin: {settings.default_admin_username} (change the password immediately)")

    except Exception as e:
        db.rollback()
        logger.error(f"Error during system initialization check: {str(e)}", exc_info=True)
    finally:
        db.close()
