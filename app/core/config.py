import os
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

class PayrollSettings(BaseModel):
    # Per-DTR immediate processing
    dtr_overtime_multiplier: float = float(os.getenv("PAYROLL_DTR_OT_MULTIPLIER", "1.5"))
    single_deduction_rate: float = float(os.getenv("PAYROLL_SINGLE_DEDUCTION_RATE", "0.10"))
    bulk_deduction_rate: float = float(os.getenv("PAYROLL_BULK_DEDUCTION_RATE", "0.15"))

    # Period-based generation
    period_overtime_multiplier: float = float(os.getenv("PAYROLL_PERIOD_OT_MULTIPLIER", "1.25"))
    period_tax_rate: float = float(os.getenv("PAYROLL_PERIOD_TAX_RATE", "0.10"))
    hours_per_day: float = 8.0

    default_break_hours: float = 1.0

class Config(BaseModel):
    app_name: str = "WorkTrack Payroll"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./worktrack.db")

    # Auth
    secret_key: str = os.getenv("SECRET_KEY", "dev-only-insecure-key-DO-NOT-USE-IN-PROD")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24  # 24 hours
    login_rate_limit: str = os.getenv("LOGIN_RATE_LIMIT", "10/minute")
    rate_limit_enabled: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"

    # Bootstrap admin, created on first startup when no users exist
    default_admin_username: str = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
    default_admin_email: str = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@worktrack.com")
    default_admin_password: Optional[str] = os.getenv("DEFAULT_ADMIN_PASSWORD")

    payroll: PayrollSettings = PayrollSettings()

    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins loaded from env
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://localhost:5173,"
                "http://127.0.0.1:3000,http://127.0.0.1:5173",
            ).split(",")
            if o.strip()
        ]
    )

settings = Config()

# --- Startup Validation for Production ---
_logger = logging.getLogger(__name__)
if settings.environment not in ("development", "testing"):
    if "dev-only" in settings.secret_key or "change-it" in settings.secret_key:
        raise RuntimeError(
            "FATAL: SECRET_KEY must be set for non-development environments. "
            "Set it as an environment variable."
        )
else:
    if "dev-only" in settings.secret_key:
        _logger.warning("Using insecure default SECRET_KEY, only acceptable in development.")
