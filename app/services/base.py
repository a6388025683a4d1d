import logging
from typing import Optional
from sqlalchemy.orm import Session

from app.models.user import User


class BaseService:
    """
    Common plumbing for domain services: the request-scoped session,
    the acting user and a per-service logger.
    """

    def __init__(self, db: Session, actor: Optional[User] = None):
        self.db = db
        self.actor = actor
        self._logger = logging.getLogger(self.__class__.__module__)

    @property
    def actor_id(self) -> Optional[int]:
        return self.actor.id if self.actor else None

    def commit(self):
        """Commit the unit of work, rolling back on failure."""
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def log_info(self, message: str, **extra):
        self._logger.info(message, extra=extra or None)

    def log_error(self, message: str, **extra):
        self._logger.error(message, extra=extra or None, exc_info=True)
