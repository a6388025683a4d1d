from typing import List, Optional

from app.models.activity import Activity
from app.services.base import BaseService


class ActivityService(BaseService):
    def log_action(self, action: str, description: str, user_id: Optional[int] = None) -> Optional[Activity]:
        """
        Append an activity entry to the current unit of work.

        The action's own pending changes are flushed first and their errors
        propagate. The entry is then written inside a savepoint of the same
        transaction, so it commits together with the action. A failed entry
        rolls back only its savepoint, is logged, and never reaches the caller.
        """
        entry = Activity(
            user_id=user_id if user_id is not None else self.actor_id,
            action=action,
            description=description,
        )
        self.db.flush()
        try:
            with self.db.begin_nested():
                self.db.add(entry)
                self.db.flush()
            return entry
        except Exception as e:
            self._logger.error(f"Failed to log activity: {e}", exc_info=True)
            return None

    def list_recent(self, limit: int = 50, user_id: Optional[int] = None) -> List[Activity]:
        query = self.db.query(Activity)
        if user_id is not None:
            query = query.filter(Activity.user_id == user_id)
        return query.order_by(Activity.timestamp.desc(), Activity.id.desc()).limit(limit).all()

    def mark_all_read(self) -> int:
        updated = self.db.query(Activity).filter(Activity.read.is_(False)).update(
            {Activity.read: True}, synchronize_session=False
        )
        self.commit()
        return updated

    # Static wrapper mirroring the service call for one-off logging
    @staticmethod
    def log(db, actor, action: str, description: str):
        return ActivityService(db, actor).log_action(action, description)
