"""Activity log service for the admin audit trail."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.activity_log import ActivityLog

logger = logging.getLogger(__name__)


class ActivityService:
    """Records admin actions for the dashboard timeline.

    Recording is best-effort: each entry is written in a savepoint, and a
    failure is logged and swallowed so it never fails the action it
    describes.
    """

    def __init__(self, db: Session) -> None:
        """Initialize activity service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def log(self, activity_type: str, description: str, user_id: int | None = None) -> None:
        """Record an activity.

        Args:
            activity_type: Short machine-readable type (e.g. ``user_created``)
            description: Human-readable description
            user_id: ID of the admin who performed the action, if known
        """
        try:
            with self.db.begin_nested():
                self.db.add(
                    ActivityLog(
                        activity_type=activity_type,
                        description=description,
                        user_id=user_id,
                    )
                )
        except SQLAlchemyError as e:
            logger.warning("Activity logging failed for %s: %s", activity_type, e)

    def get_recent(self, limit: int = 10) -> list[ActivityLog]:
        """Return the most recent activities, newest first."""
        stmt = (
            select(ActivityLog)
            .order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
            .limit(limit)
        )
        return list(self.db.scalars(stmt))
