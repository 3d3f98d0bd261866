"""Activity log model for the admin audit trail."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.extensions import db

if TYPE_CHECKING:
    from app.models.user import User


class ActivityLog(db.Model):  # type: ignore[name-defined]
    """One admin action shown on the dashboard timeline."""

    __tablename__ = "activity_log"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # e.g. user_created, question_updated, settings_updated, csv_import
    activity_type: Mapped[str] = mapped_column(String(50), nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Admin who performed the action, if known
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    timestamp: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), index=True
    )

    user: Mapped[User | None] = relationship("User", lazy="joined")

    def __repr__(self) -> str:
        """Return string representation of ActivityLog."""
        return f"<ActivityLog(id={self.id}, activity_type='{self.activity_type}')>"
