"""Setting model for persistent minigame and scoring configuration."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.extensions import db


class AppSetting(db.Model):  # type: ignore[name-defined]
    """Key-value setting storage.

    Values are stored as text and typed when read back (see
    ``app.utils.setting_values``). Rows are created on first write and
    never deleted.
    """

    __tablename__ = "app_settings"

    setting_key: Mapped[str] = mapped_column(String(100), primary_key=True)
    setting_value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<AppSetting key={self.setting_key}>"
