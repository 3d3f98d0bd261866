"""User model for assessed employees and admin accounts."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.extensions import db

if TYPE_CHECKING:
    from app.models.test_result import TestResult


class UserRole(StrEnum):
    """Roles a user can hold."""

    ADMIN = "admin"
    USER = "user"


class User(db.Model):  # type: ignore[name-defined]
    """SQLAlchemy model for a user.

    Regular users take fatigue assessments from the mobile app and are
    identified by their employee ID. Admins additionally carry a password
    hash and can sign in to the admin panel.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Company-issued identifier, used as the login name
    employee_id: Mapped[str] = mapped_column(
        String(100), unique=True, nullable=False, index=True
    )

    # National identity number (optional)
    nik: Mapped[str | None] = mapped_column(String(100), nullable=True)

    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.USER.value
    )

    # Werkzeug password hash, only set for admins
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    test_results: Mapped[list[TestResult]] = relationship(
        "TestResult",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="select",
    )

    @property
    def is_admin(self) -> bool:
        """Whether this user may use the admin panel."""
        return self.role == UserRole.ADMIN.value

    def __repr__(self) -> str:
        """Return string representation of User."""
        return f"<User(id={self.id}, employee_id='{self.employee_id}', role='{self.role}')>"
