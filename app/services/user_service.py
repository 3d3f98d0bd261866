"""User service for managing assessed employees and admin accounts."""

import logging
import math
from dataclasses import dataclass

from sqlalchemy import case, delete, func, or_, select
from sqlalchemy.orm import Session

from app.exceptions import (
    AuthenticationException,
    RecordExistsException,
    RecordNotFoundException,
    ValidationException,
)
from app.models.activity_log import ActivityLog
from app.models.user import User, UserRole
from app.services.activity_service import ActivityService
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

MIN_ADMIN_PASSWORD_LENGTH = 6


@dataclass
class Page:
    """One page of a paginated listing."""

    page: int
    page_size: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class UserService:
    """Service for user CRUD operations and admin sign-in."""

    def __init__(
        self,
        db: Session,
        auth_service: AuthService,
        activity_service: ActivityService,
        page_size: int,
    ) -> None:
        """Initialize user service.

        Args:
            db: SQLAlchemy database session
            auth_service: Password hashing and token service
            activity_service: Activity log recorder
            page_size: Number of users per listing page
        """
        self.db = db
        self.auth_service = auth_service
        self.activity_service = activity_service
        self.page_size = page_size

    def list_users(self, page: int = 1, search: str | None = None) -> tuple[list[User], Page]:
        """List users, admins first and then by name.

        Args:
            page: 1-based page number
            search: Case-insensitive substring matched against name and employee ID

        Returns:
            Tuple of (users on the page, pagination info)
        """
        page = max(page, 1)
        stmt = select(User)
        count_stmt = select(func.count()).select_from(User)

        if search:
            pattern = f"%{search}%"
            condition = or_(User.name.ilike(pattern), User.employee_id.ilike(pattern))
            stmt = stmt.where(condition)
            count_stmt = count_stmt.where(condition)

        total = self.db.scalar(count_stmt) or 0
        pagination = Page(page=page, page_size=self.page_size, total=total)

        admins_first = case((User.role == UserRole.ADMIN.value, 0), else_=1)
        stmt = (
            stmt.order_by(admins_first, User.name.asc(), User.id.asc())
            .limit(self.page_size)
            .offset(pagination.offset)
        )
        return list(self.db.scalars(stmt)), pagination

    def get_user(self, user_id: int) -> User:
        """Get a user by ID.

        Raises:
            RecordNotFoundException: If the user does not exist
        """
        user = self.db.get(User, user_id)
        if user is None:
            raise RecordNotFoundException("User", str(user_id))
        return user

    def get_by_employee_id(self, employee_id: str) -> User | None:
        """Get a user by employee ID, or None."""
        stmt = select(User).where(User.employee_id == employee_id.strip())
        return self.db.scalars(stmt).first()

    def get_admin(self, user_id: int) -> User | None:
        """Get a user only if they exist and are an admin."""
        user = self.db.get(User, user_id)
        if user is None or not user.is_admin:
            return None
        return user

    def existing_employee_ids(self) -> set[str]:
        """All employee IDs currently in use."""
        return set(self.db.scalars(select(User.employee_id)))

    def count_users(self) -> int:
        """Total number of users."""
        return self.db.scalar(select(func.count()).select_from(User)) or 0

    def get_recent_users(self, limit: int = 5) -> list[User]:
        """Most recently created users, newest first."""
        stmt = select(User).order_by(User.id.desc()).limit(limit)
        return list(self.db.scalars(stmt))

    def create_user(
        self,
        name: str,
        employee_id: str,
        role: str = UserRole.USER.value,
        nik: str | None = None,
        password: str | None = None,
        actor_id: int | None = None,
        log_activity: bool = True,
    ) -> User:
        """Create a new user.

        Args:
            name: Display name
            employee_id: Unique employee ID
            role: ``admin`` or ``user``
            nik: Optional national identity number
            password: Required for admins, ignored otherwise
            actor_id: ID of the admin creating the user
            log_activity: Whether to record a ``user_created`` activity

        Returns:
            The created user

        Raises:
            ValidationException: If a required field is missing
            RecordExistsException: If the employee ID is already in use
        """
        name = name.strip()
        employee_id = employee_id.strip()
        if not name:
            raise ValidationException("Name is required")
        if not employee_id:
            raise ValidationException("Employee ID is required")
        if role not in (UserRole.ADMIN.value, UserRole.USER.value):
            raise ValidationException("Invalid role")
        if role == UserRole.ADMIN.value and not password:
            raise ValidationException("Password is required for admin users")

        if self.get_by_employee_id(employee_id) is not None:
            raise RecordExistsException("Employee ID", employee_id)

        user = User(
            name=name,
            employee_id=employee_id,
            nik=(nik or "").strip() or None,
            role=role,
        )
        if role == UserRole.ADMIN.value and password:
            user.password_hash = self.auth_service.hash_password(password)

        self.db.add(user)
        self.db.flush()

        logger.info("Created user %s (%s) with role %s", employee_id, name, role)
        if log_activity:
            self.activity_service.log(
                "user_created",
                f'New user "{name}" ({employee_id}) joined the system',
                actor_id,
            )
        return user

    def update_user(
        self,
        user_id: int,
        name: str,
        role: str,
        password: str | None = None,
        actor_id: int | None = None,
    ) -> User:
        """Update a user's name, role and optionally password.

        The password is only stored when the user is, or becomes, an admin.

        Raises:
            RecordNotFoundException: If the user does not exist
            ValidationException: If a field is invalid
        """
        user = self.get_user(user_id)

        name = name.strip()
        if not name:
            raise ValidationException("Name is required")
        if role not in (UserRole.ADMIN.value, UserRole.USER.value):
            raise ValidationException("Invalid role")
        if role == UserRole.ADMIN.value and password and len(password) < MIN_ADMIN_PASSWORD_LENGTH:
            raise ValidationException(
                f"Password must be at least {MIN_ADMIN_PASSWORD_LENGTH} characters for admin users"
            )

        was_admin = user.is_admin
        user.name = name
        user.role = role
        if password and (role == UserRole.ADMIN.value or was_admin):
            user.password_hash = self.auth_service.hash_password(password)

        self.db.flush()

        logger.info("Updated user %s", user.employee_id)
        self.activity_service.log(
            "user_updated",
            f'User "{name}" ({user.employee_id}) was updated',
            actor_id,
        )
        return user

    def delete_user(self, user_id: int, actor_id: int | None = None) -> None:
        """Delete a user with their test results, answers and activity entries.

        Raises:
            RecordNotFoundException: If the user does not exist
        """
        user = self.get_user(user_id)
        name, employee_id = user.name, user.employee_id

        self.db.execute(delete(ActivityLog).where(ActivityLog.user_id == user_id))
        self.db.delete(user)
        self.db.flush()

        logger.info("Deleted user %s", employee_id)
        self.activity_service.log(
            "user_deleted",
            f'User "{name}" ({employee_id}) was removed from the system',
            None if actor_id == user_id else actor_id,
        )

    def authenticate_admin(self, employee_id: str, password: str) -> User:
        """Check admin credentials.

        Returns:
            The admin user

        Raises:
            AuthenticationException: If the credentials do not match an admin
        """
        user = self.get_by_employee_id(employee_id)
        if (
            user is None
            or not user.is_admin
            or not self.auth_service.verify_password(user.password_hash, password)
        ):
            logger.warning("Admin login failed for %s", employee_id)
            raise AuthenticationException("Invalid credentials")

        logger.info("Admin %s signed in", employee_id)
        return user
