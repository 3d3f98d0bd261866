"""Admin authentication: password hashing and JWT issue/validation."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from prometheus_client import Counter
from werkzeug.security import check_password_hash, generate_password_hash

from app.config import Settings
from app.exceptions import AuthenticationException

logger = logging.getLogger(__name__)

AUTH_TOKEN_VALIDATION_TOTAL = Counter(
    "auth_token_validation_total",
    "Total admin token validations by outcome",
    ["status"],
)

_JWT_ALGORITHM = "HS256"


@dataclass
class AuthContext:
    """Authentication context extracted from a validated admin token."""

    user_id: int  # JWT "sub" claim
    employee_id: str
    role: str
    name: str | None = None


class AuthService:
    """Singleton service for admin credentials and tokens.

    Tokens are HS256-signed with ``JWT_SECRET`` and carry the user ID as the
    subject. Whether the user still exists and is still an admin is checked
    against the database by the caller, not here.
    """

    def __init__(self, config: Settings) -> None:
        """Initialize auth service.

        Args:
            config: Application settings containing the JWT configuration
        """
        self.config = config
        logger.info(
            "AuthService initialized (auth %s)",
            "enabled" if config.auth_enabled else "disabled",
        )

    def hash_password(self, password: str) -> str:
        """Hash a password for storage."""
        return generate_password_hash(password)

    def verify_password(self, password_hash: str | None, password: str) -> bool:
        """Check a password against a stored hash.

        An empty or missing hash never matches.
        """
        if not password_hash or not password_hash.strip():
            return False
        return check_password_hash(password_hash, password)

    def issue_token(self, user_id: int, employee_id: str, role: str) -> str:
        """Create a signed token for a user.

        Args:
            user_id: User primary key
            employee_id: User's employee ID
            role: User's role at sign-in time

        Returns:
            Encoded JWT
        """
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "employee_id": employee_id,
            "role": role,
            "iat": now,
            "exp": now + timedelta(hours=self.config.jwt_expire_hours),
        }
        return jwt.encode(payload, self.config.jwt_secret, algorithm=_JWT_ALGORITHM)

    def validate_token(self, token: str) -> AuthContext:
        """Validate a token and extract its authentication context.

        Args:
            token: Encoded JWT

        Returns:
            AuthContext for the token's subject

        Raises:
            AuthenticationException: If the token is invalid, expired, or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self.config.jwt_secret,
                algorithms=[_JWT_ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            AUTH_TOKEN_VALIDATION_TOTAL.labels(status="expired").inc()
            logger.warning("Token validation failed: expired")
            raise AuthenticationException("Token has expired") from e
        except jwt.InvalidTokenError as e:
            AUTH_TOKEN_VALIDATION_TOTAL.labels(status="invalid").inc()
            logger.warning("Token validation failed: %s", str(e))
            raise AuthenticationException("Invalid or expired token") from e

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            AUTH_TOKEN_VALIDATION_TOTAL.labels(status="invalid").inc()
            raise AuthenticationException("Token has an invalid subject") from e

        AUTH_TOKEN_VALIDATION_TOTAL.labels(status="success").inc()
        return AuthContext(
            user_id=user_id,
            employee_id=str(payload.get("employee_id", "")),
            role=str(payload.get("role", "")),
        )
