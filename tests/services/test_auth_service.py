"""Tests for AuthService password hashing and JWT handling."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from app.config import Settings
from app.exceptions import AuthenticationException
from app.services.auth_service import AuthService


class TestPasswords:
    """Tests for password hashing."""

    def test_hash_and_verify(self, test_settings: Settings) -> None:
        service = AuthService(test_settings)
        password_hash = service.hash_password("secret123")

        assert password_hash != "secret123"
        assert service.verify_password(password_hash, "secret123")
        assert not service.verify_password(password_hash, "wrong")

    @pytest.mark.parametrize("password_hash", [None, "", "   "])
    def test_missing_hash_never_matches(
        self, test_settings: Settings, password_hash: str | None
    ) -> None:
        assert not AuthService(test_settings).verify_password(password_hash, "")


class TestTokens:
    """Tests for issuing and validating tokens."""

    def test_issue_and_validate(self, test_settings: Settings) -> None:
        service = AuthService(test_settings)
        token = service.issue_token(42, "ADM001", "admin")

        auth_context = service.validate_token(token)

        assert auth_context.user_id == 42
        assert auth_context.employee_id == "ADM001"
        assert auth_context.role == "admin"
        assert auth_context.name is None

    def test_expired_token(self, test_settings: Settings) -> None:
        service = AuthService(test_settings)
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "42", "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)},
            test_settings.jwt_secret,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationException) as exc_info:
            service.validate_token(token)

        assert "expired" in str(exc_info.value)

    def test_wrong_secret(self, test_settings: Settings) -> None:
        other = AuthService(
            test_settings.model_copy(
                update={"jwt_secret": "another-jwt-secret-with-at-least-32-bytes"}
            )
        )
        token = other.issue_token(42, "ADM001", "admin")

        with pytest.raises(AuthenticationException):
            AuthService(test_settings).validate_token(token)

    def test_garbage_token(self, test_settings: Settings) -> None:
        with pytest.raises(AuthenticationException):
            AuthService(test_settings).validate_token("not-a-jwt")

    def test_missing_expiry(self, test_settings: Settings) -> None:
        token = jwt.encode({"sub": "42"}, test_settings.jwt_secret, algorithm="HS256")

        with pytest.raises(AuthenticationException):
            AuthService(test_settings).validate_token(token)

    def test_non_numeric_subject(self, test_settings: Settings) -> None:
        token = jwt.encode(
            {"sub": "admin", "exp": datetime.now(UTC) + timedelta(hours=1)},
            test_settings.jwt_secret,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationException) as exc_info:
            AuthService(test_settings).validate_token(token)

        assert "subject" in str(exc_info.value)
