"""Pytest configuration and fixtures."""

import sqlite3
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from flask import Flask
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app import create_app
from app.config import Settings
from app.database import upgrade_database
from app.models.question import Question
from app.models.test_result import TestResult
from app.models.user import User
from app.services.container import ServiceContainer
from app.services.question_service import AnswerInput
from app.services.test_result_service import ScoreInput

ADMIN_PASSWORD = "admin-password"


def _build_test_settings(tmp_path: Path) -> Settings:
    """Construct base Settings object for tests.

    Admin authentication and the mobile API key are off by default; tests
    covering them switch them on by overriding ``test_settings``.
    """
    return Settings(
        # Flask settings
        secret_key="test-secret-key",
        flask_env="testing",
        debug=True,
        # Database settings
        database_url="sqlite:///:memory:",
        # CORS settings
        cors_origins=["http://localhost:3000"],
        # Authentication
        auth_enabled=False,
        jwt_secret="test-jwt-secret-with-at-least-32-bytes",
        jwt_expire_hours=1,
        mobile_api_key=None,
        # Settings cache and SSE
        settings_cache_ttl_seconds=600,
        sse_keepalive_seconds=0.05,
        sse_queue_size=8,
        # CSV import
        csv_max_upload_bytes=64 * 1024,
        # Pagination
        page_size=10,
    )


def _override_settings_for_sqlite(settings: Settings, conn: sqlite3.Connection) -> Settings:
    """Create a copy of settings configured for SQLite with static pool."""
    new_settings = settings.model_copy(
        update={
            "database_url": "sqlite://",
            "sqlalchemy_engine_options": {
                "poolclass": StaticPool,
                "creator": lambda: conn,
            },
        }
    )
    return new_settings


@pytest.fixture(scope="session")
def session_tmp_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Session-scoped temporary path for test fixtures."""
    return tmp_path_factory.mktemp("session")


@pytest.fixture(scope="session")
def template_connection(session_tmp_path: Path) -> Generator[sqlite3.Connection, None, None]:
    """Create a template SQLite database once and apply migrations."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)

    settings = _override_settings_for_sqlite(_build_test_settings(session_tmp_path), conn)

    template_app = create_app(settings)
    with template_app.app_context():
        upgrade_database(recreate=True)

    yield conn

    conn.close()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test settings with in-memory database."""
    return _build_test_settings(tmp_path)


@pytest.fixture
def app(
    test_settings: Settings, template_connection: sqlite3.Connection
) -> Generator[Flask, None, None]:
    """Create Flask app for testing using a fresh copy of the template database."""
    clone_conn = sqlite3.connect(":memory:", check_same_thread=False)
    template_connection.backup(clone_conn)

    settings = _override_settings_for_sqlite(test_settings, clone_conn)

    app = create_app(settings)

    try:
        yield app
    finally:
        with app.app_context():
            from app.extensions import db as flask_db

            flask_db.session.remove()

        clone_conn.close()


@pytest.fixture
def session(container: ServiceContainer) -> Generator[Session, None, None]:
    """Create a new database session for a test."""
    session = container.db_session()

    exc = None
    try:
        yield session
    except Exception as e:
        exc = e

    if exc:
        session.rollback()
    else:
        session.commit()
    session.close()

    container.db_session.reset()


@pytest.fixture
def client(app: Flask) -> Any:
    """Create test client."""
    return app.test_client()


@pytest.fixture
def container(app: Flask) -> ServiceContainer:
    """Access to the DI container for testing with session provided."""
    container = app.container

    with app.app_context():
        # Ensure SessionLocal is initialized for tests
        from sqlalchemy.orm import sessionmaker

        from app.extensions import db as flask_db

        SessionLocal = sessionmaker(
            bind=flask_db.engine, autoflush=True, expire_on_commit=False
        )

    container.session_maker.override(SessionLocal)

    return container


@pytest.fixture
def make_user(container: ServiceContainer) -> Callable[..., User]:
    """Factory fixture for creating committed user records in tests.

    Usage:
        user = make_user("EMP001", "Budi")
        admin = make_user("ADM001", "Siti", role="admin")
    """

    def _make(
        employee_id: str,
        name: str = "Test User",
        role: str = "user",
        nik: str | None = None,
        password: str | None = None,
    ) -> User:
        if role == "admin" and password is None:
            password = ADMIN_PASSWORD
        user = container.user_service().create_user(
            name=name,
            employee_id=employee_id,
            role=role,
            nik=nik,
            password=password,
        )
        container.db_session().commit()
        return user

    return _make


@pytest.fixture
def make_question(container: ServiceContainer) -> Callable[..., Question]:
    """Factory fixture for creating committed questions.

    Usage:
        question = make_question("Did you sleep well?", [("Yes", 0), ("No", 10)])
    """

    def _make(text: str, answers: list[tuple[str, int]] | None = None) -> Question:
        if answers is None:
            answers = [("Yes", 0), ("No", 10)]
        question = container.question_service().create_question(
            text, [AnswerInput(answer_text=a, score=s) for a, s in answers]
        )
        container.db_session().commit()
        return question

    return _make


@pytest.fixture
def make_result(container: ServiceContainer) -> Callable[..., TestResult]:
    """Factory fixture for creating committed test results.

    Usage:
        result = make_result(user.id, total_score=85)
    """

    def _make(user_id: int, total_score: int = 50, assessment_score: int = 10) -> TestResult:
        result = container.test_result_service().save_result(
            ScoreInput(
                user_id=user_id,
                assessment_score=assessment_score,
                minigame1_score=10,
                minigame2_score=10,
                minigame3_score=10,
                total_score=total_score,
            )
        )
        container.db_session().commit()
        return result

    return _make
