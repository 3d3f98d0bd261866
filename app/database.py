"""Database connectivity and Alembic migration helpers.

Migrations are run programmatically against the Flask-SQLAlchemy engine so
the CLI and the test suite share one code path. Must be called inside an
application context.
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import Connection, MetaData, text
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db

logger = logging.getLogger(__name__)

_ALEMBIC_DIR = Path(__file__).resolve().parent.parent / "alembic"


def _alembic_config(connection: Connection | None = None) -> Config:
    config = Config()
    config.set_main_option("script_location", str(_ALEMBIC_DIR))
    if connection is not None:
        config.attributes["connection"] = connection
    return config


def check_db_connection() -> bool:
    """Check whether the configured database accepts connections.

    Returns:
        True if a trivial query succeeds, False otherwise
    """
    try:
        with db.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error("Database connection check failed: %s", e)
        return False


def get_current_revision() -> str | None:
    """Return the revision the database is currently stamped with."""
    with db.engine.connect() as connection:
        context = MigrationContext.configure(connection)
        return context.get_current_revision()


def get_pending_migrations() -> list[str]:
    """Return revisions not yet applied, oldest first."""
    script = ScriptDirectory.from_config(_alembic_config())
    current = get_current_revision()

    pending: list[str] = []
    for revision in script.walk_revisions():
        if revision.revision == current:
            break
        pending.append(revision.revision)

    pending.reverse()
    return pending


def _drop_all_tables() -> None:
    with db.engine.begin() as connection:
        metadata = MetaData()
        metadata.reflect(bind=connection)
        metadata.drop_all(bind=connection)
    logger.warning("Dropped all database tables")


def upgrade_database(recreate: bool = False) -> list[tuple[str, str]]:
    """Apply pending migrations up to head.

    Args:
        recreate: Drop every table (including the Alembic version table) first

    Returns:
        List of (revision, description) tuples that were applied
    """
    if recreate:
        _drop_all_tables()

    script = ScriptDirectory.from_config(_alembic_config())
    applied: list[tuple[str, str]] = []
    for revision_id in get_pending_migrations():
        revision = script.get_revision(revision_id)
        description = (revision.doc or "").strip() if revision else ""
        applied.append((revision_id, description))

    with db.engine.begin() as connection:
        command.upgrade(_alembic_config(connection), "head")

    for revision_id, description in applied:
        logger.info("Applied migration %s: %s", revision_id, description)

    return applied
