"""Alembic environment.

The connection is supplied by ``app.database`` through
``config.attributes["connection"]``; standalone ``alembic`` invocations fall
back to the application's ``DATABASE_URL``.
"""

from alembic import context
from sqlalchemy import create_engine, pool

from app import models  # noqa: F401
from app.config import Settings
from app.extensions import db

config = context.config

target_metadata = db.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=Settings.load().database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=True,
        )
        with context.begin_transaction():
            context.run_migrations()
        return

    engine = create_engine(Settings.load().database_url, poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
