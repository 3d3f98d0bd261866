"""CLI entry point for fatigue assessment backend management commands."""

import sys
from pathlib import Path

import click

from app import create_app
from app.database import check_db_connection, get_pending_migrations, upgrade_database
from app.exceptions import BusinessLogicException
from app.models.user import UserRole
from app.services.user_service import MIN_ADMIN_PASSWORD_LENGTH


@click.group()
def cli() -> None:
    """Fatigue admin CLI - Database and user management commands."""
    pass


@cli.command()
@click.option("--recreate", is_flag=True, help="Drop all tables before upgrading")
@click.option(
    "--yes-i-am-sure",
    is_flag=True,
    help="Required safety flag when using --recreate",
)
def upgrade_db(recreate: bool, yes_i_am_sure: bool) -> None:
    """Upgrade database to latest migration.

    Applies all pending Alembic migrations to bring the database schema up to date.
    Use --recreate to drop all tables first (useful for development).

    Examples:
        fatigue-cli upgrade-db                              Apply pending migrations
        fatigue-cli upgrade-db --recreate --yes-i-am-sure   Drop all tables and recreate
    """
    # Safety check for recreate
    if recreate and not yes_i_am_sure:
        click.echo(
            "Error: --recreate requires --yes-i-am-sure flag for safety", err=True
        )
        click.echo(
            "   This will DROP ALL TABLES and recreate from migrations!", err=True
        )
        sys.exit(1)

    app = create_app()

    with app.app_context():
        # Check database connection first
        if not check_db_connection():
            click.echo("Error: Cannot connect to database", err=True)
            sys.exit(1)

        # Let operator know which database is targeted
        click.echo(f"Using database: {app.config['SQLALCHEMY_DATABASE_URI']}")

        if recreate:
            click.echo("WARNING: About to drop all tables and recreate from migrations!")
            click.echo("   This will permanently delete all data in the database.")

        # Show pending migrations
        pending = get_pending_migrations()
        if not pending and not recreate:
            click.echo("Database is already up to date")
            return

        if pending:
            click.echo(f"Found {len(pending)} pending migration(s)")

        # Run upgrade
        try:
            if recreate:
                click.echo("Recreating database from scratch...")

            applied = upgrade_database(recreate=recreate)
            if applied:
                click.echo(f"Applied {len(applied)} migration(s):")
                for rev, desc in applied:
                    click.echo(f"  - {rev}: {desc}")
            click.echo("Database upgrade complete")
        except Exception as e:
            click.echo(f"Error during database upgrade: {e}", err=True)
            sys.exit(1)


@cli.command()
def db_status() -> None:
    """Show database migration status.

    Displays current database revision and any pending migrations.
    """
    app = create_app()

    with app.app_context():
        # Check database connection first
        if not check_db_connection():
            click.echo("Error: Cannot connect to database", err=True)
            sys.exit(1)

        from app.database import get_current_revision

        current = get_current_revision()
        pending = get_pending_migrations()

        if current:
            click.echo(f"Current revision: {current}")
        else:
            click.echo("No migrations applied yet")

        if pending:
            click.echo(f"Pending migrations: {len(pending)}")
            for rev in pending:
                click.echo(f"  - {rev}")
        else:
            click.echo("No pending migrations")


@cli.command()
@click.option("--employee-id", required=True, help="Employee ID used to sign in")
@click.option("--name", required=True, help="Display name")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Admin password (prompted when omitted)",
)
def create_admin(employee_id: str, name: str, password: str) -> None:
    """Create an admin account.

    Examples:
        fatigue-cli create-admin --employee-id ADM001 --name "Site Admin"
    """
    if len(password) < MIN_ADMIN_PASSWORD_LENGTH:
        click.echo(
            f"Error: Password must be at least {MIN_ADMIN_PASSWORD_LENGTH} characters",
            err=True,
        )
        sys.exit(1)

    app = create_app()

    with app.app_context():
        if not check_db_connection():
            click.echo("Error: Cannot connect to database", err=True)
            sys.exit(1)

        session = app.container.db_session()
        try:
            user = app.container.user_service().create_user(
                name=name,
                employee_id=employee_id,
                role=UserRole.ADMIN.value,
                password=password,
            )
            session.commit()
        except BusinessLogicException as e:
            session.rollback()
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)
        finally:
            app.container.db_session.reset()

        click.echo(f"Created admin {user.employee_id} ({user.name})")


@cli.command()
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--dry-run", is_flag=True, help="Only show what would be imported")
def import_users(csv_file: Path, dry_run: bool) -> None:
    """Import users from a CSV file.

    Columns are matched to name, employee ID, NIK and role by header name.
    Rows whose employee ID already exists are skipped.

    Examples:
        fatigue-cli import-users employees.csv --dry-run
        fatigue-cli import-users employees.csv
    """
    content = csv_file.read_bytes()

    app = create_app()

    with app.app_context():
        if not check_db_connection():
            click.echo("Error: Cannot connect to database", err=True)
            sys.exit(1)

        session = app.container.db_session()
        csv_import_service = app.container.csv_import_service()
        try:
            preview = csv_import_service.preview(content)

            click.echo(f"Records: {preview.total_records}")
            click.echo("Column mapping:")
            for field_name, header in preview.column_mapping.items():
                click.echo(f"  - {field_name}: {header}")
            click.echo(f"Valid records: {preview.valid_records}")
            for error in preview.errors:
                click.echo(f"  row {error.row}: {error.error}")

            if dry_run:
                return

            summary = csv_import_service.confirm_import(content, preview.column_mapping)
            session.commit()
        except BusinessLogicException as e:
            session.rollback()
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)
        finally:
            app.container.db_session.reset()

        click.echo(f"Imported {summary.imported} user(s), skipped {summary.skipped}")
        for skipped in summary.import_errors:
            click.echo(f"  - {skipped.employee_id}: {skipped.error}")


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
