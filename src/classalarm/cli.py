"""Command-line interface for ClassAlarm.

Operator commands for preparing and inspecting the group store. Serving
the operations is left to the hosting platform.
"""

import asyncio
from typing import NoReturn

import click

from classalarm.core.config import get_settings
from classalarm.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version="0.1.0", prog_name="ClassAlarm")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides CLASSALARM_LOG_LEVEL)",
)
def cli(log_level: str | None) -> None:
    """ClassAlarm - group alarms for classroom devices."""
    settings = get_settings()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Create the group, account and installation tables."""
    from classalarm.infrastructure.persistence.database import get_db_manager, init_database

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
def check_db() -> None:
    """Check that the configured database and push provider are reachable."""
    from classalarm.infrastructure.persistence.database import get_db_manager
    from classalarm.infrastructure.services.push_service import get_push_provider

    async def check() -> tuple[bool, tuple[bool, str | None]]:
        db = get_db_manager()
        try:
            db_ok = await db.check_connection()
        finally:
            await db.disconnect()
        return db_ok, await get_push_provider().test_connection()

    db_ok, (push_ok, push_error) = asyncio.run(check())
    if db_ok:
        click.echo("Database connection OK.")
    else:
        click.echo("Database connection failed.", err=True)
    if push_ok:
        click.echo("Push provider OK.")
    else:
        click.echo(f"Push provider check failed: {push_error}", err=True)

    if not (db_ok and push_ok):
        raise SystemExit(1)


@cli.command()
@click.argument("code")
def group_info(code: str) -> None:
    """Show a group's members and cooldown.

    Looking up a code that only exists in the legacy table migrates it.
    """
    from datetime import datetime, timezone

    from sqlalchemy.exc import SQLAlchemyError

    from classalarm.core.exceptions import InvalidInputError
    from classalarm.domain.services import CooldownGate, GroupDirectory, default_input_validator
    from classalarm.domain.stores import StoreError
    from classalarm.infrastructure.persistence.database import get_db_manager
    from classalarm.infrastructure.persistence.repositories import (
        GroupRepository,
        LegacyGroupRepository,
    )

    logger = get_logger(__name__)

    try:
        default_input_validator.validate_group_code(code)
    except InvalidInputError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)

    async def lookup():
        db = get_db_manager()
        try:
            async with db.session() as session:
                directory = GroupDirectory(GroupRepository(session), LegacyGroupRepository(session))
                return await directory.resolve(code)
        finally:
            await db.disconnect()

    try:
        group = asyncio.run(lookup())
    except (StoreError, SQLAlchemyError, TimeoutError) as e:
        logger.error("Group lookup failed", group_code=code, error=str(e))
        click.echo(f"Error: group lookup failed ({type(e).__name__}).", err=True)
        raise SystemExit(1)

    if group is None:
        click.echo(f"Group {code} not found.", err=True)
        raise SystemExit(1)

    remaining = CooldownGate().remaining(group, datetime.now(timezone.utc))
    logger.debug("Group inspected via CLI", group_code=code)
    click.echo(
        f"Group {group.code}\n"
        f"  Members ({group.member_count}): {', '.join(group.members)}\n"
        f"  Last alarm:  {group.last_alarm_at.isoformat()}\n"
        f"  Cooldown:    {remaining}s remaining"
    )


@cli.command()
def info() -> None:
    """Display ClassAlarm configuration."""
    settings = get_settings()

    click.echo(f"""
ClassAlarm v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}

Groups:
  Code Length:  {settings.group_code_length}
  Max Members:  {settings.max_members}
  Cooldown:     {settings.cooldown_seconds} seconds

Database:
  URL:          {settings.database_url}

Push:
  Provider:     {settings.push_provider}
  Gateway:      {settings.push_gateway_url or '-'}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the ``classalarm`` command."""
    cli()


if __name__ == "__main__":
    main()
