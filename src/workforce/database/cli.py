#!/usr/bin/env python3
"""
CLI entry point for Workforce database migrations.
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path

import click

from alembic import command
from alembic.config import Config
from workforce import __version__
from workforce.logging import configure_logging, get_logger

logger = get_logger(__name__)


def get_alembic_config() -> Config:
    """Load alembic.ini from the project root."""
    project_dir = Path(__file__).parent.parent.parent.parent
    alembic_ini = project_dir / "alembic.ini"

    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(project_dir / "alembic"))
    return config


def _run(action: str, fn: Callable[[Config], None], **log_fields: object) -> None:
    """Run an Alembic command, exiting non-zero on failure."""
    try:
        config = get_alembic_config()
        logger.info(f"{action} started", **log_fields)
        fn(config)
        logger.info(f"{action} completed", **log_fields)
    except Exception as e:
        logger.error(f"{action} failed", error=str(e), **log_fields)
        sys.exit(1)


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.option(
    "--database-url",
    default=None,
    help="Database URL to migrate (defaults to WORKFORCE_DATABASE_URL)",
)
@click.version_option(version=__version__, prog_name="workforce-migrate")
def main(log_level: str, database_url: str | None) -> None:
    """Workforce database migration management."""
    configure_logging(debug=(log_level == "debug"), level=log_level)
    if database_url:
        # alembic/env.py resolves the URL through the same variable as the app
        os.environ["WORKFORCE_DATABASE_URL"] = database_url


@main.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Upgrade database to a revision (default: head)."""
    _run("Database upgrade", lambda cfg: command.upgrade(cfg, revision), revision=revision)


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Downgrade database to a revision (default: -1)."""
    _run("Database downgrade", lambda cfg: command.downgrade(cfg, revision), revision=revision)


@main.command()
@click.option("-m", "--message", required=True, help="Revision message")
@click.option("--autogenerate/--no-autogenerate", default=True, help="Auto-generate migration")
def revision(message: str, autogenerate: bool) -> None:
    """Create a new migration revision."""
    _run(
        "Migration creation",
        lambda cfg: command.revision(cfg, message=message, autogenerate=autogenerate),
        message=message,
        autogenerate=autogenerate,
    )


@main.command()
def current() -> None:
    """Show current database revision."""
    _run("Current revision lookup", command.current)


@main.command()
def history() -> None:
    """Show migration history."""
    _run("Migration history", command.history)


if __name__ == "__main__":
    main()
