#!/usr/bin/env python3
"""
Main CLI entry point for the Workforce API server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from workforce import __version__
from workforce.config import settings
from workforce.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="workforce")
def cli() -> None:
    """Workforce CLI - run the API server and manage employers."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    show_default=True,
    help="Host to bind to",
)
@click.option(
    "--port",
    default=settings.api_port,
    type=int,
    show_default=True,
    help="Port to bind to",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the Workforce API server.

    Runs a single process: the in-memory event broker only reaches
    subscribers connected to the same process.
    """
    configure_logging(debug=(log_level == "debug"), level=log_level)

    logger.info(
        "Starting Workforce API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # The app reads its settings on import, so pass the log level through the environment
    if log_level == "debug":
        os.environ["WORKFORCE_DEBUG"] = "true"
        os.environ["WORKFORCE_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("WORKFORCE_DEBUG", "false")
        os.environ.setdefault("WORKFORCE_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "workforce.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.group()
def employer() -> None:
    """Manage employers in the database."""
    pass


@employer.command("create")
@click.option("--name", required=True, help="Employer name")
def create_employer(name: str) -> None:
    """Create an employer unless one with this name already exists.

    Writes straight to the database. No change event is published, so
    employerChanged subscribers on running servers are not notified. Use the
    createEmployer mutation when live clients must see the new employer.
    """
    from workforce.database.connection import dispose_database, get_async_session
    from workforce.database.seed_data import ensure_employer

    configure_logging(level=settings.log_level)

    async def do_create():
        try:
            async with get_async_session() as db:
                try:
                    employer_id = await ensure_employer(db, name=name)
                    click.echo(f"✓ Employer ready: {employer_id}")
                    click.echo(f"  Name: {name}")
                except Exception as e:
                    logger.error("Failed to create employer", error=str(e))
                    click.echo(f"✗ Error creating employer: {e}", err=True)
                    sys.exit(1)
        finally:
            # Pooled connections belong to this event loop
            await dispose_database()

    asyncio.run(do_create())


@employer.command("list")
def list_employers() -> None:
    """List employers with their employee counts."""
    from workforce.database.connection import dispose_database, get_async_session
    from workforce.records import repository as records_repo

    configure_logging(level=settings.log_level)

    async def do_list():
        try:
            async with get_async_session() as db:
                try:
                    employers = await records_repo.list_employers(db, limit=1000, offset=0)
                    if not employers:
                        click.echo("No employers found.")
                        return

                    click.echo(f"Found {len(employers)} employer(s):")
                    click.echo()
                    for row in employers:
                        count = await records_repo.count_employees(db, row.id)
                        click.echo(f"  ID: {row.id}")
                        click.echo(f"  Name: {row.name}")
                        click.echo(f"  Employees: {count}")
                        click.echo()
                except Exception as e:
                    logger.error("Failed to list employers", error=str(e))
                    click.echo(f"✗ Error listing employers: {e}", err=True)
                    sys.exit(1)
        finally:
            await dispose_database()

    asyncio.run(do_list())


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
