"""
Tests for the command line interfaces
"""

import os

import pytest
from click.testing import CliRunner
from sqlalchemy import create_engine, inspect

from workforce.cli import cli
from workforce.database import cli as migrate_cli
from workforce.database.connection import reset_database
from workforce.dbmodels import Base


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def quiet_logging(monkeypatch):
    """Keep log handlers off the runner's captured stdout."""
    monkeypatch.setattr("workforce.cli.configure_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(migrate_cli, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture
def cli_database(sqlite_url):
    engine = create_engine(sqlite_url)
    Base.metadata.create_all(engine)
    engine.dispose()

    os.environ["WORKFORCE_DATABASE_URL"] = sqlite_url
    reset_database()
    yield sqlite_url
    reset_database()


def ready_line(output: str) -> str:
    return next(line for line in output.splitlines() if line.startswith("✓ Employer ready: "))


def test_employer_create_is_idempotent(runner, quiet_logging, cli_database):
    first = runner.invoke(cli, ["employer", "create", "--name", "Acme"])
    second = runner.invoke(cli, ["employer", "create", "--name", "Acme"])

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert ready_line(first.output) == ready_line(second.output)


def test_employer_list_shows_counts(runner, quiet_logging, cli_database):
    empty = runner.invoke(cli, ["employer", "list"])
    assert empty.exit_code == 0, empty.output
    assert "No employers found." in empty.output

    runner.invoke(cli, ["employer", "create", "--name", "Acme"])
    listing = runner.invoke(cli, ["employer", "list"])

    assert listing.exit_code == 0, listing.output
    assert "Found 1 employer(s):" in listing.output
    assert "Name: Acme" in listing.output
    assert "Employees: 0" in listing.output


def test_serve_passes_options_to_uvicorn(runner, quiet_logging, monkeypatch):
    calls = {}

    def fake_run(app, **kwargs):
        calls["app"] = app
        calls.update(kwargs)

    monkeypatch.setattr("workforce.cli.uvicorn.run", fake_run)

    result = runner.invoke(cli, ["serve", "--host", "127.0.0.1", "--port", "4100"])

    assert result.exit_code == 0, result.output
    assert calls["app"] == "workforce.api.app:app"
    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 4100
    assert calls["reload"] is False


@pytest.mark.integration
def test_migrations_create_schema(runner, quiet_logging, sqlite_url):
    result = runner.invoke(migrate_cli.main, ["--database-url", sqlite_url, "upgrade"])
    assert result.exit_code == 0, result.output

    engine = create_engine(sqlite_url)
    try:
        inspector = inspect(engine)
        assert {"employers", "employees"} <= set(inspector.get_table_names())

        foreign_keys = inspector.get_foreign_keys("employees")
        assert foreign_keys[0]["referred_table"] == "employers"
        assert foreign_keys[0]["options"].get("ondelete") == "RESTRICT"

        index_names = {index["name"] for index in inspector.get_indexes("employees")}
        assert "idx_employees_employer" in index_names
    finally:
        engine.dispose()

    result = runner.invoke(migrate_cli.main, ["--database-url", sqlite_url, "downgrade", "base"])
    assert result.exit_code == 0, result.output

    engine = create_engine(sqlite_url)
    try:
        assert "employees" not in inspect(engine).get_table_names()
    finally:
        engine.dispose()


def test_employer_create_help_says_no_event_is_published(runner):
    result = runner.invoke(cli, ["employer", "create", "--help"])

    assert result.exit_code == 0, result.output
    help_text = " ".join(result.output.split())
    assert "No change event is published" in help_text
    assert "createEmployer mutation" in help_text
