"""
Shared pytest fixtures and configuration for all tests.
"""

import asyncio
import os
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

from workforce.events import InMemoryBroker, Topics


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(scope="function")
def sqlite_url(tmp_path: Path) -> str:
    """Return the URL of a fresh SQLite database file for this test."""
    return f"sqlite:///{tmp_path / 'workforce_test.db'}"


@pytest_asyncio.fixture(scope="function")
async def test_database(sqlite_url: str) -> AsyncGenerator[str, None]:
    """Point the shared engine at a fresh SQLite database with all tables created."""
    from workforce.database.connection import (
        dispose_database,
        get_async_engine,
        init_database,
        reset_database,
    )
    from workforce.dbmodels import Base

    os.environ["WORKFORCE_DATABASE_URL"] = sqlite_url
    reset_database()
    init_database(sqlite_url, force_reinit=True)

    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sqlite_url

    await dispose_database()
    reset_database()


@pytest.fixture
def broker() -> InMemoryBroker:
    return InMemoryBroker()


@pytest.fixture
def topics(broker: InMemoryBroker) -> Topics:
    return Topics(broker)


@pytest.fixture
def graphql_context(topics: Topics) -> dict[str, Any]:
    """Resolver context as the GraphQL router builds it."""
    from workforce.graphql.schema import build_context

    return build_context(topics)


@pytest.fixture
def wait_for_subscribers(broker: InMemoryBroker):
    """Let pending tasks run until ``count`` subscribers are listening on ``channel``."""

    async def _wait(channel: str, count: int = 1) -> None:
        for _ in range(100):
            if broker.subscriber_count(channel) >= count:
                return
            await asyncio.sleep(0)
        raise AssertionError(f"Expected {count} subscriber(s) on {channel}")

    return _wait


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "integration: mark test as integration test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line(  # type: ignore[reportUnknownMemberType]
        "markers", "requires_redis: mark test as requiring a reachable Redis server"
    )
