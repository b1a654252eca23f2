"""
Q&A Service — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── database:        Real Database on a temporary SQLite file, schema created
    └── test_client:     HTTPX AsyncClient talking to an app wired to `database`
"""

import os
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any app imports so the module-level app in
# app.main never points at a real PostgreSQL instance
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.database import Database


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_answer(mock_db_session):
            mock_db_session.get.return_value = None
            with pytest.raises(NotFoundError):
                await answer_service.get_answer(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    Provides a connected Database on a throwaway SQLite file.

    A file (not :memory:) so every pooled connection sees the same data.
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'qa.db'}")
    await db.connect()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the `database` fixture has
    already created the schema.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/questions")
            assert response.status_code == 200
    """
    from app.main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
