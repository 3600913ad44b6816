"""
pgnotes: Test Configuration (conftest.py)
===========================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (real SQLite database, mocked
       sessions, HTTP client).
How:   The app runs against SQLite through aiosqlite: same async engine,
       same repository code, no PostgreSQL server needed.

Fixture Hierarchy (all function-scoped):
    ├── database: Database on a fresh SQLite file, schema created
    ├── unmigrated_database: Database on a fresh SQLite file, NO schema
    │                        (every statement fails → StorageError)
    ├── unreachable_database: Database that cannot connect at all
    ├── repository: NoteRepository bound to `database`
    ├── mock_session / mock_database: AsyncSession double for failure paths
    └── test_client / broken_client: HTTPX AsyncClient over ASGITransport
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any pgnotes imports
# The singleton `settings` is built at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="pgnotes_test_"), "notes.db"
)
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from pgnotes.config import Settings  # noqa: E402
from pgnotes.database import Database  # noqa: E402
from pgnotes.main import create_app  # noqa: E402
from pgnotes.repositories.note_repository import NoteRepository  # noqa: E402


def _sqlite_settings(path) -> Settings:
    return Settings(database_url=f"sqlite+aiosqlite:///{path}", log_level="WARNING")


@pytest_asyncio.fixture
async def database(tmp_path):
    """A Database on its own SQLite file with the notes table in place."""
    db = Database(_sqlite_settings(tmp_path / "notes.db"))
    assert await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def unmigrated_database(tmp_path):
    """
    A reachable database without the notes table.

    Every repository statement fails with "no such table", which is the
    same code path as any other driver error.
    """
    db = Database(_sqlite_settings(tmp_path / "empty.db"))
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def unreachable_database(tmp_path):
    """A Database whose SQLite file lives in a directory that does not exist."""
    db = Database(_sqlite_settings(tmp_path / "missing-dir" / "notes.db"))
    yield db
    await db.dispose()


@pytest.fixture
def repository(database):
    return NoteRepository(database)


@pytest.fixture
def mock_session():
    """
    Provides a mock async database session.

    Usage:
        mock_session.execute.side_effect = OperationalError(...)
        await NoteRepository(mock_database).list_notes()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_database(mock_session):
    """
    A Database stand-in whose session_factory yields `mock_session`.

    The context manager returned by session_factory() is exposed as
    `mock_database.session_context` so tests can assert it was exited.
    """
    session_context = MagicMock()
    session_context.__aenter__ = AsyncMock(return_value=mock_session)
    session_context.__aexit__ = AsyncMock(return_value=False)

    db = MagicMock(spec=Database)
    db.session_factory = MagicMock(return_value=session_context)
    db.session_context = session_context
    return db


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to an app wired to `database`.

    ASGITransport does not run the lifespan; create_app(database) puts the
    pool on app.state directly. Redirects are not followed (httpx default),
    so tests can assert on the 302 itself.
    """
    app = create_app(database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def broken_client(unmigrated_database):
    """HTTPX AsyncClient for an app whose every query fails."""
    app = create_app(unmigrated_database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
