"""
pgnotes: Database Engine & Connection Pool
============================================

What:  Async SQLAlchemy engine, session factory, schema initializer and the
       FastAPI dependency that hands the pool to request handlers.
Why:   Centralizes all database connection logic in one place.
How:   `Database` wraps one async engine (and therefore one connection pool).
       The app creates a single instance at startup, keeps it on
       `app.state.database`, and disposes it at shutdown.
Who:   Created by the lifespan handler in main.py; used by NoteRepository.

Architecture Decision:
    Async SQLAlchemy (asyncpg driver in production) so a slow query only
    suspends the request that issued it; other requests keep being served
    by the same event loop.

Connection Pooling Strategy:
    pool_size / max_overflow come from settings (10 + 10 by default).
    pool_pre_ping validates connections before use.
    pool_recycle=3600 recycles connections every hour.
    SQLite (used by the test suite) gets none of these; its dialect picks
    its own pool class.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from starlette.requests import Request

from pgnotes.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, used both by `Database.create_schema`
    and by Alembic autogenerate.
    """
    pass


def build_engine(config: Settings) -> AsyncEngine:
    """Create the async engine (and its pool) described by `config`."""
    engine_kwargs: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": config.log_level == "DEBUG",
    }
    if not config.is_sqlite:
        engine_kwargs.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(config.sqlalchemy_url, **engine_kwargs)


class Database:
    """
    Process-wide handle on the connection pool.

    Attributes:
        engine:          The async engine owning the pool
        session_factory: Produces one AsyncSession per repository operation

    expire_on_commit=False: Row attributes stay readable after commit
    without a second round-trip.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings
        self.engine = build_engine(self.config)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_schema(self) -> bool:
        """
        Ensure the notes table exists.

        What:  Runs CREATE TABLE for every registered model that is missing.
        When:  Once, during application startup, before traffic is accepted.
        How:   metadata.create_all checks for existing tables first, so
               calling it again is a no-op.

        Failures are logged and swallowed: the server still starts and the
        next request that needs the store gets a StorageError instead.

        Returns:
            True if the schema is in place, False if creation failed.
        """
        # Register models with Base.metadata
        from pgnotes.models import note  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception:
            logger.error("Error creating table", exc_info=True)
            return False

        logger.info('Table "notes" is ready.')
        return True

    async def ping(self) -> bool:
        """Run `SELECT 1` on a pooled connection; used by the health check."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database unreachable: %s", str(e))
            return False
        return True

    async def dispose(self) -> None:
        """
        What:  Closes all connections in the pool.
        When:  Called during application shutdown (lifespan handler).
        """
        await self.engine.dispose()


# ── Dependency ────────────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the pool handle created at startup.

    Example usage in a route:
        @router.get("/")
        async def index(database: Database = Depends(get_database)):
            ...
    """
    return request.app.state.database
