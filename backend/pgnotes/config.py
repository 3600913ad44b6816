"""
pgnotes: Application Configuration
====================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the database layer, the app factory and the CLI entry point.
When:  Loaded once at module import time.

Connection details follow the variable names used by the official
PostgreSQL container image (POSTGRES_USER, POSTGRES_DB, ...), so the same
.env file can feed both the database service and this app.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a default suitable for local/docker-compose development,
    where the database service is reachable under the hostname `db`.
    """

    # ── Database ──────────────────────────────────────────────────────────
    postgres_user: str = Field(default="myuser")
    # 'db' is the service name in docker-compose
    postgres_host: str = Field(default="db")
    postgres_db: str = Field(default="mydatabase")
    postgres_password: str = Field(default="mypassword")
    postgres_port: int = Field(default=5432, ge=1, le=65535)

    # What: Full SQLAlchemy URL; wins over the POSTGRES_* values when set
    # Used by tests (sqlite+aiosqlite) and by hosted databases that hand out a URL
    database_url: Optional[str] = Field(
        default=None,
        description="Async SQLAlchemy connection URL overriding POSTGRES_*",
    )

    # What: Connection pool sizing controls concurrent database operations
    # Valid range: 1-100 (PostgreSQL default max_connections is 100)
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)

    # What: Validates connections before use by sending a lightweight query
    # Catches stale connections after a database restart
    db_pool_pre_ping: bool = Field(default=True)

    # ── Server ────────────────────────────────────────────────────────────
    app_host: str = Field(default="0.0.0.0")
    app_port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # POSTGRES_USER and postgres_user both work
        "extra": "ignore",
    }

    @property
    def sqlalchemy_url(self) -> URL:
        """
        What: The effective connection URL for the async engine.
        How:  DATABASE_URL if given, otherwise assembled from POSTGRES_* for asyncpg.
        Why URL.create: Passwords with '@' or '/' are quoted correctly.
        """
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            drivername="postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        )

    @property
    def is_sqlite(self) -> bool:
        return self.sqlalchemy_url.get_backend_name() == "sqlite"


# Singleton instance, imported throughout the application
settings = Settings()
