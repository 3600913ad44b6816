"""
pgnotes: Settings Tests
=========================

What:  Environment-driven configuration and URL assembly.
How:   monkeypatch the environment, build a fresh Settings without .env.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from pgnotes.config import Settings

POSTGRES_VARS = (
    "DATABASE_URL",
    "POSTGRES_USER",
    "POSTGRES_HOST",
    "POSTGRES_DB",
    "POSTGRES_PASSWORD",
    "POSTGRES_PORT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in POSTGRES_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_for_local_development(clean_env):
    settings = Settings(_env_file=None)

    assert settings.postgres_user == "myuser"
    assert settings.postgres_host == "db"
    assert settings.postgres_db == "mydatabase"
    assert settings.postgres_password == "mypassword"
    assert settings.postgres_port == 5432
    assert settings.app_port == 3000
    assert settings.is_sqlite is False
    assert (
        settings.sqlalchemy_url.render_as_string(hide_password=False)
        == "postgresql+asyncpg://myuser:mypassword@db:5432/mydatabase"
    )


def test_postgres_variables_override_defaults(clean_env):
    clean_env.setenv("POSTGRES_USER", "notes")
    clean_env.setenv("POSTGRES_HOST", "localhost")
    clean_env.setenv("POSTGRES_DB", "notes_db")
    clean_env.setenv("POSTGRES_PASSWORD", "p@ss/word")
    clean_env.setenv("POSTGRES_PORT", "6543")

    url = Settings(_env_file=None).sqlalchemy_url

    assert url.username == "notes"
    assert url.password == "p@ss/word"
    assert url.host == "localhost"
    assert url.port == 6543
    assert url.database == "notes_db"


def test_database_url_wins(clean_env):
    clean_env.setenv("POSTGRES_HOST", "ignored")
    clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///./local.db")

    settings = Settings(_env_file=None)

    assert settings.is_sqlite is True
    assert settings.sqlalchemy_url.database == "./local.db"


def test_log_level_normalized(clean_env):
    clean_env.setenv("LOG_LEVEL", "debug")
    assert Settings(_env_file=None).log_level == "DEBUG"


def test_invalid_log_level_rejected(clean_env):
    clean_env.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(PydanticValidationError):
        Settings(_env_file=None)


def test_invalid_port_rejected(clean_env):
    clean_env.setenv("POSTGRES_PORT", "0")
    with pytest.raises(PydanticValidationError):
        Settings(_env_file=None)
