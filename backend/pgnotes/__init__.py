"""
pgnotes: Application Package Initializer
==========================================

What: Marks the `pgnotes` directory as a Python package.
Why:  Enables module imports like `from pgnotes.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The app is a small server-rendered notes list, layered like this:

    ┌─────────────────────────────────────┐
    │      Routes + Views (HTTP / HTML)   │  ← status codes, redirects, templates
    ├─────────────────────────────────────┤
    │      Repository (Data Access)       │  ← one statement per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async engine + connection pool
    └─────────────────────────────────────┘

    Routes never touch SQL; the repository never builds HTML.
"""

__version__ = "1.0.0"
