# Repositories package init
"""
pgnotes: Data Access Layer
============================

What:  Repositories sitting between routes (HTTP) and the database.
Why:   Routes handle status codes and redirects; repositories own SQL,
       connection lifecycle and the translation of driver failures.

Repository Inventory:
    - NoteRepository: list, get, insert, update, toggle, soft-delete notes
"""

from pgnotes.repositories.note_repository import NoteRepository, get_note_repository

__all__ = ["NoteRepository", "get_note_repository"]
