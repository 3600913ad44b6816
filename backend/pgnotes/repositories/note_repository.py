"""
pgnotes: Note Repository
==========================

What:  All SQL the application runs, one method per statement.
Why:   Keeps data access out of the route handlers and gives one place where
       database failures are logged and translated into StorageError.
How:   Each method opens an AsyncSession from the shared pool, executes
       exactly one parameterized statement, commits writes, and releases
       the connection when the `async with` block exits, whether it
       returns normally or raises.
Who:   Built per request by `get_note_repository`; called by routes/notes.py.

Error Handling Strategy:
    - Missing or empty content → ValidationError, raised before a connection is taken
    - Unknown id on get_by_id → NotFoundError (ids outside the INTEGER
      range cannot exist and are answered without a query)
    - Anything raised while talking to the database → logged with its
      traceback, re-raised as StorageError with an opaque message
    - Unknown id on update/toggle/delete → not an error (0 rows affected)
"""

import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import case, desc, select, update
from sqlalchemy.sql.dml import Update

from pgnotes.database import Database, get_database
from pgnotes.exceptions import NotFoundError, StorageError, ValidationError
from pgnotes.models.note import Note, NoteStatus
from pgnotes.schemas.note import NoteRead

logger = logging.getLogger(__name__)

EMPTY_CONTENT_MESSAGE = "Note content cannot be empty."

# Upper bound of the SERIAL / INTEGER primary key
MAX_NOTE_ID = 2**31 - 1


def _require_content(content: Optional[str]) -> str:
    """Presence check shared by insert and update."""
    if not content:
        raise ValidationError(message=EMPTY_CONTENT_MESSAGE, field="note")
    return content


def _is_storable_id(note_id: int) -> bool:
    return 1 <= note_id <= MAX_NOTE_ID


class NoteRepository:
    """
    Data access for the `notes` table.

    Responsibilities:
        - list_notes(): visible notes, newest first
        - get_by_id(): one note regardless of its deleted flag
        - insert() / update(): create or rewrite content
        - toggle_status(): flip pending ↔ done in a single UPDATE
        - soft_delete(): set the deleted flag

    The Database handle is passed in explicitly; the repository itself holds
    no other state and is cheap to build per request.
    """

    def __init__(self, database: Database):
        self._database = database

    async def list_notes(self) -> List[NoteRead]:
        """
        Return every note whose deleted flag is 0, newest first.

        Query plan:
            SELECT ... FROM notes WHERE deleted = 0
            ORDER BY created_at DESC, id DESC
            → id breaks ties between rows inserted within the same timestamp tick
        """
        logger.info("Fetching notes from the database...")
        query = (
            select(Note)
            .where(Note.deleted == 0)
            .order_by(desc(Note.created_at), desc(Note.id))
        )
        try:
            async with self._database.session_factory() as session:
                result = await session.execute(query)
                rows = result.scalars().all()
                return [NoteRead.model_validate(row) for row in rows]
        except Exception as e:
            logger.error("Error fetching notes: %s", str(e), exc_info=True)
            raise StorageError(
                message="Error connecting to the database",
                context={"operation": "list", "error_type": type(e).__name__},
            )

    async def get_by_id(self, note_id: int) -> NoteRead:
        """
        Fetch a single note by primary key.

        Soft-deleted notes are still returned (with deleted=True); only the
        listing hides them.

        Raises:
            NotFoundError: No row has this id (→ 404)
            StorageError:  Query execution failed (→ 500)
        """
        if not _is_storable_id(note_id):
            raise NotFoundError(resource="Note", resource_id=note_id)
        try:
            async with self._database.session_factory() as session:
                result = await session.execute(select(Note).where(Note.id == note_id))
                row = result.scalar_one_or_none()
                note = NoteRead.model_validate(row) if row is not None else None
        except Exception as e:
            logger.error("Error fetching note %s: %s", note_id, str(e), exc_info=True)
            raise StorageError(
                message="Error fetching note",
                context={"operation": "get", "note_id": note_id, "error_type": type(e).__name__},
            )

        if note is None:
            raise NotFoundError(resource="Note", resource_id=note_id)
        return note

    async def insert(self, content: Optional[str]) -> int:
        """
        Create a note with default status ('pending') and deleted flag (0).

        Args:
            content: Text from the `note` form field; stored verbatim

        Returns:
            The database-assigned id of the new note

        Raises:
            ValidationError: content missing or empty (no row is created)
            StorageError:    INSERT failed
        """
        content = _require_content(content)
        logger.info('Saving note: "%s"', content)
        try:
            async with self._database.session_factory() as session:
                note = Note(content=content)
                session.add(note)
                await session.commit()
                return note.id
        except Exception as e:
            logger.error("Error saving note: %s", str(e), exc_info=True)
            raise StorageError(
                message="Failed to save the note.",
                context={"operation": "insert", "error_type": type(e).__name__},
            )

    async def update(self, note_id: int, content: Optional[str]) -> int:
        """
        Rewrite the content of a note. An unknown id affects no rows and is
        not reported as an error.

        Returns:
            Number of rows affected (0 or 1)
        """
        content = _require_content(content)
        statement = update(Note).where(Note.id == note_id).values(content=content)
        return await self._execute_write(
            statement, note_id, operation="update", failure_message="Failed to update the note."
        )

    async def toggle_status(self, note_id: int) -> int:
        """
        Flip pending ↔ done.

        The flip happens inside the UPDATE (CASE on the current value), so no
        read-modify-write round trip is needed.
        """
        flipped = case(
            (Note.status == NoteStatus.DONE.value, NoteStatus.DONE.toggled().value),
            else_=NoteStatus.PENDING.toggled().value,
        )
        statement = update(Note).where(Note.id == note_id).values(status=flipped)
        return await self._execute_write(
            statement, note_id, operation="toggle", failure_message="Failed to toggle note status."
        )

    async def soft_delete(self, note_id: int) -> int:
        """Set the deleted flag. The row is kept; listings stop showing it."""
        statement = update(Note).where(Note.id == note_id).values(deleted=1)
        return await self._execute_write(
            statement, note_id, operation="delete", failure_message="Failed to delete the note."
        )

    async def _execute_write(
        self,
        statement: Update,
        note_id: int,
        operation: str,
        failure_message: str,
    ) -> int:
        if not _is_storable_id(note_id):
            return 0
        try:
            async with self._database.session_factory() as session:
                result = await session.execute(
                    statement.execution_options(synchronize_session=False)
                )
                await session.commit()
                return result.rowcount
        except Exception as e:
            logger.error("Error during %s of note %s: %s", operation, note_id, str(e), exc_info=True)
            raise StorageError(
                message=failure_message,
                context={"operation": operation, "note_id": note_id, "error_type": type(e).__name__},
            )


def get_note_repository(database: Database = Depends(get_database)) -> NoteRepository:
    """FastAPI dependency: a repository bound to the app's connection pool."""
    return NoteRepository(database)
