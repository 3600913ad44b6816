"""
pgnotes: Note SQLAlchemy Model
================================

What:  ORM model representing the `notes` table, plus the NoteStatus enum.
Why:   Maps Python objects to database rows for type-safe statements.
Who:   Used by NoteRepository for all statements and by Database.create_schema
       and Alembic for schema management.

Table Design:
    - id: SERIAL primary key, assigned by the database, never changed
    - content: TEXT, no length limit; emptiness is rejected before insert
    - status: 'pending' | 'done' stored as VARCHAR(20)
    - deleted: SMALLINT soft-delete flag (0 = visible, 1 = deleted); rows
      are never physically removed
    - created_at: UTC with timezone, used for newest-first listing

    Index on created_at DESC:
        Serves the only listing query (ORDER BY created_at DESC).
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, SmallInteger, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from pgnotes.database import Base


class NoteStatus(str, enum.Enum):
    """Completion state of a note. Exactly two values; toggling flips between them."""

    PENDING = "pending"
    DONE = "done"

    def toggled(self) -> "NoteStatus":
        return NoteStatus.PENDING if self is NoteStatus.DONE else NoteStatus.DONE

    @property
    def action_label(self) -> str:
        """Label of the button that moves the note to the other state."""
        return "Undo" if self is NoteStatus.DONE else "Done"


class Note(Base):
    """
    A single user note.

    Lifecycle:
        1. Inserted with content only (status='pending', deleted=0)
        2. Content rewritten in place by an update; status flipped by a toggle
        3. "Destroyed" by setting deleted=1; the row stays in the table

    Query Patterns:
        - Listing: WHERE deleted = 0 ORDER BY created_at DESC
        - Edit page: WHERE id = :id (primary key lookup, no deleted filter)
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=NoteStatus.PENDING.value,
        server_default=text("'pending'"),
    )

    deleted: Mapped[int] = mapped_column(
        SmallInteger,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    # Client-side default gives microsecond resolution; CURRENT_TIMESTAMP
    # covers rows inserted outside the app
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, status='{self.status}', "
            f"deleted={self.deleted}, created_at='{self.created_at}')>"
        )
