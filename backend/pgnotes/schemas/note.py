"""
pgnotes: Pydantic Read Models
===============================

What:  Pydantic models for data leaving the repository and the health endpoint.
Why:   Handlers and templates work with validated, typed values instead of
       live ORM rows bound to a (by then closed) session.
How:   `from_attributes` lets the repository build them straight from rows;
       `status` is coerced into NoteStatus and `deleted` (SMALLINT) into bool.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from pgnotes.models.note import NoteStatus


class NoteRead(BaseModel):
    """
    What:  One note as read from the store.
    Who:   Returned by NoteRepository.list_notes() and get_by_id().
    """
    id: int = Field(description="Database-assigned note identifier")
    content: str = Field(description="Note text, stored verbatim")
    status: NoteStatus = Field(description="pending or done")
    deleted: bool = Field(default=False, description="Soft-delete flag")
    created_at: datetime = Field(description="Insertion time, used for newest-first sort")

    model_config = {"from_attributes": True}

    @property
    def is_done(self) -> bool:
        return self.status is NoteStatus.DONE


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for container health checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
