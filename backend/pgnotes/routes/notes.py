"""
pgnotes: Notes Route Handlers
===============================

What:  The six HTML/form endpoints of the app.
Why:   Maps each method + path to one repository call.
How:   GET routes render a page; POST routes redirect back to the listing
       with 302 Found so the browser follows up with a GET.
Who:   Called by the browser (forms on the listing and edit pages).

Routing table:
    GET  /               → listing page
    GET  /edit/{id}      → edit page (404 if the id is unknown)
    POST /submit         → insert, form field `note`
    POST /update/{id}    → rewrite content, form field `note`
    POST /toggle/{id}    → flip pending ↔ done
    POST /delete/{id}    → soft delete

Failures raise from the repository (ValidationError, NotFoundError,
StorageError) and are turned into plain-text responses by the handlers
registered in main.py, so none of these functions needs try/except.

`{note_id:int}` uses Starlette's int convertor: a non-numeric id matches no
route at all and gets the framework's plain 404.
"""

import logging

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from pgnotes.repositories.note_repository import NoteRepository, get_note_repository
from pgnotes.views import render_edit, render_index

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


def _back_to_list() -> RedirectResponse:
    # RedirectResponse defaults to 307, which would replay the POST
    return RedirectResponse(url="/", status_code=302)


@router.get("/", response_class=HTMLResponse, summary="List notes")
async def index(repository: NoteRepository = Depends(get_note_repository)) -> HTMLResponse:
    """Render every visible note, newest first, under the new-note form."""
    notes = await repository.list_notes()
    return HTMLResponse(render_index(notes))


@router.get("/edit/{note_id:int}", response_class=HTMLResponse, summary="Edit page for one note")
async def edit_note(
    note_id: int,
    repository: NoteRepository = Depends(get_note_repository),
) -> HTMLResponse:
    note = await repository.get_by_id(note_id)
    return HTMLResponse(render_edit(note))


# `note` defaults to "" so a missing field reaches the repository's presence
# check (400) instead of FastAPI's 422
@router.post("/submit", summary="Create a note")
async def submit_note(
    note: str = Form(default=""),
    repository: NoteRepository = Depends(get_note_repository),
) -> RedirectResponse:
    await repository.insert(note)
    return _back_to_list()


@router.post("/update/{note_id:int}", summary="Rewrite a note's content")
async def update_note(
    note_id: int,
    note: str = Form(default=""),
    repository: NoteRepository = Depends(get_note_repository),
) -> RedirectResponse:
    """Unknown ids are a silent no-op; the browser lands on the listing either way."""
    affected = await repository.update(note_id, note)
    if not affected:
        logger.info("Update of note %s matched no rows", note_id)
    return _back_to_list()


@router.post("/toggle/{note_id:int}", summary="Flip a note between pending and done")
async def toggle_note(
    note_id: int,
    repository: NoteRepository = Depends(get_note_repository),
) -> RedirectResponse:
    await repository.toggle_status(note_id)
    return _back_to_list()


@router.post("/delete/{note_id:int}", summary="Soft-delete a note")
async def delete_note(
    note_id: int,
    repository: NoteRepository = Depends(get_note_repository),
) -> RedirectResponse:
    await repository.soft_delete(note_id)
    return _back_to_list()
