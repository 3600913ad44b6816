"""
pgnotes: HTML View Renderer
=============================

What:  Pure functions turning notes into complete HTML pages.
Why:   Keeps markup out of the route handlers and out of Python strings.
How:   Jinja2 templates shipped inside the package (pgnotes/templates/),
       rendered with autoescaping on, so any note content is HTML-escaped
       wherever it is interpolated ("a<b>" is emitted as "a&lt;b&gt;").
Who:   Called by routes/notes.py for the GET pages.

No state and no I/O beyond reading the templates once per process.
"""

from typing import Sequence

from jinja2 import Environment, PackageLoader, select_autoescape

from pgnotes.schemas.note import NoteRead

# Autoescaping is what makes user content safe to interpolate
templates = Environment(
    loader=PackageLoader("pgnotes", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_index(notes: Sequence[NoteRead]) -> str:
    """Listing page: the new-note form followed by every visible note."""
    return templates.get_template("index.html").render(notes=notes)


def render_edit(note: NoteRead) -> str:
    """Edit page: a single textarea pre-filled with the note's current content."""
    return templates.get_template("edit.html").render(note=note)
