# Routes package init
"""
pgnotes: Routes Package
=========================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notes.py:   GET  /, GET /edit/{id}
                  POST /submit, /update/{id}, /toggle/{id}, /delete/{id}
    - health.py:  GET  /health

Design Principle:
    Routes are THIN: read path/form values, call the repository, then
    render a page or redirect. SQL lives in the repository, markup in the
    templates.
"""
