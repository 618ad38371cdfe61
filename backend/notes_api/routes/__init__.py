# Routes package init
"""
Notes API — API Routes Package
================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notes.py:   GET    /api/notes        (list notes)
                  GET    /api/notes/{id}   (get single note)
                  POST   /api/notes        (create note)
                  DELETE /api/notes/{id}   (delete note)
    - health.py:  GET    /health           (service health check)

Routes stay thin: parse inputs, call the note store, return the result.
Error translation lives in the global exception handlers (main.py).
"""
