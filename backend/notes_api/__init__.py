"""
Notes API — Application Package Initializer
=============================================

What: Marks the `notes_api` directory as a Python package.
Who:  Imported by uvicorn, pytest, and the `notes-api` console script.

Architecture Note:
    The backend is a thin layered service:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP verbs, paths, status codes
    ├─────────────────────────────────────┤
    │      Note Store (Service Layer)     │  ← create / list / get / delete
    ├─────────────────────────────────────┤
    │   Schemas, Ids & Models (Data)      │  ← validation, id codec, ORM table
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine + sessions
    └─────────────────────────────────────┘

    Routes translate HTTP into store calls and store errors back into HTTP.
    The store never sees a Request object; it only sees validated values.
"""

__version__ = "1.0.0"
