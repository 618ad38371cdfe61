# Services package init
"""
Notes API — Services Layer
============================

What:  Business logic sitting between routes (HTTP) and the database.

Service Inventory:
    - NoteStore: validated create, list, get by id and idempotent delete
      over the notes table
"""
