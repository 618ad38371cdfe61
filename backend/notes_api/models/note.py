"""
Notes API — Note SQLAlchemy Model
===================================

What:  ORM model representing the `notes` table.
How:   Inherits from the declarative Base in notes_api.database; the table is
       created at startup by Database.create_all().
Who:   Used by NoteStore for create / list / get / delete.

Table Design:
    - id:        24-char hex token minted by notes_api.ids (time-prefixed,
                 so ordering by id is creation order)
    - content:   Note text, never empty
    - important: Importance flag, defaults to false
"""

from sqlalchemy import Boolean, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base
from notes_api.ids import NOTE_ID_LENGTH, new_note_id


class Note(Base):
    """
    A short text note.

    Lifecycle:
        1. Inserted by NoteStore.create() (id assigned here)
        2. Read and listed freely
        3. Deleted by id; the id is never minted again
    Notes are never updated after creation.
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(NOTE_ID_LENGTH),
        primary_key=True,
        default=new_note_id,
        comment="Native note id (24 hex chars)",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note text (non-empty)",
    )

    important: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Importance flag",
    )

    def to_dict(self) -> dict:
        """JSON shape of a note: id, content, important."""
        return {"id": self.id, "content": self.content, "important": self.important}

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Note(id={self.id}, important={self.important})>"
