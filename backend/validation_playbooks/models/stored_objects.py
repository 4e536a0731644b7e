"""Key/value rows backing the database blob store."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel

from validation_playbooks.core.time import utcnow

RUNTIME_ANNOTATION_TYPES = (datetime,)


class StoredObject(SQLModel, table=True):
    """One opaque object body addressed by its store key."""

    __tablename__ = "stored_objects"  # pyright: ignore[reportAssignmentType]

    key: str = Field(primary_key=True, max_length=512)
    body: str = Field(sa_column=Column(Text, nullable=False))
    content_type: str = Field(default="application/json")
    updated_at: datetime = Field(default_factory=utcnow)
