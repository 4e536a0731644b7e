"""Model exports for SQLAlchemy/SQLModel metadata discovery."""

from validation_playbooks.models.stored_objects import StoredObject

__all__ = [
    "StoredObject",
]
