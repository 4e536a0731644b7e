"""Shared storage-backend enum values."""

from __future__ import annotations

from enum import Enum


class StorageBackend(str, Enum):
    """Supported blob store implementations for persisted playbooks."""

    DATABASE = "database"
    FILESYSTEM = "filesystem"
    MEMORY = "memory"
