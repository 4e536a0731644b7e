"""Reusable FastAPI dependencies for the playbook API.

Routers ask for a `PlaybookGateway` instead of building one, so tests can
swap the backing store with `app.dependency_overrides[get_gateway]`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, status

from validation_playbooks.core.config import Settings, settings
from validation_playbooks.core.errors import PlaybookNotFoundError
from validation_playbooks.core.storage_backend import StorageBackend
from validation_playbooks.schemas.playbooks import Playbook
from validation_playbooks.storage.blobs import (
    DatabaseBlobStore,
    FilesystemBlobStore,
    MemoryBlobStore,
)
from validation_playbooks.storage.gateway import PlaybookGateway

if TYPE_CHECKING:
    from validation_playbooks.storage.blobs import BlobStore

PLAYBOOK_NOT_FOUND = "Playbook not found"


def build_blob_store(config: Settings) -> BlobStore:
    """Instantiate the blob store selected by `STORAGE_BACKEND`."""
    if config.storage_backend == StorageBackend.FILESYSTEM:
        return FilesystemBlobStore(config.blob_root)
    if config.storage_backend == StorageBackend.MEMORY:
        return MemoryBlobStore()
    from validation_playbooks.db.session import async_session_maker

    return DatabaseBlobStore(async_session_maker)


@lru_cache(maxsize=1)
def get_gateway() -> PlaybookGateway:
    """Process-wide gateway over the configured blob store."""
    return PlaybookGateway(build_blob_store(settings))


GATEWAY_DEP = Depends(get_gateway)


async def get_playbook_or_404(
    playbook_id: str,
    gateway: PlaybookGateway = GATEWAY_DEP,
) -> Playbook:
    try:
        return await gateway.get(playbook_id)
    except PlaybookNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=PLAYBOOK_NOT_FOUND,
        ) from exc
