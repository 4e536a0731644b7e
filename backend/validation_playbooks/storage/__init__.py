"""Blob stores and the playbook gateway built on top of them."""

from validation_playbooks.storage.blobs import (
    BlobStore,
    DatabaseBlobStore,
    FilesystemBlobStore,
    MemoryBlobStore,
)
from validation_playbooks.storage.gateway import PlaybookGateway, playbook_key

__all__ = [
    "BlobStore",
    "DatabaseBlobStore",
    "FilesystemBlobStore",
    "MemoryBlobStore",
    "PlaybookGateway",
    "playbook_key",
]
