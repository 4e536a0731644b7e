"""Playbook persistence on top of a blob store.

Every playbook is one JSON document at `playbooks/{id}.json`. There is no
index: listing enumerates the prefix and fetches each object in turn.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from uuid import uuid4

from validation_playbooks.core.errors import PlaybookNotFoundError
from validation_playbooks.core.logging import get_logger
from validation_playbooks.core.time import next_updated_at, utcnow
from validation_playbooks.schemas.playbooks import Playbook

if TYPE_CHECKING:
    from validation_playbooks.schemas.playbooks import PlaybookCreate, PlaybookUpdate
    from validation_playbooks.storage.blobs import BlobStore

logger = get_logger(__name__)
KEY_PREFIX = "playbooks/"
KEY_SUFFIX = ".json"


def playbook_key(playbook_id: str) -> str:
    return f"{KEY_PREFIX}{playbook_id}{KEY_SUFFIX}"


def _decode(body: str) -> Playbook:
    return Playbook.model_validate(json.loads(body))


class PlaybookGateway:
    """get/list/put/delete for playbook records, last write wins."""

    def __init__(self, store: BlobStore) -> None:
        self.store = store

    async def list(self) -> list[Playbook]:
        keys = await self.store.list_keys(KEY_PREFIX)
        playbooks: list[Playbook] = []
        for key in keys:
            body = await self.store.get(key)
            if body is None:
                # Deleted between listing and fetching.
                continue
            playbooks.append(_decode(body))
        logger.debug("playbooks.store.list", extra={"count": len(playbooks)})
        return playbooks

    async def get(self, playbook_id: str) -> Playbook:
        body = await self.store.get(playbook_key(playbook_id))
        if body is None:
            raise PlaybookNotFoundError(playbook_id)
        return _decode(body)

    async def put(self, playbook_id: str, playbook: Playbook) -> Playbook:
        await self.store.put(
            playbook_key(playbook_id),
            json.dumps(playbook.to_document()),
            content_type="application/json",
        )
        logger.info("playbooks.store.put", extra={"playbook_id": playbook_id})
        return playbook

    async def delete(self, playbook_id: str) -> None:
        await self.store.delete(playbook_key(playbook_id))
        logger.info("playbooks.store.delete", extra={"playbook_id": playbook_id})

    async def create(self, payload: PlaybookCreate) -> Playbook:
        """Assign an id when missing, stamp both timestamps, and persist."""
        playbook_id = payload.id or str(uuid4())
        playbook = payload.to_playbook(playbook_id=playbook_id, now=utcnow())
        return await self.put(playbook_id, playbook)

    async def update(self, playbook_id: str, changes: PlaybookUpdate) -> Playbook:
        """Merge top-level fields into the stored record."""
        existing = await self.get(playbook_id)
        merged = existing.merged_with(
            changes,
            updated_at=next_updated_at(existing.updated_at),
        )
        return await self.put(playbook_id, merged)
