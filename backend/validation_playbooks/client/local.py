"""On-disk playbook store used when the API cannot be reached.

All playbooks live in one JSON array, the same shape a browser keeps in
local storage. Nothing here ever syncs back to the API.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

from pydantic import ValidationError

from validation_playbooks.core.errors import PlaybookNotFoundError
from validation_playbooks.core.logging import get_logger
from validation_playbooks.core.time import next_updated_at, utcnow
from validation_playbooks.schemas.playbooks import Playbook

if TYPE_CHECKING:
    from validation_playbooks.schemas.playbooks import PlaybookCreate, PlaybookUpdate

logger = get_logger(__name__)


class LocalPlaybookStore:
    """Playbook store backed by a single JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> list[Playbook]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError:
            logger.exception("playbooks.local.read_failed", extra={"path": str(self.path)})
            return []
        try:
            return [Playbook.model_validate(item) for item in json.loads(raw)]
        except (ValueError, TypeError, ValidationError):
            logger.exception("playbooks.local.corrupt", extra={"path": str(self.path)})
            return []

    def _write(self, playbooks: list[Playbook]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        body = json.dumps([playbook.to_document() for playbook in playbooks], indent=2)
        tmp = self.path.with_name(f".{self.path.name}.tmp")
        tmp.write_text(body, encoding="utf-8")
        tmp.replace(self.path)

    def _save(self, playbook: Playbook) -> Playbook:
        playbooks = [item for item in self._read() if item.id != playbook.id]
        playbooks.append(playbook)
        self._write(playbooks)
        return playbook

    def _update(self, playbook_id: str, changes: PlaybookUpdate) -> Playbook:
        playbooks = self._read()
        for index, existing in enumerate(playbooks):
            if existing.id == playbook_id:
                updated = existing.merged_with(
                    changes,
                    updated_at=next_updated_at(existing.updated_at),
                )
                playbooks[index] = updated
                self._write(playbooks)
                return updated
        raise PlaybookNotFoundError(playbook_id)

    def _delete(self, playbook_id: str) -> None:
        playbooks = self._read()
        remaining = [item for item in playbooks if item.id != playbook_id]
        if len(remaining) != len(playbooks):
            self._write(remaining)

    async def list_playbooks(self) -> list[Playbook]:
        return await asyncio.to_thread(self._read)

    async def get_playbook(self, playbook_id: str) -> Playbook:
        for playbook in await self.list_playbooks():
            if playbook.id == playbook_id:
                return playbook
        raise PlaybookNotFoundError(playbook_id)

    async def create_playbook(self, payload: PlaybookCreate) -> Playbook:
        now = utcnow()
        playbook = payload.to_playbook(playbook_id=payload.id or str(uuid4()), now=now)
        return await asyncio.to_thread(self._save, playbook)

    async def update_playbook(self, playbook_id: str, changes: PlaybookUpdate) -> Playbook:
        return await asyncio.to_thread(self._update, playbook_id, changes)

    async def delete_playbook(self, playbook_id: str) -> None:
        await asyncio.to_thread(self._delete, playbook_id)
