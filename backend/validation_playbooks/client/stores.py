"""Store contract shared by the remote API client and the local fallback."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

from validation_playbooks.core.errors import TransportFailure
from validation_playbooks.core.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from validation_playbooks.schemas.playbooks import (
        Playbook,
        PlaybookCreate,
        PlaybookUpdate,
    )

logger = get_logger(__name__)
T = TypeVar("T")


class PlaybookStore(Protocol):
    """Operations the authoring surface needs from whichever store answers."""

    async def list_playbooks(self) -> list[Playbook]: ...

    async def get_playbook(self, playbook_id: str) -> Playbook: ...

    async def create_playbook(self, payload: PlaybookCreate) -> Playbook: ...

    async def update_playbook(self, playbook_id: str, changes: PlaybookUpdate) -> Playbook: ...

    async def delete_playbook(self, playbook_id: str) -> None: ...


class FallbackPlaybookStore:
    """Route each call to `primary`, re-issuing it on `fallback` on transport failure.

    There is no retry and no reconciliation: once the primary is reachable
    again, writes made to the fallback stay where they are.
    """

    def __init__(self, primary: PlaybookStore, fallback: PlaybookStore) -> None:
        self.primary = primary
        self.fallback = fallback

    async def _call(
        self,
        operation: str,
        call: Callable[[PlaybookStore], Awaitable[T]],
    ) -> T:
        try:
            return await call(self.primary)
        except TransportFailure as exc:
            logger.info(
                "playbooks.client.fallback",
                extra={"operation": operation, "reason": exc.reason},
            )
        return await call(self.fallback)

    async def list_playbooks(self) -> list[Playbook]:
        return await self._call("list", lambda store: store.list_playbooks())

    async def get_playbook(self, playbook_id: str) -> Playbook:
        return await self._call("get", lambda store: store.get_playbook(playbook_id))

    async def create_playbook(self, payload: PlaybookCreate) -> Playbook:
        return await self._call("create", lambda store: store.create_playbook(payload))

    async def update_playbook(self, playbook_id: str, changes: PlaybookUpdate) -> Playbook:
        return await self._call(
            "update",
            lambda store: store.update_playbook(playbook_id, changes),
        )

    async def delete_playbook(self, playbook_id: str) -> None:
        await self._call("delete", lambda store: store.delete_playbook(playbook_id))
