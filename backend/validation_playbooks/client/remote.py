"""HTTP client for the playbook API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from validation_playbooks.core.errors import TransportFailure
from validation_playbooks.schemas.playbooks import Playbook

if TYPE_CHECKING:
    from validation_playbooks.schemas.playbooks import PlaybookCreate, PlaybookUpdate


class RemotePlaybookStore:
    """Talks to `/api/playbooks`; any failure surfaces as `TransportFailure`.

    A non-2xx status counts as a failure too, including 404, so the caller's
    fallback policy decides what happens next.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            raise TransportFailure(operation, str(exc) or type(exc).__name__) from exc
        if response.is_error:
            raise TransportFailure(
                operation,
                f"HTTP {response.status_code} {response.reason_phrase}",
            )
        return response

    @staticmethod
    def _parse(operation: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportFailure(operation, "response was not JSON") from exc

    def _playbook(self, operation: str, response: httpx.Response) -> Playbook:
        try:
            return Playbook.model_validate(self._parse(operation, response))
        except ValidationError as exc:
            raise TransportFailure(operation, "response was not a playbook") from exc

    async def list_playbooks(self) -> list[Playbook]:
        response = await self._request("list", "GET", "/playbooks")
        body = self._parse("list", response)
        if not isinstance(body, list):
            raise TransportFailure("list", "response was not a list")
        try:
            return [Playbook.model_validate(item) for item in body]
        except ValidationError as exc:
            raise TransportFailure("list", "response was not a playbook list") from exc

    async def get_playbook(self, playbook_id: str) -> Playbook:
        response = await self._request("get", "GET", f"/playbooks/{playbook_id}")
        return self._playbook("get", response)

    async def create_playbook(self, payload: PlaybookCreate) -> Playbook:
        response = await self._request(
            "create",
            "POST",
            "/playbooks",
            json=payload.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return self._playbook("create", response)

    async def update_playbook(self, playbook_id: str, changes: PlaybookUpdate) -> Playbook:
        response = await self._request(
            "update",
            "PUT",
            f"/playbooks/{playbook_id}",
            json=changes.model_dump(mode="json", by_alias=True, exclude_unset=True),
        )
        return self._playbook("update", response)

    async def delete_playbook(self, playbook_id: str) -> None:
        await self._request("delete", "DELETE", f"/playbooks/{playbook_id}")
