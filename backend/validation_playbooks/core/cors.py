"""Permissive CORS headers and preflight short-circuit for the JSON API."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOW_HEADERS = "Content-Type"


class ApiCorsMiddleware:
    """Attach CORS headers to API responses and answer preflights with 204."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        path_prefix: str = "/api/",
        allow_origin: str = "",
    ) -> None:
        self.app = app
        self.path_prefix = path_prefix
        self.allow_origin = allow_origin.strip()

    def _origin_for(self, scope: Scope) -> str:
        if self.allow_origin:
            return self.allow_origin
        for name, value in scope.get("headers", []):
            if name == b"origin" and value:
                return value.decode("latin-1")
        return "*"

    def _cors_headers(self, scope: Scope) -> list[tuple[bytes, bytes]]:
        return [
            (b"access-control-allow-origin", self._origin_for(scope).encode("latin-1")),
            (b"access-control-allow-methods", ALLOW_METHODS.encode("latin-1")),
            (b"access-control-allow-headers", ALLOW_HEADERS.encode("latin-1")),
        ]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not scope.get("path", "").startswith(self.path_prefix):
            await self.app(scope, receive, send)
            return

        cors_headers = self._cors_headers(scope)
        if scope.get("method") == "OPTIONS":
            await send({"type": "http.response.start", "status": 204, "headers": cors_headers})
            await send({"type": "http.response.body", "body": b"", "more_body": False})
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                present = {name.lower() for name, _value in headers}
                headers.extend(
                    (name, value) for name, value in cors_headers if name not in present
                )
                message = {**message, "headers": headers}
            await send(message)

        await self.app(scope, receive, send_with_cors)
