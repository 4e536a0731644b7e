"""Static file serving for the single-page frontend bundle."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import PlainTextResponse
from starlette.staticfiles import StaticFiles

from validation_playbooks.core.logging import get_logger

if TYPE_CHECKING:
    from starlette.responses import Response
    from starlette.types import Scope

ENTRY_DOCUMENT = "index.html"
MISSING_BUNDLE_MESSAGE = "Application not found. Please ensure the frontend is built."
logger = get_logger(__name__)


class SinglePageApp(StaticFiles):
    """Serve built assets, routing unknown client-side paths to the entry document.

    Paths that look like files (they have a suffix) and do not exist stay 404s;
    everything else falls back to `index.html` so the frontend router can
    resolve it.
    """

    def __init__(self, *, directory: str) -> None:
        super().__init__(directory=directory, html=True, check_dir=False)

    async def check_config(self) -> None:
        # A missing bundle is reported per request, not as a server error.
        if self.directory is not None and not Path(self.directory).is_dir():
            return
        await super().check_config()

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404 or PurePosixPath(path).suffix:
                raise
        try:
            return await super().get_response(ENTRY_DOCUMENT, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404:
                raise
            logger.warning("spa.entry_document.missing", extra={"directory": str(self.directory)})
            return PlainTextResponse(MISSING_BUNDLE_MESSAGE, status_code=404)
