"""Object stores addressed by string keys.

Each store holds opaque text bodies. Writes overwrite unconditionally and
deleting a missing key is a no-op, matching typical object-store semantics.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Protocol
from uuid import uuid4

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select

from validation_playbooks.core.time import utcnow
from validation_playbooks.models.stored_objects import StoredObject

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import async_sessionmaker
    from sqlmodel.ext.asyncio.session import AsyncSession

DEFAULT_CONTENT_TYPE = "application/json"
# In-flight filesystem writes: `.{name}.{32 hex}.tmp` beside the target file.
_TMP_NAME = re.compile(r"^\..+\.[0-9a-f]{32}\.tmp$")
# Dialects with a native INSERT .. ON CONFLICT DO UPDATE.
_UPSERT_INSERTS = {"sqlite": sqlite.insert, "postgresql": postgresql.insert}


class BlobStore(Protocol):
    """Minimal async object-store contract."""

    async def list_keys(self, prefix: str = "") -> list[str]: ...

    async def get(self, key: str) -> str | None: ...

    async def put(
        self,
        key: str,
        body: str,
        *,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> None: ...

    async def delete(self, key: str) -> None: ...


class MemoryBlobStore:
    """Dict-backed store for tests and throwaway runs."""

    def __init__(self) -> None:
        self._objects: dict[str, tuple[str, str]] = {}

    async def list_keys(self, prefix: str = "") -> list[str]:
        return sorted(key for key in self._objects if key.startswith(prefix))

    async def get(self, key: str) -> str | None:
        stored = self._objects.get(key)
        return stored[0] if stored is not None else None

    async def put(
        self,
        key: str,
        body: str,
        *,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> None:
        self._objects[key] = (body, content_type)

    async def delete(self, key: str) -> None:
        self._objects.pop(key, None)


class DatabaseBlobStore:
    """Objects stored as rows of the `stored_objects` table."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def list_keys(self, prefix: str = "") -> list[str]:
        statement = select(StoredObject.key).order_by(col(StoredObject.key))
        if prefix:
            statement = statement.where(col(StoredObject.key).startswith(prefix))
        async with self._session_maker() as session:
            result = await session.exec(statement)
            return list(result.all())

    async def get(self, key: str) -> str | None:
        async with self._session_maker() as session:
            stored = await session.get(StoredObject, key)
            return stored.body if stored is not None else None

    async def put(
        self,
        key: str,
        body: str,
        *,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> None:
        values: dict[str, object] = {
            "key": key,
            "body": body,
            "content_type": content_type,
            "updated_at": utcnow(),
        }
        async with self._session_maker() as session:
            insert = _UPSERT_INSERTS.get(session.get_bind().dialect.name)
            if insert is not None:
                statement = insert(StoredObject).values(**values)
                statement = statement.on_conflict_do_update(
                    index_elements=["key"],
                    set_={
                        "body": statement.excluded.body,
                        "content_type": statement.excluded.content_type,
                        "updated_at": statement.excluded.updated_at,
                    },
                )
                await session.exec(statement)  # type: ignore[call-overload]
                await session.commit()
                return
            try:
                await self._put_portable(session, values)
            except IntegrityError:
                # A concurrent writer created the row first; overwrite it.
                await session.rollback()
                await self._put_portable(session, values)

    @staticmethod
    async def _put_portable(session: AsyncSession, values: dict[str, object]) -> None:
        stored = await session.get(StoredObject, values["key"])
        if stored is None:
            session.add(StoredObject(**values))
        else:
            for field, value in values.items():
                setattr(stored, field, value)
            session.add(stored)
        await session.commit()

    async def delete(self, key: str) -> None:
        async with self._session_maker() as session:
            stored = await session.get(StoredObject, key)
            if stored is None:
                return
            await session.delete(stored)
            await session.commit()


class FilesystemBlobStore:
    """One file per key beneath a root directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser()

    def _path_for(self, key: str) -> Path:
        relative = PurePosixPath(key)
        if (
            not key
            or relative.is_absolute()
            or ".." in relative.parts
            or _TMP_NAME.match(relative.name)
        ):
            raise ValueError(f"Invalid object key: {key!r}")
        return self.root.joinpath(*relative.parts)

    def _list_sync(self, prefix: str) -> list[str]:
        if not self.root.is_dir():
            return []
        keys = (
            path.relative_to(self.root).as_posix()
            for path in self.root.rglob("*")
            if path.is_file() and not _TMP_NAME.match(path.name)
        )
        return sorted(key for key in keys if key.startswith(prefix))

    def _get_sync(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _put_sync(self, key: str, body: str) -> None:
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(f".{path.name}.{uuid4().hex}.tmp")
        tmp.write_text(body, encoding="utf-8")
        tmp.replace(path)

    def _delete_sync(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    async def list_keys(self, prefix: str = "") -> list[str]:
        return await asyncio.to_thread(self._list_sync, prefix)

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._get_sync, key)

    async def put(
        self,
        key: str,
        body: str,
        *,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> None:
        # Content type is implied by the key suffix on disk.
        _ = content_type
        await asyncio.to_thread(self._put_sync, key, body)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._delete_sync, key)
