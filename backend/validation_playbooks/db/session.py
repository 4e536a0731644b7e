"""Database engine, session factory, and startup schema helpers."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from validation_playbooks import models as _models
from validation_playbooks.core.config import settings
from validation_playbooks.core.logging import get_logger

# Import model modules so SQLModel metadata is fully registered at startup.
_MODEL_REGISTRY = _models


def _normalize_database_url(database_url: str) -> str:
    if "://" not in database_url:
        return database_url
    scheme, rest = database_url.split("://", 1)
    if scheme == "postgresql":
        return f"postgresql+psycopg://{rest}"
    if scheme == "sqlite":
        return f"sqlite+aiosqlite://{rest}"
    return database_url


async_engine: AsyncEngine = create_async_engine(
    _normalize_database_url(settings.database_url),
    pool_pre_ping=True,
)
async_session_maker = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)
logger = get_logger(__name__)


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create the blob table when it does not exist yet."""
    target = engine or async_engine
    async with target.connect() as conn, conn.begin():
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("db.schema.ready", extra={"dialect": target.dialect.name})

