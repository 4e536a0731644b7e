"""Application settings and environment configuration loading."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from validation_playbooks.core.storage_backend import StorageBackend

BACKEND_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_ENV_FILE = BACKEND_ROOT / ".env"


class Settings(BaseSettings):
    """Typed runtime configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        # Load `backend/.env` regardless of current working directory.
        env_file=[DEFAULT_ENV_FILE, ".env"],
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "dev"

    # Blob store selection
    storage_backend: StorageBackend = StorageBackend.DATABASE
    database_url: str = "sqlite+aiosqlite:///./playbooks.db"
    blob_root: str = "./data/blobs"

    # Empty means reflect the caller's Origin (or `*` when absent).
    cors_allow_origin: str = ""

    # Built single-page app served for every non-API path.
    static_dir: str = "./frontend/dist"

    # Authoring client
    api_base_url: str = "http://localhost:8000/api"
    local_store_path: str = "~/.validation-playbooks/playbooks.json"
    client_timeout_seconds: float | None = Field(default=None, gt=0)

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"
    log_use_utc: bool = False
    request_log_slow_ms: int = Field(default=1000, ge=0)
    request_log_include_health: bool = False

    @model_validator(mode="after")
    def _defaults(self) -> Self:
        if self.storage_backend == StorageBackend.FILESYSTEM and not self.blob_root.strip():
            raise ValueError(
                "BLOB_ROOT must be set and non-empty when STORAGE_BACKEND=filesystem.",
            )
        if self.log_format not in {"text", "json"}:
            raise ValueError("LOG_FORMAT must be one of: text, json.")
        return self


settings = Settings()
