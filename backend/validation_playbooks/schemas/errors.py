"""Structured error payload schemas used by API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body returned for not-found, validation, and server failures."""

    error: str | list[object] = Field(
        description="Human-readable message, or the list of field issues for 422s.",
        examples=["Playbook not found"],
    )
    request_id: str | None = Field(
        default=None,
        description="Request correlation identifier injected by middleware.",
    )
