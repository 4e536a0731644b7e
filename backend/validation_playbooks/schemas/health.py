"""Health and readiness probe response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthStatusResponse(BaseModel):
    """Standard payload for service liveness/readiness checks."""

    ok: bool = Field(
        description="Indicates whether the probe check succeeded.",
        examples=[True],
    )
