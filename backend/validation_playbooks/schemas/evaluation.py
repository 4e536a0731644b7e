"""Payloads for replaying decision-tree answers against a playbook."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from validation_playbooks.schemas.playbooks import EscalationPath, WireModel


class EvaluationStatus(str, Enum):
    """Where a replayed answer sequence ended up."""

    MATCHED = "matched"
    INFORMATIONAL = "informational"
    PENDING = "pending"


class EvaluationAnswer(WireModel):
    """One yes/no answer to a condition question."""

    condition: str
    affirmed: bool


class EvaluationRequest(WireModel):
    """Answers in the order they were given."""

    answers: list[EvaluationAnswer] = Field(default_factory=list)


class EvaluationOutcome(WireModel):
    """Result of replaying answers through the decision tree."""

    status: EvaluationStatus
    path: EscalationPath | None = None
    paths: list[EscalationPath] = Field(default_factory=list)
    next_question: str | None = None
    asked_count: int = 0
    affirmed: list[str] = Field(default_factory=list)
    short_circuited: bool = False
