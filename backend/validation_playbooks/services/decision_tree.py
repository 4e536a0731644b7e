"""Interactive yes/no walk over a playbook's conditions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from validation_playbooks.schemas.evaluation import (
    EvaluationAnswer,
    EvaluationOutcome,
    EvaluationStatus,
)
from validation_playbooks.services.matcher import best_match, question_set, short_circuit_match

if TYPE_CHECKING:
    from validation_playbooks.schemas.playbooks import EscalationPath, Playbook


class DecisionCompleteError(RuntimeError):
    """An answer arrived after the session already reached a result."""


@dataclass
class DecisionSession:
    """State for one pass through the question set.

    Questions are asked in first-appearance order. A "yes" may end the
    session early; otherwise the last answer triggers the exhaustive match.
    """

    paths: Sequence[EscalationPath]
    questions: list[str] = field(init=False)
    step: int = 0
    affirmed: list[str] = field(default_factory=list)
    result: EscalationPath | None = None
    short_circuited: bool = False

    def __post_init__(self) -> None:
        if not self.paths:
            raise ValueError("A decision session needs at least one escalation path")
        self.questions = question_set(self.paths)

    @classmethod
    def for_playbook(cls, playbook: Playbook) -> DecisionSession:
        return cls(paths=list(playbook.escalation_paths))

    @property
    def is_informational(self) -> bool:
        """No conditions to ask about; every path is shown as-is."""
        return not self.questions

    @property
    def is_complete(self) -> bool:
        return self.result is not None or self.is_informational

    @property
    def current_question(self) -> str | None:
        if self.is_complete:
            return None
        return self.questions[self.step]

    @property
    def asked_count(self) -> int:
        if self.is_informational:
            return 0
        if self.result is not None:
            return self.step + 1
        return self.step

    def answer(self, affirmed: bool) -> EscalationPath | None:
        """Record an answer to the current question and advance."""
        question = self.current_question
        if question is None:
            raise DecisionCompleteError("Decision session already has a result")

        if affirmed:
            self.affirmed.append(question)
            selected = short_circuit_match(self.paths, question)
            if selected is not None:
                self.result = selected
                self.short_circuited = True
                return selected

        if self.step < len(self.questions) - 1:
            self.step += 1
            return None

        self.result = best_match(self.paths, self.affirmed)
        return self.result

    def reset(self) -> None:
        self.step = 0
        self.affirmed = []
        self.result = None
        self.short_circuited = False

    def outcome(self) -> EvaluationOutcome:
        if self.is_informational:
            return EvaluationOutcome(
                status=EvaluationStatus.INFORMATIONAL,
                paths=list(self.paths),
            )
        if self.result is not None:
            return EvaluationOutcome(
                status=EvaluationStatus.MATCHED,
                path=self.result,
                asked_count=self.asked_count,
                affirmed=list(self.affirmed),
                short_circuited=self.short_circuited,
            )
        return EvaluationOutcome(
            status=EvaluationStatus.PENDING,
            next_question=self.current_question,
            asked_count=self.asked_count,
            affirmed=list(self.affirmed),
        )


def evaluate(
    paths: Sequence[EscalationPath],
    answers: Sequence[EvaluationAnswer],
) -> EvaluationOutcome:
    """Replay answers through a fresh session.

    Answers are looked up by condition text; the walk stops at the first
    question without an answer. Answers for unknown conditions are ignored.
    """
    session = DecisionSession(paths=list(paths))
    given = {answer.condition: answer.affirmed for answer in answers}
    while not session.is_complete:
        question = session.current_question
        if question is None or question not in given:
            break
        session.answer(given[question])
    return session.outcome()
