"""Escalation path matching over a playbook's declared paths.

Paths are kept in author order. That order matters twice: a single affirmed
condition selects the *last* declared path containing it (later paths are the
more severe ones), and the exhaustive count keeps the *first* path among ties.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from validation_playbooks.schemas.playbooks import EscalationPath


def question_set(paths: Sequence[EscalationPath]) -> list[str]:
    """Distinct conditions across all paths, in first-appearance order."""
    return list(dict.fromkeys(condition for path in paths for condition in path.conditions))


def short_circuit_match(
    paths: Sequence[EscalationPath],
    condition: str,
) -> EscalationPath | None:
    """Return the last declared path listing `condition`, if any."""
    for path in reversed(paths):
        if condition in path.conditions:
            return path
    return None


def match_count(path: EscalationPath, affirmed: Iterable[str]) -> int:
    affirmed_set = set(affirmed)
    return sum(1 for condition in path.conditions if condition in affirmed_set)


def best_match(
    paths: Sequence[EscalationPath],
    affirmed: Iterable[str],
) -> EscalationPath:
    """Pick the path with the most affirmed conditions.

    Ties keep the earliest path. With no overlap at all the first declared
    path is the default.
    """
    if not paths:
        raise ValueError("best_match requires at least one escalation path")
    affirmed_set = set(affirmed)
    best: EscalationPath | None = None
    best_count = 0
    for path in paths:
        count = match_count(path, affirmed_set)
        if count > best_count:
            best, best_count = path, count
    return best if best is not None else paths[0]
