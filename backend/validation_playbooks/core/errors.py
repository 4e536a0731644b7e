"""Domain exceptions raised by storage, matching, and authoring code."""

from __future__ import annotations


class PlaybookError(Exception):
    """Base class for playbook domain failures."""


class PlaybookNotFoundError(PlaybookError):
    """No playbook is stored under the requested id."""

    def __init__(self, playbook_id: str) -> None:
        super().__init__(f"Playbook not found: {playbook_id}")
        self.playbook_id = playbook_id


class PlaybookValidationError(PlaybookError):
    """Authoring input failed the draft checks."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = errors


class BuiltInTemplateError(PlaybookError):
    """Built-in templates are read-only and cannot be edited or deleted."""

    def __init__(self, playbook_id: str) -> None:
        super().__init__(f"Built-in template cannot be modified: {playbook_id}")
        self.playbook_id = playbook_id


class TransportFailure(PlaybookError):
    """A remote storage call failed before producing a usable response."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation} failed: {reason}")
        self.operation = operation
        self.reason = reason
