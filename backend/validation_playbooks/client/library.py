"""Authoring operations: built-in templates plus the user's stored playbooks."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar
from uuid import uuid4

from validation_playbooks.core.errors import BuiltInTemplateError, PlaybookValidationError
from validation_playbooks.core.logging import get_logger
from validation_playbooks.schemas.playbooks import EscalationPath
from validation_playbooks.templates import get_template, is_builtin_template, list_templates

if TYPE_CHECKING:
    from validation_playbooks.client.stores import PlaybookStore
    from validation_playbooks.schemas.playbooks import (
        Playbook,
        PlaybookCreate,
        PlaybookUpdate,
    )

logger = get_logger(__name__)
TITLE_MIN_LENGTH = 3
DESCRIPTION_MIN_LENGTH = 10
PayloadT = TypeVar("PayloadT", "PlaybookCreate", "PlaybookUpdate")


def starter_escalation_paths() -> list[EscalationPath]:
    """Paths a brand-new draft starts from."""
    return [
        EscalationPath(
            id="1",
            name="Internal Verification",
            description="Content should be verified by internal team members",
            action="verify",
            conditions=["Sensitive business information", "Legal or compliance implications"],
        ),
        EscalationPath(
            id="2",
            name="External Expert Review",
            description="Content should be reviewed by subject matter experts",
            action="consult",
            conditions=[
                "Technical or specialized domain knowledge required",
                "High-impact decisions",
            ],
        ),
        EscalationPath(
            id="3",
            name="Avoid AI Content",
            description="Do not use AI-generated content in this case",
            action="avoid",
            conditions=[
                "Highly sensitive personal information",
                "Legal or medical advice",
                "Content requiring human judgment",
            ],
        ),
    ]


def validate_draft_fields(*, title: str | None, description: str | None) -> None:
    """Enforce the minimum lengths authors must meet; `None` means unchanged."""
    errors: dict[str, str] = {}
    if title is not None and len(title.strip()) < TITLE_MIN_LENGTH:
        errors["title"] = "Title is too short"
    if description is not None and len(description.strip()) < DESCRIPTION_MIN_LENGTH:
        errors["description"] = "Description is too short"
    if errors:
        raise PlaybookValidationError(errors)


def _drop_blank_contributor(payload: PayloadT) -> PayloadT:
    # An empty contributor form means "no contributor".
    contributor = payload.contributor
    if contributor is not None and not (contributor.name or contributor.email):
        return payload.model_copy(update={"contributor": None})
    return payload


class PlaybookLibrary:
    """What the authoring surface sees: templates first, then stored playbooks.

    Templates are served from code and are read-only; every write goes to
    the store after the draft checks pass.
    """

    def __init__(self, store: PlaybookStore) -> None:
        self.store = store

    async def list_all(self) -> list[Playbook]:
        stored = await self.store.list_playbooks()
        return [*list_templates(), *stored]

    async def get(self, playbook_id: str) -> Playbook:
        template = get_template(playbook_id)
        if template is not None:
            return template
        return await self.store.get_playbook(playbook_id)

    async def create(self, payload: PlaybookCreate) -> Playbook:
        validate_draft_fields(title=payload.title, description=payload.description)
        payload = _drop_blank_contributor(payload)
        if payload.id is None:
            payload = payload.model_copy(update={"id": str(uuid4())})
        playbook = await self.store.create_playbook(payload)
        logger.info("playbooks.library.created", extra={"playbook_id": playbook.id})
        return playbook

    async def update(self, playbook_id: str, changes: PlaybookUpdate) -> Playbook:
        if is_builtin_template(playbook_id):
            raise BuiltInTemplateError(playbook_id)
        validate_draft_fields(title=changes.title, description=changes.description)
        playbook = await self.store.update_playbook(playbook_id, _drop_blank_contributor(changes))
        logger.info("playbooks.library.updated", extra={"playbook_id": playbook_id})
        return playbook

    async def delete(self, playbook_id: str) -> None:
        if is_builtin_template(playbook_id):
            raise BuiltInTemplateError(playbook_id)
        await self.store.delete_playbook(playbook_id)
        logger.info("playbooks.library.deleted", extra={"playbook_id": playbook_id})
