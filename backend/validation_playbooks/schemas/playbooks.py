"""Playbook records and the payloads used to create and update them."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from validation_playbooks.models.actions import ActionTag

RUNTIME_ANNOTATION_TYPES = (datetime,)

# Fields the store owns: never taken from an update payload.
PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})
# Non-optional on a stored record; a null in an update leaves them unchanged.
NON_NULLABLE_FIELDS = frozenset({"title", "description", "escalation_paths"})


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Resource(WireModel):
    """Reference material linked from a playbook."""

    title: str
    description: str = ""
    url: str


class Contributor(WireModel):
    """Author credit shown alongside a playbook."""

    name: str
    email: str = ""


class EscalationPath(WireModel):
    """A response category and the conditions that trigger it.

    `conditions` order is significant; the same condition text may appear
    under several paths.
    """

    id: str
    name: str
    description: str = ""
    action: str
    conditions: list[str] = Field(default_factory=list)

    @property
    def tag(self) -> ActionTag:
        return ActionTag.parse(self.action)


class _PlaybookFields(WireModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    category: str | None = None
    resources: list[Resource] | None = None
    contributor: Contributor | None = None


class Playbook(_PlaybookFields):
    """A persisted validation playbook.

    Unknown top-level keys are kept so stored documents round-trip intact.
    """

    id: str
    title: str = ""
    description: str = ""
    escalation_paths: list[EscalationPath] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    def to_document(self) -> dict[str, Any]:
        """Serialize to the JSON document layout used by stores and the API."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def merged_with(self, changes: PlaybookUpdate, *, updated_at: datetime) -> Playbook:
        """Apply a top-level partial update, keeping id and createdAt."""
        merged = self.model_dump()
        merged.update(
            {
                key: value
                for key, value in changes.model_dump(exclude_unset=True).items()
                if key not in PROTECTED_FIELDS
                and not (value is None and key in NON_NULLABLE_FIELDS)
            },
        )
        merged.update(id=self.id, created_at=self.created_at, updated_at=updated_at)
        return Playbook.model_validate(merged)


class PlaybookCreate(_PlaybookFields):
    """Create payload; the id is optional and timestamps are always assigned."""

    id: str | None = None
    title: str = ""
    description: str = ""
    escalation_paths: list[EscalationPath] = Field(default_factory=list)
    # Store-owned: accepted in any shape and replaced by `to_playbook`.
    created_at: Any = None
    updated_at: Any = None

    def to_playbook(self, *, playbook_id: str, now: datetime) -> Playbook:
        values = self.model_dump(exclude={"id", "created_at", "updated_at"})
        return Playbook.model_validate(
            {**values, "id": playbook_id, "created_at": now, "updated_at": now},
        )


class PlaybookUpdate(_PlaybookFields):
    """Partial update; any field left out keeps its stored value."""

    # Store-owned: accepted in any shape and discarded by `Playbook.merged_with`.
    id: Any = None
    title: str | None = None
    description: str | None = None
    escalation_paths: list[EscalationPath] | None = None
    created_at: Any = None
    updated_at: Any = None
