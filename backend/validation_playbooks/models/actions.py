"""Escalation action tags and their display styles.

Action strings on escalation paths are open-ended: a handful of conventional
values get a dedicated colour, icon and label, and anything else is carried as
a custom tag that renders with the raw text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ActionKind(str, Enum):
    """Well-known action categories plus a catch-all for author-defined tags."""

    VERIFY = "verify"
    CONSULT = "consult"
    AVOID = "avoid"
    ESCALATE = "escalate"
    REVIEW = "review"
    APPROVE = "approve"
    FLAG = "flag"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ActionStyle:
    """Presentation attributes for one action tag."""

    color: str
    icon: str
    label: str


_KNOWN_STYLES: dict[ActionKind, ActionStyle] = {
    ActionKind.VERIFY: ActionStyle(color="blue", icon="check", label="VERIFY INTERNALLY"),
    ActionKind.CONSULT: ActionStyle(color="orange", icon="alert-triangle", label="CONSULT EXPERTS"),
    ActionKind.AVOID: ActionStyle(color="red", icon="ban", label="AVOID AI CONTENT"),
    ActionKind.ESCALATE: ActionStyle(color="red", icon="alert-circle", label="ESCALATE"),
    ActionKind.REVIEW: ActionStyle(color="cyan", icon="eye", label="REVIEW"),
    ActionKind.APPROVE: ActionStyle(color="green", icon="user-check", label="APPROVE"),
    ActionKind.FLAG: ActionStyle(color="yellow", icon="flag", label="FLAG FOR REVIEW"),
}
_CUSTOM_COLOR = "grape"
_CUSTOM_ICON = "check"


@dataclass(frozen=True)
class ActionTag:
    """Parsed action: a known kind, or CUSTOM carrying the author's raw text."""

    kind: ActionKind
    raw: str

    @classmethod
    def parse(cls, raw: str) -> ActionTag:
        normalized = raw.strip().lower()
        try:
            kind = ActionKind(normalized)
        except ValueError:
            kind = ActionKind.CUSTOM
        return cls(kind=kind, raw=raw)

    @property
    def is_custom(self) -> bool:
        return self.kind is ActionKind.CUSTOM

    @property
    def style(self) -> ActionStyle:
        if self.kind is ActionKind.CUSTOM:
            return ActionStyle(color=_CUSTOM_COLOR, icon=_CUSTOM_ICON, label=self.raw.upper())
        return _KNOWN_STYLES[self.kind]


def action_style(raw: str) -> ActionStyle:
    """Resolve display attributes for an action string."""
    return ActionTag.parse(raw).style
