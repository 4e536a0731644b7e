"""Plain-text rendering of playbooks and decision results.

Every function takes a `RenderContext`; nothing reads theme or colour
settings from module state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from validation_playbooks.templates import is_builtin_template

if TYPE_CHECKING:
    from validation_playbooks.schemas.evaluation import EvaluationOutcome
    from validation_playbooks.schemas.playbooks import EscalationPath, Playbook

SUMMARY_DESCRIPTION_LIMIT = 100
_RESET = "\033[0m"
_BOLD = "\033[1m"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


# Standard colours read well on light backgrounds, bright ones on dark.
_ANSI_COLORS: dict[Theme, dict[str, str]] = {
    Theme.LIGHT: {
        "blue": "\033[34m",
        "orange": "\033[33m",
        "red": "\033[31m",
        "cyan": "\033[36m",
        "green": "\033[32m",
        "yellow": "\033[33m",
        "grape": "\033[35m",
    },
    Theme.DARK: {
        "blue": "\033[94m",
        "orange": "\033[93m",
        "red": "\033[91m",
        "cyan": "\033[96m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "grape": "\033[95m",
    },
}


@dataclass(frozen=True)
class RenderContext:
    """Display preferences for one rendering pass."""

    theme: Theme = Theme.LIGHT
    use_color: bool = True

    def paint(self, text: str, color: str, *, bold: bool = False) -> str:
        if not self.use_color:
            return text
        code = _ANSI_COLORS[self.theme].get(color, "")
        prefix = f"{_BOLD if bold else ''}{code}"
        return f"{prefix}{text}{_RESET}" if prefix else text


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


def render_action_badge(ctx: RenderContext, path: EscalationPath) -> str:
    style = path.tag.style
    return ctx.paint(f"[{style.label}]", style.color, bold=True)


def render_playbook_summary(ctx: RenderContext, playbook: Playbook) -> str:
    count = len(playbook.escalation_paths)
    marker = " (template)" if is_builtin_template(playbook.id) else ""
    lines = [
        f"{ctx.paint(playbook.title, 'blue', bold=True)}{marker}  [{playbook.id}]",
        f"  {_truncate(playbook.description, SUMMARY_DESCRIPTION_LIMIT)}",
        f"  {count} path{'' if count == 1 else 's'}",
    ]
    return "\n".join(lines)


def render_path(ctx: RenderContext, path: EscalationPath) -> str:
    lines = [f"{render_action_badge(ctx, path)} {path.name}"]
    if path.description:
        lines.append(f"  {path.description}")
    lines.extend(f"  - {condition}" for condition in path.conditions)
    return "\n".join(lines)


def render_playbook(ctx: RenderContext, playbook: Playbook) -> str:
    lines = [ctx.paint(playbook.title, "blue", bold=True), playbook.description]
    if playbook.category:
        lines.append(f"Category: {playbook.category}")
    if playbook.contributor is not None:
        lines.append(f"Contributor: {playbook.contributor.name} {playbook.contributor.email}".rstrip())
    lines.append("")
    lines.extend(render_path(ctx, path) for path in playbook.escalation_paths)
    if playbook.resources:
        lines.append("")
        lines.append("Resources:")
        lines.extend(f"  - {resource.title}: {resource.url}" for resource in playbook.resources)
    return "\n".join(lines)


def render_outcome(ctx: RenderContext, outcome: EvaluationOutcome) -> str:
    if outcome.path is not None:
        style = outcome.path.tag.style
        header = ctx.paint(f"Recommendation: {style.label}", style.color, bold=True)
        return "\n".join([header, render_path(ctx, outcome.path)])
    if outcome.paths:
        body = "\n\n".join(render_path(ctx, path) for path in outcome.paths)
        return f"No questions for this playbook. Escalation paths:\n\n{body}"
    return f"Next question: {outcome.next_question}"
