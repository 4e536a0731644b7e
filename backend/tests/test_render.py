# ruff: noqa: INP001

from __future__ import annotations

from validation_playbooks.render import (
    RenderContext,
    Theme,
    render_outcome,
    render_playbook,
    render_playbook_summary,
)
from validation_playbooks.schemas.evaluation import EvaluationOutcome, EvaluationStatus
from validation_playbooks.schemas.playbooks import EscalationPath
from validation_playbooks.templates import DEFAULT_AI_VALIDATION_TEMPLATE

PLAIN = RenderContext(use_color=False)


def test_summary_marks_templates_and_truncates_description() -> None:
    summary = render_playbook_summary(PLAIN, DEFAULT_AI_VALIDATION_TEMPLATE)

    first, description, count = summary.splitlines()
    assert first == "Default AI Validation Playbook (template)  [default]"
    assert description.endswith("...")
    assert len(description.strip()) == 103
    assert count == "  3 paths"


def test_playbook_lists_badges_conditions_and_resources() -> None:
    text = render_playbook(PLAIN, DEFAULT_AI_VALIDATION_TEMPLATE)

    assert "[VERIFY INTERNALLY] Internal Verification" in text
    assert "  - Legal or compliance implications" in text
    assert "Resources:" in text
    assert "\033[" not in text


def test_colour_follows_theme() -> None:
    light = RenderContext(theme=Theme.LIGHT).paint("x", "red")
    dark = RenderContext(theme=Theme.DARK).paint("x", "red")

    assert light == "\033[31mx\033[0m"
    assert dark == "\033[91mx\033[0m"


def test_custom_action_renders_raw_label() -> None:
    path = EscalationPath(id="9", name="Legal hold", action="legal-hold", conditions=[])
    outcome = EvaluationOutcome(status=EvaluationStatus.MATCHED, path=path, asked_count=1)

    assert render_outcome(PLAIN, outcome).splitlines()[0] == "Recommendation: LEGAL-HOLD"


def test_informational_outcome_lists_every_path() -> None:
    paths = [
        EscalationPath(id="1", name="Check", action="verify"),
        EscalationPath(id="2", name="Skip", action="avoid"),
    ]
    outcome = EvaluationOutcome(status=EvaluationStatus.INFORMATIONAL, paths=paths)

    text = render_outcome(PLAIN, outcome)

    assert text.startswith("No questions for this playbook.")
    assert "[AVOID AI CONTENT] Skip" in text
