# ruff: noqa: INP001
"""Authoring rules layered over a playbook store."""

from __future__ import annotations

from pathlib import Path

import pytest

from validation_playbooks.client import LocalPlaybookStore, PlaybookLibrary
from validation_playbooks.client.library import starter_escalation_paths, validate_draft_fields
from validation_playbooks.core.errors import BuiltInTemplateError, PlaybookValidationError
from validation_playbooks.schemas.playbooks import PlaybookCreate, PlaybookUpdate
from validation_playbooks.templates import PLAYBOOK_TEMPLATES


def _library(tmp_path: Path) -> PlaybookLibrary:
    return PlaybookLibrary(LocalPlaybookStore(tmp_path / "playbooks.json"))


def _draft(**overrides: object) -> PlaybookCreate:
    document: dict[str, object] = {
        "title": "Vendor emails",
        "description": "When AI drafted vendor emails need review",
        "escalationPaths": [path.model_dump() for path in starter_escalation_paths()],
    }
    document.update(overrides)
    return PlaybookCreate.model_validate(document)


def test_validate_draft_fields_reports_each_short_field() -> None:
    with pytest.raises(PlaybookValidationError) as excinfo:
        validate_draft_fields(title="ab", description="short")

    assert excinfo.value.errors == {
        "title": "Title is too short",
        "description": "Description is too short",
    }


def test_validate_draft_fields_skips_unchanged_fields() -> None:
    validate_draft_fields(title=None, description=None)


def test_starter_paths_cover_three_actions() -> None:
    assert [path.action for path in starter_escalation_paths()] == ["verify", "consult", "avoid"]


@pytest.mark.asyncio
async def test_list_all_puts_templates_before_stored_playbooks(tmp_path: Path) -> None:
    library = _library(tmp_path)
    created = await library.create(_draft())

    ids = [playbook.id for playbook in await library.list_all()]

    assert ids[: len(PLAYBOOK_TEMPLATES)] == [template.id for template in PLAYBOOK_TEMPLATES]
    assert ids[-1] == created.id


@pytest.mark.asyncio
async def test_get_serves_templates_without_the_store(tmp_path: Path) -> None:
    playbook = await _library(tmp_path).get("default")

    assert playbook.title == "Default AI Validation Playbook"


@pytest.mark.asyncio
async def test_create_rejects_short_title(tmp_path: Path) -> None:
    library = _library(tmp_path)

    with pytest.raises(PlaybookValidationError, match="Title is too short"):
        await library.create(_draft(title="no"))

    assert await library.store.list_playbooks() == []


@pytest.mark.asyncio
async def test_create_drops_blank_contributor(tmp_path: Path) -> None:
    created = await _library(tmp_path).create(_draft(contributor={"name": "", "email": ""}))

    assert created.contributor is None


@pytest.mark.asyncio
async def test_update_validates_only_supplied_fields(tmp_path: Path) -> None:
    library = _library(tmp_path)
    created = await library.create(_draft())

    updated = await library.update(created.id, PlaybookUpdate(category="Email"))

    assert updated.category == "Email"
    with pytest.raises(PlaybookValidationError):
        await library.update(created.id, PlaybookUpdate(description="tiny"))


@pytest.mark.asyncio
async def test_templates_cannot_be_changed(tmp_path: Path) -> None:
    library = _library(tmp_path)

    with pytest.raises(BuiltInTemplateError):
        await library.update("default", PlaybookUpdate(title="Hijacked"))
    with pytest.raises(BuiltInTemplateError):
        await library.delete("code-review")
