"""Read-only endpoints for the built-in playbook templates."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from validation_playbooks.api.playbooks import NOT_FOUND_RESPONSE, evaluate_playbook
from validation_playbooks.schemas.evaluation import EvaluationOutcome, EvaluationRequest
from validation_playbooks.schemas.playbooks import Playbook
from validation_playbooks.templates import get_template, list_templates

router = APIRouter(prefix="/templates", tags=["templates"])


def _template_or_404(template_id: str) -> Playbook:
    template = get_template(template_id)
    if template is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return template


@router.get("", response_model=list[Playbook], response_model_exclude_none=True)
def list_builtin_templates() -> list[Playbook]:
    """List the templates shipped with the service."""
    return list_templates()


@router.get(
    "/{template_id}",
    response_model=Playbook,
    response_model_exclude_none=True,
    responses=NOT_FOUND_RESPONSE,
)
def get_builtin_template(template_id: str) -> Playbook:
    return _template_or_404(template_id)


@router.post(
    "/{template_id}/evaluate",
    response_model=EvaluationOutcome,
    responses=NOT_FOUND_RESPONSE,
)
def evaluate_builtin_template(template_id: str, payload: EvaluationRequest) -> EvaluationOutcome:
    return evaluate_playbook(_template_or_404(template_id), payload)
