"""Playbook CRUD endpoints backed by the blob-store gateway."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from validation_playbooks.api.deps import (
    GATEWAY_DEP,
    PLAYBOOK_NOT_FOUND,
    get_playbook_or_404,
)
from validation_playbooks.core.errors import PlaybookNotFoundError
from validation_playbooks.core.logging import get_logger
from validation_playbooks.schemas.errors import ErrorResponse
from validation_playbooks.schemas.evaluation import EvaluationOutcome, EvaluationRequest
from validation_playbooks.schemas.playbooks import Playbook, PlaybookCreate, PlaybookUpdate
from validation_playbooks.services.decision_tree import evaluate
from validation_playbooks.storage.gateway import PlaybookGateway

router = APIRouter(prefix="/playbooks", tags=["playbooks"])
PLAYBOOK_DEP = Depends(get_playbook_or_404)
NOT_FOUND_RESPONSE = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
logger = get_logger(__name__)


def evaluate_playbook(playbook: Playbook, payload: EvaluationRequest) -> EvaluationOutcome:
    """Replay answers against a playbook, rejecting playbooks with no paths."""
    if not playbook.escalation_paths:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Playbook has no escalation paths",
        )
    return evaluate(playbook.escalation_paths, payload.answers)


@router.get("", response_model=list[Playbook], response_model_exclude_none=True)
async def list_playbooks(gateway: PlaybookGateway = GATEWAY_DEP) -> list[Playbook]:
    """List every stored playbook."""
    return await gateway.list()


@router.post(
    "",
    response_model=Playbook,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_playbook(
    payload: PlaybookCreate,
    gateway: PlaybookGateway = GATEWAY_DEP,
) -> Playbook:
    """Create a playbook, generating an id when the payload has none."""
    playbook = await gateway.create(payload)
    logger.info("playbooks.api.created", extra={"playbook_id": playbook.id})
    return playbook


@router.get(
    "/{playbook_id}",
    response_model=Playbook,
    response_model_exclude_none=True,
    responses=NOT_FOUND_RESPONSE,
)
async def get_playbook(playbook: Playbook = PLAYBOOK_DEP) -> Playbook:
    """Fetch one playbook by id."""
    return playbook


@router.put(
    "/{playbook_id}",
    response_model=Playbook,
    response_model_exclude_none=True,
    responses=NOT_FOUND_RESPONSE,
)
async def update_playbook(
    playbook_id: str,
    payload: PlaybookUpdate,
    gateway: PlaybookGateway = GATEWAY_DEP,
) -> Playbook:
    """Merge the supplied fields into a stored playbook."""
    try:
        playbook = await gateway.update(playbook_id, payload)
    except PlaybookNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=PLAYBOOK_NOT_FOUND,
        ) from exc
    logger.info("playbooks.api.updated", extra={"playbook_id": playbook_id})
    return playbook


@router.delete("/{playbook_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_playbook(
    playbook_id: str,
    gateway: PlaybookGateway = GATEWAY_DEP,
) -> Response:
    """Delete a playbook; unknown ids succeed as well."""
    await gateway.delete(playbook_id)
    logger.info("playbooks.api.deleted", extra={"playbook_id": playbook_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{playbook_id}/evaluate",
    response_model=EvaluationOutcome,
    responses=NOT_FOUND_RESPONSE,
)
async def evaluate_stored_playbook(
    payload: EvaluationRequest,
    playbook: Playbook = PLAYBOOK_DEP,
) -> EvaluationOutcome:
    """Walk the decision tree with the given answers."""
    return evaluate_playbook(playbook, payload)
