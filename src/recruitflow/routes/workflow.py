# This project was developed with assistance from AI tools.
"""Workflow transition REST endpoints.

Stateless: each request carries the candidate snapshot, and mutating calls
return the updated snapshot for the caller to persist.
"""

from fastapi import APIRouter, Depends

from ..schemas.candidate import Candidate
from ..schemas.workflow import (
    CandidateRequest,
    PerformTransitionRequest,
    RollbackRequest,
    SLAStatus,
    TransitionResponse,
    TransitionValidation,
    ValidateTransitionRequest,
)
from ..services.workflow import WorkflowEngine, get_workflow_engine

router = APIRouter()


@router.post("/validate", response_model=TransitionValidation)
async def validate_transition(
    body: ValidateTransitionRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> TransitionValidation:
    """Check whether the candidate may move to the target stage."""
    return engine.validate_transition(body.candidate, body.target_stage)


@router.post("/transition", response_model=TransitionResponse)
async def perform_transition(
    body: PerformTransitionRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> TransitionResponse:
    """Move the candidate forward, or force a move when ``force`` is set.

    A blocked transition is a 200 with ``result.success`` false and the
    candidate unchanged.
    """
    candidate: Candidate = body.candidate
    result = engine.perform_transition(
        candidate,
        body.target_stage,
        body.actor,
        reason=body.reason,
        force=body.force,
    )
    return TransitionResponse(result=result, candidate=candidate)


@router.post("/rollback", response_model=TransitionResponse)
async def rollback(
    body: RollbackRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> TransitionResponse:
    """Revert the candidate to an earlier stage."""
    candidate = body.candidate
    result = engine.rollback(candidate, body.target_stage, body.actor, body.reason)
    return TransitionResponse(result=result, candidate=candidate)


@router.post("/sla", response_model=SLAStatus)
async def sla_status(
    body: CandidateRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> SLAStatus:
    return engine.calculate_sla(body.candidate)
