# This project was developed with assistance from AI tools.
"""Candidate record endpoints: registration, documents, flags, timeline."""

from fastapi import APIRouter, Depends, HTTPException, status

from ..schemas.candidate import (
    Candidate,
    DocumentActionRequest,
    RaiseFlagRequest,
    RegisterCandidateRequest,
    ResolveFlagRequest,
    TimelineResponse,
)
from ..schemas.workflow import CandidateRequest
from ..services.documents import DocumentNotFoundError, change_document_status
from ..services.flags import FlagNotFoundError, raise_flag, resolve_flag
from ..services.registration import register_candidate
from ..services.timeline import timeline_for_display
from ..services.workflow import WorkflowEngine, get_workflow_engine

router = APIRouter()


@router.post("/register", response_model=Candidate, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterCandidateRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> Candidate:
    """Create a new candidate at the Registered stage."""
    return register_candidate(
        name=body.name,
        actor=body.actor,
        dob=body.dob,
        nic=body.nic,
        email=body.email,
        phone=body.phone,
        role=body.role,
        target_country=body.target_country,
        now=engine.now(),
    )


@router.post("/documents", response_model=Candidate)
async def document_action(
    body: DocumentActionRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> Candidate:
    """Upload or review a document; returns the updated candidate."""
    candidate = body.candidate
    try:
        change_document_status(
            candidate,
            body.document_type,
            body.action,
            body.actor,
            reason=body.reason,
            now=engine.now(),
        )
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return candidate


@router.post("/flags", response_model=Candidate, status_code=status.HTTP_201_CREATED)
async def create_flag(
    body: RaiseFlagRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> Candidate:
    candidate = body.candidate
    raise_flag(
        candidate,
        body.severity,
        body.reason,
        body.actor,
        flag_type=body.flag_type,
        now=engine.now(),
    )
    return candidate


@router.post("/flags/{flag_id}/resolve", response_model=Candidate)
async def close_flag(
    flag_id: str,
    body: ResolveFlagRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> Candidate:
    candidate = body.candidate
    try:
        resolve_flag(candidate, flag_id, body.actor, notes=body.notes, now=engine.now())
    except FlagNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return candidate


@router.post("/timeline", response_model=TimelineResponse)
async def timeline(body: CandidateRequest) -> TimelineResponse:
    """Timeline events, newest first."""
    return TimelineResponse(data=timeline_for_display(body.candidate))
