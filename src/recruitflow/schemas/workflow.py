# This project was developed with assistance from AI tools.
"""Workflow engine request/result schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from ..enums import SLALevel, WorkflowStage
from .auth import Actor
from .candidate import Candidate, TimelineEvent


class TransitionValidation(BaseModel):
    """Outcome of validate_transition. ``blockers`` is empty iff allowed."""

    allowed: bool
    blockers: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class TransitionResult(BaseModel):
    """Outcome of perform_transition / rollback.

    On failure ``error`` summarises the rejection and ``blockers`` lists the
    specific unmet requirements; the candidate was not changed.
    """

    success: bool
    event: TimelineEvent | None = None
    error: str | None = None
    blockers: list[str] = Field(default_factory=list)


class SLAStatus(BaseModel):
    stage: WorkflowStage
    entered_at: datetime
    deadline: datetime
    sla_days: int
    days_in_stage: int
    days_remaining: int
    percentage_elapsed: int
    overdue: bool
    level: SLALevel


# ---------------------------------------------------------------------------
# HTTP request / response bodies
# ---------------------------------------------------------------------------


class ValidateTransitionRequest(BaseModel):
    """``target_stage`` accepts a stage value or name; unknown stages are a 400."""

    candidate: Candidate
    target_stage: str


class PerformTransitionRequest(BaseModel):
    candidate: Candidate
    target_stage: str
    actor: Actor
    reason: str | None = None
    force: bool = False


class RollbackRequest(BaseModel):
    candidate: Candidate
    target_stage: str
    actor: Actor
    reason: str | None = None


class TransitionResponse(BaseModel):
    """Transition result plus the candidate snapshot the caller should persist."""

    result: TransitionResult
    candidate: Candidate


class CandidateRequest(BaseModel):
    candidate: Candidate
