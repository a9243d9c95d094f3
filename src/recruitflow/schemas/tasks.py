# This project was developed with assistance from AI tools.
"""Work queue task and system alert schemas."""

from datetime import datetime

from pydantic import BaseModel

from ..enums import AlertType, TaskPriority, TaskType, WorkflowStage
from . import Pagination
from .candidate import Candidate


class WorkTask(BaseModel):
    """A single to-do item for recruitment staff."""

    id: str
    title: str
    description: str
    priority: TaskPriority
    type: TaskType
    candidate_id: str
    candidate_name: str
    stage: WorkflowStage
    due_date: str
    action_label: str
    timestamp: datetime
    link: str | None = None


class SystemAlert(BaseModel):
    """System-wide summary for one alert category."""

    id: str
    type: AlertType
    message: str
    timestamp: datetime
    count: int


class CandidateBatchRequest(BaseModel):
    candidates: list[Candidate]


class WorkQueueResponse(BaseModel):
    data: list[WorkTask]
    pagination: Pagination


class SystemAlertListResponse(BaseModel):
    data: list[SystemAlert]
