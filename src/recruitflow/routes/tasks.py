# This project was developed with assistance from AI tools.
"""Work queue and system alert REST endpoints."""

from fastapi import APIRouter, Depends, Query

from ..schemas import Pagination
from ..schemas.tasks import (
    CandidateBatchRequest,
    SystemAlertListResponse,
    WorkQueueResponse,
)
from ..services.tasks import generate_system_alerts, generate_work_queue
from ..services.workflow import WorkflowEngine, get_workflow_engine

router = APIRouter()


@router.post("/queue", response_model=WorkQueueResponse)
async def work_queue(
    body: CandidateBatchRequest,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=500),
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> WorkQueueResponse:
    """Prioritised tasks across the submitted candidates."""
    tasks = generate_work_queue(body.candidates, engine=engine)
    page = tasks[offset : offset + limit]
    return WorkQueueResponse(
        data=page,
        pagination=Pagination.for_window(len(tasks), offset, limit),
    )


@router.post("/alerts", response_model=SystemAlertListResponse)
async def system_alerts(
    body: CandidateBatchRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> SystemAlertListResponse:
    return SystemAlertListResponse(data=generate_system_alerts(body.candidates, engine=engine))
