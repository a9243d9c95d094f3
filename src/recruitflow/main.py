# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .core.config import settings
from .routes import candidates, compliance, health, tasks, workflow
from .schemas.error import ErrorResponse
from .services.workflow import WorkflowError, init_workflow_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    init_workflow_engine(settings)
    yield


app = FastAPI(
    title="Recruitflow API",
    description="Recruitment workflow and compliance rules engine",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

_HTTP_STATUS_TITLES: dict[int, str] = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
}


def _request_id(request: Request) -> str:
    return request.headers.get("x-request-id", str(uuid.uuid4()))


def _problem(
    request_id: str,
    status_code: int,
    detail: str,
    code: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        title=_HTTP_STATUS_TITLES.get(status_code, "Error"),
        status=status_code,
        detail=detail,
        code=code,
        request_id=request_id,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """HTTPException raised by a router (e.g. unknown flag or country)."""
    return _problem(_request_id(request), exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request body or query failed schema validation."""
    return _problem(_request_id(request), 422, str(exc.errors()))


@app.exception_handler(WorkflowError)
async def workflow_exception_handler(request: Request, exc: WorkflowError):
    """Engine input errors (unknown stage, malformed candidate) are client errors."""
    request_id = _request_id(request)
    logger.info("Rejected engine input (request_id=%s): %s", request_id, exc)
    return _problem(request_id, 400, str(exc), code=exc.code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all -- log with traceback and return 500."""
    request_id = _request_id(request)
    logger.exception("Unhandled exception (request_id=%s)", request_id)
    return _problem(request_id, 500, "An unexpected error occurred.")


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(candidates.router, prefix="/api/candidates", tags=["candidates"])
app.include_router(workflow.router, prefix="/api/workflow", tags=["workflow"])
app.include_router(compliance.router, prefix="/api/compliance", tags=["compliance"])
app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
