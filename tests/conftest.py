# This project was developed with assistance from AI tools.
"""Shared fixtures.

Every engine in the test suite runs on the fixed ``NOW`` clock. The API
``client`` fixture swaps the app's shared engine for that one and clears
dependency overrides afterwards.
"""

import pytest
from fastapi.testclient import TestClient

from recruitflow.core.config import Settings
from recruitflow.main import app as real_app
from recruitflow.services.workflow import WorkflowEngine, get_workflow_engine

from .factories import NOW


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def engine(settings):
    return WorkflowEngine(settings=settings, clock=lambda: NOW)


@pytest.fixture
def client(engine):
    real_app.dependency_overrides[get_workflow_engine] = lambda: engine
    yield TestClient(real_app)
    real_app.dependency_overrides.clear()
