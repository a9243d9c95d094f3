# This project was developed with assistance from AI tools.
"""Tests for enum helpers used across the engine."""

import pytest

from recruitflow.enums import (
    WORKFLOW_STAGES,
    DocumentCategory,
    DocumentType,
    TaskPriority,
    WorkflowStage,
)


def test_stage_order():
    assert WORKFLOW_STAGES[0] == WorkflowStage.REGISTERED
    assert WORKFLOW_STAGES[-1] == WorkflowStage.DEPARTED
    assert [s.position for s in WORKFLOW_STAGES] == list(range(10))


def test_every_stage_has_label():
    assert WorkflowStage.WP_RECEIVED.label == "WP Received"
    assert all(s.label for s in WorkflowStage)


@pytest.mark.parametrize(
    "doc_type,category",
    [
        (DocumentType.PASSPORT, DocumentCategory.MANDATORY_REGISTRATION),
        (DocumentType.EDU_PROFESSIONAL, DocumentCategory.MANDATORY_REGISTRATION),
        (DocumentType.MEDICAL_REPORT, DocumentCategory.LATER_PROCESS),
        (DocumentType.AIR_TICKET, DocumentCategory.LATER_PROCESS),
    ],
)
def test_document_category(doc_type, category):
    assert doc_type.category == category


def test_priority_weights_descend():
    weights = [p.weight for p in TaskPriority]
    assert weights == sorted(weights, reverse=True)
    assert TaskPriority.CRITICAL.weight == 4
