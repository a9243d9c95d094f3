# This project was developed with assistance from AI tools.
"""Tests for document upload and review actions."""

from datetime import timedelta

import pytest

from recruitflow.enums import (
    DocumentAction,
    DocumentCategory,
    DocumentStatus,
    DocumentType,
    TimelineEventType,
    UserRole,
)
from recruitflow.services.documents import (
    DocumentNotFoundError,
    change_document_status,
    upload_document,
)

from .factories import NOW, make_actor, make_candidate, make_document

RECRUITER = make_actor()
OFFICER = make_actor(UserRole.COMPLIANCE_OFFICER, user_id="co-1", name="Sunil")


class TestUpload:
    def test_first_upload_creates_document(self):
        candidate = make_candidate()
        doc = upload_document(candidate, DocumentType.CV, RECRUITER, now=NOW)

        assert candidate.documents == [doc]
        assert doc.id.startswith("doc-")
        assert doc.status == DocumentStatus.PENDING_REVIEW
        assert doc.version == 1
        assert doc.uploaded_at == NOW
        assert doc.uploaded_by == "Nimal"
        assert doc.category == DocumentCategory.MANDATORY_REGISTRATION
        assert doc.model_dump()["category"] == DocumentCategory.MANDATORY_REGISTRATION
        assert [log.action for log in doc.logs] == [DocumentAction.UPLOAD]

        [event] = candidate.timeline_events
        assert event.type == TimelineEventType.DOCUMENT
        assert event.title == "Document Uploaded: Updated CV"
        assert event.metadata["version"] == 1

    def test_reupload_bumps_version_and_clears_rejection(self):
        candidate = make_candidate(
            documents=[
                make_document(
                    DocumentType.CV,
                    DocumentStatus.REJECTED,
                    rejection_reason="Blurry scan",
                )
            ]
        )
        doc = upload_document(candidate, DocumentType.CV, RECRUITER, now=NOW)

        assert len(candidate.documents) == 1
        assert doc.version == 2
        assert doc.status == DocumentStatus.PENDING_REVIEW
        assert doc.rejection_reason is None
        assert doc.uploaded_at == NOW

    def test_upload_over_missing_placeholder_keeps_version(self):
        placeholder = make_document(
            DocumentType.VISA_COPY, DocumentStatus.MISSING, uploaded_at=None
        )
        candidate = make_candidate(documents=[placeholder])
        doc = upload_document(candidate, DocumentType.VISA_COPY, RECRUITER, now=NOW)
        assert doc.version == 1
        assert doc.category == DocumentCategory.LATER_PROCESS
        assert doc.model_dump(mode="json")["category"] == "later_process"


class TestReviewActions:
    @pytest.fixture
    def candidate(self):
        return make_candidate(
            documents=[make_document(DocumentType.PASSPORT, DocumentStatus.PENDING_REVIEW)]
        )

    def test_approve(self, candidate):
        doc = change_document_status(
            candidate, DocumentType.PASSPORT, DocumentAction.APPROVE, OFFICER, now=NOW
        )
        assert doc.status == DocumentStatus.APPROVED
        assert doc.logs[-1].actor == "Sunil"
        assert doc.logs[-1].status == DocumentStatus.APPROVED

        [event] = candidate.timeline_events
        assert event.title == "Document Approved: Valid Passport"
        assert event.is_critical is False
        assert event.metadata["from_status"] == "pending_review"
        assert event.metadata["to_status"] == "approved"

    def test_reject_records_reason(self, candidate):
        doc = change_document_status(
            candidate,
            DocumentType.PASSPORT,
            DocumentAction.REJECT,
            OFFICER,
            reason="Name mismatch",
            now=NOW,
        )
        assert doc.status == DocumentStatus.REJECTED
        assert doc.rejection_reason == "Name mismatch"
        assert candidate.timeline_events[-1].is_critical is True

    def test_request_correction(self, candidate):
        doc = change_document_status(
            candidate,
            DocumentType.PASSPORT,
            DocumentAction.REQUEST_CORRECTION,
            OFFICER,
            reason="Page 2 missing",
            now=NOW,
        )
        assert doc.status == DocumentStatus.CORRECTION_REQUIRED
        assert candidate.timeline_events[-1].title == "Correction Requested: Valid Passport"

    def test_approve_clears_previous_rejection(self, candidate):
        for action in (DocumentAction.REJECT, DocumentAction.APPROVE):
            doc = change_document_status(
                candidate, DocumentType.PASSPORT, action, OFFICER, reason="x", now=NOW
            )
        assert doc.rejection_reason is None
        assert len(doc.logs) == 2

    def test_mark_missing(self, candidate):
        doc = change_document_status(
            candidate, DocumentType.PASSPORT, DocumentAction.MARK_MISSING, OFFICER, now=NOW
        )
        assert doc.status == DocumentStatus.MISSING
        assert doc.is_uploaded is False

    def test_upload_action_delegates(self, candidate):
        later = NOW + timedelta(hours=1)
        doc = change_document_status(
            candidate, DocumentType.PASSPORT, DocumentAction.UPLOAD, RECRUITER, now=later
        )
        assert doc.version == 2
        assert doc.uploaded_at == later

    def test_unknown_document_raises(self, candidate):
        with pytest.raises(DocumentNotFoundError):
            change_document_status(
                candidate, DocumentType.VISA_COPY, DocumentAction.APPROVE, OFFICER, now=NOW
            )
        assert candidate.timeline_events == []
