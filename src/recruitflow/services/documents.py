# This project was developed with assistance from AI tools.
"""Candidate document lifecycle.

Status moves freely between the document statuses, but every move appends a
DocumentLog entry and a DOCUMENT timeline event. File storage is the
caller's concern; only the record is tracked here.
"""

import logging
import uuid
from datetime import UTC, datetime

from ..enums import DocumentAction, DocumentStatus, DocumentType, TimelineEventType
from ..schemas.auth import Actor
from ..schemas.candidate import Candidate, CandidateDocument, DocumentLog
from .timeline import record_event

logger = logging.getLogger(__name__)


class DocumentNotFoundError(LookupError):
    """Raised when a candidate has no document of the requested type."""

    pass


_ACTION_STATUS: dict[DocumentAction, DocumentStatus] = {
    DocumentAction.APPROVE: DocumentStatus.APPROVED,
    DocumentAction.REJECT: DocumentStatus.REJECTED,
    DocumentAction.REQUEST_CORRECTION: DocumentStatus.CORRECTION_REQUIRED,
    DocumentAction.MARK_MISSING: DocumentStatus.MISSING,
}

_ACTION_TITLES: dict[DocumentAction, str] = {
    DocumentAction.UPLOAD: "Document Uploaded",
    DocumentAction.APPROVE: "Document Approved",
    DocumentAction.REJECT: "Document Rejected",
    DocumentAction.REQUEST_CORRECTION: "Correction Requested",
    DocumentAction.MARK_MISSING: "Document Marked Missing",
}


def _log(
    doc: CandidateDocument,
    action: DocumentAction,
    actor: Actor,
    now: datetime,
    details: str | None,
) -> None:
    doc.logs.append(
        DocumentLog(
            id=f"log-{uuid.uuid4().hex}",
            action=action,
            status=doc.status,
            actor=actor.name,
            timestamp=now,
            details=details,
        )
    )


def upload_document(
    candidate: Candidate,
    doc_type: DocumentType,
    actor: Actor,
    *,
    details: str | None = None,
    now: datetime | None = None,
) -> CandidateDocument:
    """Record an upload. A re-upload of an existing document bumps its version."""
    if now is None:
        now = datetime.now(UTC)

    doc = candidate.find_document(doc_type)
    if doc is None:
        doc = CandidateDocument(id=f"doc-{uuid.uuid4().hex}", type=doc_type)
        candidate.documents.append(doc)
    elif doc.uploaded_at is not None:
        doc.version += 1

    doc.status = DocumentStatus.PENDING_REVIEW
    doc.uploaded_at = now
    doc.uploaded_by = actor.name
    doc.rejection_reason = None
    _log(doc, DocumentAction.UPLOAD, actor, now, details)

    record_event(
        candidate,
        TimelineEventType.DOCUMENT,
        f"{_ACTION_TITLES[DocumentAction.UPLOAD]}: {doc_type.label}",
        actor,
        description=f"Version {doc.version}",
        metadata={"document_type": doc_type.value, "version": doc.version},
        now=now,
    )
    logger.debug("Candidate %s uploaded %s v%d", candidate.id, doc_type.value, doc.version)
    return doc


def change_document_status(
    candidate: Candidate,
    doc_type: DocumentType,
    action: DocumentAction,
    actor: Actor,
    *,
    reason: str | None = None,
    now: datetime | None = None,
) -> CandidateDocument:
    """Apply a review action (approve, reject, request correction, mark missing).

    Raises:
        DocumentNotFoundError: The candidate has no document of ``doc_type``.
    """
    if action == DocumentAction.UPLOAD:
        return upload_document(candidate, doc_type, actor, details=reason, now=now)
    if now is None:
        now = datetime.now(UTC)

    doc = candidate.find_document(doc_type)
    if doc is None:
        raise DocumentNotFoundError(
            f"Candidate {candidate.id} has no {doc_type.label} document"
        )

    previous = doc.status
    doc.status = _ACTION_STATUS[action]
    if action in (DocumentAction.REJECT, DocumentAction.REQUEST_CORRECTION):
        doc.rejection_reason = reason
    elif action == DocumentAction.APPROVE:
        doc.rejection_reason = None
    _log(doc, action, actor, now, reason)

    record_event(
        candidate,
        TimelineEventType.DOCUMENT,
        f"{_ACTION_TITLES[action]}: {doc_type.label}",
        actor,
        description=reason or "",
        is_critical=action == DocumentAction.REJECT,
        metadata={
            "document_type": doc_type.value,
            "from_status": previous.value,
            "to_status": doc.status.value,
        },
        now=now,
    )
    logger.info(
        "Candidate %s document %s: %s -> %s by %s",
        candidate.id,
        doc_type.value,
        previous.value,
        doc.status.value,
        actor.user_id,
    )
    return doc
