# This project was developed with assistance from AI tools.
"""Candidate record and its nested sub-records.

The candidate is a plain value handed to the engine by the caller. The
engine reads it, and mutates it only through the workflow, document and
flag services; persistence is the caller's concern.
"""

from collections.abc import Mapping
from datetime import UTC, date, datetime
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    field_validator,
)

from ..enums import (
    DocumentAction,
    DocumentCategory,
    DocumentStatus,
    DocumentType,
    EmployerStatus,
    FlagSeverity,
    FlagType,
    MedicalStatus,
    PaymentStatus,
    StageStatus,
    TimelineEventType,
    WorkflowStage,
)
from .auth import SYSTEM_ACTOR, Actor


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _freeze(value: Any) -> Any:
    """Read-only copy of nested dicts and lists (mapping proxies and tuples)."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list | tuple):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


class PassportData(BaseModel):
    """Passport dates. Status is derived, see services.compliance.validity."""

    passport_number: str | None = None
    country: str | None = None
    issued_date: date | None = None
    expiry_date: date | None = None


class PCCData(BaseModel):
    """Police clearance certificate. Age and status derive from issued_date."""

    issued_date: date | None = None
    last_inspection_date: date | None = None


class MedicalData(BaseModel):
    status: MedicalStatus = MedicalStatus.NOT_STARTED
    scheduled_date: date | None = None
    completed_date: date | None = None
    notes: str | None = None


class StageData(BaseModel):
    """Sub-status tracking that individual stages read."""

    medical_status: MedicalStatus | None = None
    medical_scheduled_date: date | None = None
    employer_status: EmployerStatus | None = None
    payment_status: PaymentStatus | None = None
    ticket_status: str | None = None


class SLBFEData(BaseModel):
    """Bureau of Foreign Employment registration details."""

    registration_number: str | None = None
    registration_date: date | None = None
    training_date: date | None = None
    training_institute: str | None = None
    insurance_policy_number: str | None = None


class DocumentLog(BaseModel):
    """One entry in a document's append-only status log."""

    model_config = ConfigDict(frozen=True)

    id: str
    action: DocumentAction
    status: DocumentStatus
    actor: str
    timestamp: datetime
    details: str | None = None


class CandidateDocument(BaseModel):
    id: str
    type: DocumentType
    status: DocumentStatus = DocumentStatus.PENDING_REVIEW
    version: int = 1
    uploaded_at: datetime | None = None
    uploaded_by: str | None = None
    rejection_reason: str | None = None
    logs: list[DocumentLog] = Field(default_factory=list)

    @computed_field
    @property
    def category(self) -> DocumentCategory:
        return self.type.category

    @property
    def is_uploaded(self) -> bool:
        return self.status != DocumentStatus.MISSING


class ComplianceFlag(BaseModel):
    """Manually raised compliance issue. CRITICAL and unresolved blocks every stage."""

    id: str
    type: FlagType = FlagType.OTHER
    severity: FlagSeverity
    reason: str
    created_by: str = "System"
    created_at: datetime = Field(default_factory=_utcnow)
    is_resolved: bool = False
    resolved_by: str | None = None
    resolved_at: datetime | None = None
    resolution_notes: str | None = None

    @property
    def is_blocking(self) -> bool:
        return not self.is_resolved and self.severity == FlagSeverity.CRITICAL


class TimelineEvent(BaseModel):
    """Immutable audit record. Created once, never edited or removed."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: TimelineEventType
    title: str
    description: str = ""
    timestamp: datetime
    actor: str
    stage: WorkflowStage | None = None
    is_critical: bool = False
    metadata: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("metadata")
    @classmethod
    def freeze_metadata(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return _freeze(value)

    @field_serializer("metadata")
    def serialize_metadata(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return _thaw(value)


class StageHistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: WorkflowStage
    timestamp: datetime
    user_id: str | None = None
    notes: str | None = None


class Candidate(BaseModel):
    """Central recruitment entity.

    ``stage`` is always one of the enumerated stages; ``stage_entered_at``
    changes exactly when ``stage`` does.
    """

    id: str
    candidate_code: str | None = None
    name: str
    nic: str | None = None
    email: str | None = None
    phone: str | None = None
    dob: date | None = None
    role: str | None = None
    target_country: str | None = None

    stage: WorkflowStage
    stage_status: StageStatus = StageStatus.PENDING
    stage_entered_at: datetime = Field(default_factory=_utcnow)
    stage_data: StageData = Field(default_factory=StageData)
    stage_history: list[StageHistoryEntry] = Field(default_factory=list)

    passport_data: PassportData | None = None
    pcc_data: PCCData | None = None
    medical_data: MedicalData | None = None
    slbfe_data: SLBFEData | None = None

    profile_completion_percentage: int = 0
    education: list[str] = Field(default_factory=list)
    job_roles: list[str] = Field(default_factory=list)
    employer_id: str | None = None

    documents: list[CandidateDocument] = Field(default_factory=list)
    compliance_flags: list[ComplianceFlag] = Field(default_factory=list)
    timeline_events: list[TimelineEvent] = Field(default_factory=list)

    def find_document(self, doc_type: DocumentType) -> CandidateDocument | None:
        """Return the document of this type, if one has been recorded."""
        for doc in self.documents:
            if doc.type == doc_type:
                return doc
        return None

    @property
    def medical_status(self) -> MedicalStatus | None:
        if self.medical_data is not None:
            return self.medical_data.status
        return self.stage_data.medical_status

    @property
    def medical_scheduled_date(self) -> date | None:
        if self.medical_data is not None and self.medical_data.scheduled_date is not None:
            return self.medical_data.scheduled_date
        return self.stage_data.medical_scheduled_date


# ---------------------------------------------------------------------------
# HTTP request bodies
# ---------------------------------------------------------------------------


class RegisterCandidateRequest(BaseModel):
    name: str = Field(min_length=1)
    dob: date | None = None
    nic: str | None = None
    email: str | None = None
    phone: str | None = None
    role: str | None = None
    target_country: str | None = None
    actor: Actor = SYSTEM_ACTOR


class DocumentActionRequest(BaseModel):
    candidate: Candidate
    document_type: DocumentType
    action: DocumentAction
    actor: Actor
    reason: str | None = None


class RaiseFlagRequest(BaseModel):
    candidate: Candidate
    severity: FlagSeverity
    reason: str = Field(min_length=1)
    flag_type: FlagType = FlagType.OTHER
    actor: Actor


class ResolveFlagRequest(BaseModel):
    candidate: Candidate
    actor: Actor
    notes: str | None = None


class TimelineResponse(BaseModel):
    data: list[TimelineEvent]
