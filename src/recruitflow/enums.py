# This project was developed with assistance from AI tools.
"""
Domain enums for the recruitment and deployment lifecycle.

Shared closed sets used by the schemas, the compliance evaluator, the
workflow engine and the task generator.
"""

import enum


class WorkflowStage(str, enum.Enum):
    REGISTERED = "registered"
    VERIFIED = "verified"
    APPLIED = "applied"
    OFFER_RECEIVED = "offer_received"
    WP_RECEIVED = "wp_received"
    EMBASSY_APPLIED = "embassy_applied"
    VISA_RECEIVED = "visa_received"
    SLBFE_REGISTRATION = "slbfe_registration"
    TICKET_ISSUED = "ticket_issued"
    DEPARTED = "departed"

    @classmethod
    def ordered(cls) -> tuple["WorkflowStage", ...]:
        """Canonical stage order. Transitions move one step at a time."""
        return tuple(cls)

    @property
    def position(self) -> int:
        return WORKFLOW_STAGES.index(self)

    @property
    def label(self) -> str:
        return _STAGE_LABELS[self]


WORKFLOW_STAGES: tuple[WorkflowStage, ...] = WorkflowStage.ordered()

_STAGE_LABELS: dict[WorkflowStage, str] = {
    WorkflowStage.REGISTERED: "Registered",
    WorkflowStage.VERIFIED: "Verified",
    WorkflowStage.APPLIED: "Applied",
    WorkflowStage.OFFER_RECEIVED: "Offer Received",
    WorkflowStage.WP_RECEIVED: "WP Received",
    WorkflowStage.EMBASSY_APPLIED: "Embassy Applied",
    WorkflowStage.VISA_RECEIVED: "Visa Received",
    WorkflowStage.SLBFE_REGISTRATION: "SLBFE Registration",
    WorkflowStage.TICKET_ISSUED: "Ticket Issued",
    WorkflowStage.DEPARTED: "Departed",
}


class StageStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    RECRUITER = "recruiter"
    COMPLIANCE_OFFICER = "compliance_officer"
    VIEWER = "viewer"
    SYSTEM = "system"


class DocumentType(str, enum.Enum):
    # Mandatory at registration
    PASSPORT = "passport"
    CV = "cv"
    PASSPORT_PHOTOS = "passport_photos"
    FULL_PHOTO = "full_photo"
    EDU_OL = "edu_ol"
    EDU_AL = "edu_al"
    EDU_PROFESSIONAL = "edu_professional"

    # Later process
    MEDICAL_REPORT = "medical_report"
    POLICE_CLEARANCE = "police_clearance"
    OFFER_LETTER = "offer_letter"
    SIGNED_OFFER_LETTER = "signed_offer_letter"
    EMBASSY_SUBMISSION = "embassy_submission"
    VISA_COPY = "visa_copy"
    EMPLOYMENT_AGREEMENT = "employment_agreement"
    INSURANCE = "insurance"
    AIR_TICKET = "air_ticket"

    @property
    def label(self) -> str:
        return _DOCUMENT_LABELS[self]

    @property
    def category(self) -> "DocumentCategory":
        if self in _REGISTRATION_DOCUMENTS:
            return DocumentCategory.MANDATORY_REGISTRATION
        return DocumentCategory.LATER_PROCESS


_DOCUMENT_LABELS: dict[DocumentType, str] = {
    DocumentType.PASSPORT: "Valid Passport",
    DocumentType.CV: "Updated CV",
    DocumentType.PASSPORT_PHOTOS: "Passport Size Photos (6)",
    DocumentType.FULL_PHOTO: "Full Photo (1)",
    DocumentType.EDU_OL: "O/L Certificate",
    DocumentType.EDU_AL: "A/L Certificate",
    DocumentType.EDU_PROFESSIONAL: "Professional Certificates",
    DocumentType.MEDICAL_REPORT: "Medical Report",
    DocumentType.POLICE_CLEARANCE: "Police Clearance",
    DocumentType.OFFER_LETTER: "Offer Letter",
    DocumentType.SIGNED_OFFER_LETTER: "Signed Offer Letter",
    DocumentType.EMBASSY_SUBMISSION: "Embassy Submission Confirmation",
    DocumentType.VISA_COPY: "Visa Copy",
    DocumentType.EMPLOYMENT_AGREEMENT: "Employment Agreement",
    DocumentType.INSURANCE: "Insurance Policy",
    DocumentType.AIR_TICKET: "Air Ticket Copy",
}

_REGISTRATION_DOCUMENTS = frozenset(
    {
        DocumentType.PASSPORT,
        DocumentType.CV,
        DocumentType.PASSPORT_PHOTOS,
        DocumentType.FULL_PHOTO,
        DocumentType.EDU_OL,
        DocumentType.EDU_AL,
        DocumentType.EDU_PROFESSIONAL,
    }
)


class DocumentCategory(str, enum.Enum):
    MANDATORY_REGISTRATION = "mandatory_registration"
    LATER_PROCESS = "later_process"


class DocumentStatus(str, enum.Enum):
    MISSING = "missing"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    CORRECTION_REQUIRED = "correction_required"


class DocumentAction(str, enum.Enum):
    UPLOAD = "upload"
    APPROVE = "approve"
    REJECT = "reject"
    REQUEST_CORRECTION = "request_correction"
    MARK_MISSING = "mark_missing"


class PassportStatus(str, enum.Enum):
    VALID = "VALID"
    EXPIRING = "EXPIRING"
    EXPIRED = "EXPIRED"
    INVALID = "INVALID"


class PCCStatus(str, enum.Enum):
    VALID = "VALID"
    EXPIRING = "EXPIRING"
    EXPIRED = "EXPIRED"
    INVALID = "INVALID"


class MedicalStatus(str, enum.Enum):
    NOT_STARTED = "not_started"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    FAILED = "failed"


class EmployerStatus(str, enum.Enum):
    PENDING = "pending"
    SELECTED = "selected"
    REJECTED = "rejected"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    COMPLETED = "completed"


class FlagType(str, enum.Enum):
    LEGAL = "legal"
    MEDICAL = "medical"
    DOCUMENT = "document"
    BEHAVIORAL = "behavioral"
    OTHER = "other"


class FlagSeverity(str, enum.Enum):
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class TimelineEventType(str, enum.Enum):
    STAGE_TRANSITION = "stage_transition"
    STATUS_CHANGE = "status_change"
    DOCUMENT = "document"
    NOTE = "note"
    ALERT = "alert"
    SYSTEM = "system"
    MANUAL_OVERRIDE = "manual_override"


class TransitionType(str, enum.Enum):
    FORWARD = "forward"
    ROLLBACK = "rollback"
    OVERRIDE = "override"


class ComplianceDomain(str, enum.Enum):
    PASSPORT = "passport"
    PCC = "pcc"
    MEDICAL = "medical"
    AGE = "age"
    DOCUMENTS = "documents"
    FLAGS = "flags"


class ComplianceSeverity(str, enum.Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class SLALevel(str, enum.Enum):
    ON_TIME = "on_time"
    WARNING = "warning"
    CRITICAL = "critical"


class TaskPriority(str, enum.Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def weight(self) -> int:
        return _PRIORITY_WEIGHTS[self]


_PRIORITY_WEIGHTS: dict[TaskPriority, int] = {
    TaskPriority.CRITICAL: 4,
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


class TaskType(str, enum.Enum):
    VERIFICATION = "verification"
    APPROVAL = "approval"
    FOLLOW_UP = "follow_up"
    PAYMENT = "payment"
    ISSUE = "issue"


class AlertType(str, enum.Enum):
    DELAY = "delay"
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
