# This project was developed with assistance from AI tools.
"""Stage requirement table.

Each workflow stage maps to an ordered list of named requirements that a
candidate must satisfy to *enter* that stage. The workflow engine walks this
table; adding a stage rule means adding a Requirement here, not touching the
engine.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime

from ..core.config import Settings
from ..enums import (
    DocumentStatus,
    DocumentType,
    MedicalStatus,
    PassportStatus,
    PaymentStatus,
    PCCStatus,
    WorkflowStage,
)
from ..schemas.candidate import Candidate
from ..schemas.compliance import CountryRule
from .compliance.validity import passport_status, pcc_status


@dataclass(frozen=True)
class RequirementContext:
    """Evaluation inputs shared by every requirement of one validation."""

    now: datetime
    rule: CountryRule
    settings: Settings


class Requirement(ABC):
    """A named, checkable condition for entering a stage.

    Advisory requirements (``blocking=False``) surface as warnings instead
    of blockers.
    """

    label: str
    blocking: bool = True

    @abstractmethod
    def evaluate(self, candidate: Candidate, ctx: RequirementContext) -> bool:
        """Return True when the candidate satisfies the requirement."""

    def failure_message(self, candidate: Candidate, ctx: RequirementContext) -> str:
        return self.label

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.label!r})"


class CandidateCheck(Requirement):
    """Requirement backed by a plain predicate over the candidate."""

    def __init__(
        self,
        label: str,
        check: Callable[[Candidate], bool],
        *,
        blocking: bool = True,
    ):
        self.label = label
        self.blocking = blocking
        self._check = check

    def evaluate(self, candidate: Candidate, ctx: RequirementContext) -> bool:
        return bool(self._check(candidate))


class MandatoryDocumentsUploaded(Requirement):
    """Every document the destination country requires is present and not Missing."""

    label = "Mandatory documents uploaded"

    def _missing(self, candidate: Candidate, ctx: RequirementContext) -> list[DocumentType]:
        missing = []
        for doc_type in ctx.rule.mandatory_documents:
            doc = candidate.find_document(doc_type)
            if doc is None or not doc.is_uploaded:
                missing.append(doc_type)
        return missing

    def evaluate(self, candidate: Candidate, ctx: RequirementContext) -> bool:
        return not self._missing(candidate, ctx)

    def failure_message(self, candidate: Candidate, ctx: RequirementContext) -> str:
        labels = ", ".join(t.label for t in self._missing(candidate, ctx))
        return f"{self.label} (missing: {labels})"


class DocumentApproved(Requirement):
    def __init__(self, doc_type: DocumentType):
        self.doc_type = doc_type
        self.label = f"{doc_type.label} approved"

    def evaluate(self, candidate: Candidate, ctx: RequirementContext) -> bool:
        doc = candidate.find_document(self.doc_type)
        return doc is not None and doc.status == DocumentStatus.APPROVED

    def failure_message(self, candidate: Candidate, ctx: RequirementContext) -> str:
        doc = candidate.find_document(self.doc_type)
        if doc is None or not doc.is_uploaded:
            return f"{self.doc_type.label} not uploaded"
        return f"{self.doc_type.label} status is {doc.status.value}, must be approved"


class DocumentUploaded(Requirement):
    def __init__(self, doc_type: DocumentType, *, blocking: bool = True):
        self.doc_type = doc_type
        self.label = f"{doc_type.label} uploaded"
        self.blocking = blocking

    def evaluate(self, candidate: Candidate, ctx: RequirementContext) -> bool:
        doc = candidate.find_document(self.doc_type)
        return doc is not None and doc.is_uploaded


class ProfileComplete(Requirement):
    label = "Profile completion threshold met"

    def evaluate(self, candidate: Candidate, ctx: RequirementContext) -> bool:
        return candidate.profile_completion_percentage >= ctx.settings.MIN_PROFILE_COMPLETION

    def failure_message(self, candidate: Candidate, ctx: RequirementContext) -> str:
        return (
            f"Profile completion is {candidate.profile_completion_percentage}%, "
            f"must be at least {ctx.settings.MIN_PROFILE_COMPLETION}%"
        )


class PassportValid(Requirement):
    label = "Passport must be VALID"

    def evaluate(self, candidate: Candidate, ctx: RequirementContext) -> bool:
        if candidate.passport_data is None:
            return False
        status = passport_status(
            candidate.passport_data,
            ctx.now.date(),
            ctx.rule.min_passport_validity_days,
        )
        return status == PassportStatus.VALID

    def failure_message(self, candidate: Candidate, ctx: RequirementContext) -> str:
        return (
            f"{self.label} (at least {ctx.rule.min_passport_validity_days} days validity)"
        )


class PCCValid(Requirement):
    """Police clearance valid. Satisfied outright where the country does not check PCC."""

    label = "PCC must be VALID"

    def evaluate(self, candidate: Candidate, ctx: RequirementContext) -> bool:
        if not ctx.rule.checks_pcc:
            return True
        if candidate.pcc_data is None:
            return False
        status = pcc_status(
            candidate.pcc_data,
            ctx.now.date(),
            ctx.rule.pcc_validity_days,
            ctx.rule.pcc_warning_days,
        )
        return status == PCCStatus.VALID

    def failure_message(self, candidate: Candidate, ctx: RequirementContext) -> str:
        return f"{self.label} (less than {ctx.rule.pcc_warning_days} days old)"


class MedicalCompleted(Requirement):
    label = "Medical examination must be COMPLETED"

    def evaluate(self, candidate: Candidate, ctx: RequirementContext) -> bool:
        return candidate.medical_status == MedicalStatus.COMPLETED


class PaymentCompleted(Requirement):
    label = "Final payment completed"

    def evaluate(self, candidate: Candidate, ctx: RequirementContext) -> bool:
        return candidate.stage_data.payment_status == PaymentStatus.COMPLETED


def _slbfe_field(name: str) -> Callable[[Candidate], bool]:
    def check(candidate: Candidate) -> bool:
        return candidate.slbfe_data is not None and bool(getattr(candidate.slbfe_data, name))

    return check


STAGE_REQUIREMENTS: Mapping[WorkflowStage, tuple[Requirement, ...]] = {
    WorkflowStage.REGISTERED: (),
    WorkflowStage.VERIFIED: (MandatoryDocumentsUploaded(),),
    WorkflowStage.APPLIED: (
        ProfileComplete(),
        CandidateCheck("Educational qualifications recorded", lambda c: bool(c.education)),
        CandidateCheck("Job roles specified", lambda c: bool(c.job_roles)),
    ),
    WorkflowStage.OFFER_RECEIVED: (DocumentApproved(DocumentType.OFFER_LETTER),),
    WorkflowStage.WP_RECEIVED: (
        DocumentApproved(DocumentType.SIGNED_OFFER_LETTER),
        CandidateCheck("Employer confirmed", lambda c: bool(c.employer_id)),
    ),
    WorkflowStage.EMBASSY_APPLIED: (PassportValid(), PCCValid(), MedicalCompleted()),
    WorkflowStage.VISA_RECEIVED: (
        DocumentUploaded(DocumentType.EMBASSY_SUBMISSION, blocking=False),
    ),
    WorkflowStage.SLBFE_REGISTRATION: (
        DocumentApproved(DocumentType.VISA_COPY),
        DocumentApproved(DocumentType.EMPLOYMENT_AGREEMENT),
        MedicalCompleted(),
        PCCValid(),
    ),
    WorkflowStage.TICKET_ISSUED: (
        CandidateCheck(
            "SLBFE registration number entered", _slbfe_field("registration_number")
        ),
        CandidateCheck("SLBFE training completed", _slbfe_field("training_date")),
        DocumentApproved(DocumentType.INSURANCE),
        PaymentCompleted(),
    ),
    WorkflowStage.DEPARTED: (
        DocumentApproved(DocumentType.AIR_TICKET),
        PassportValid(),
        PCCValid(),
        MedicalCompleted(),
    ),
}


def requirements_for(
    stage: WorkflowStage,
    table: Mapping[WorkflowStage, tuple[Requirement, ...]] = STAGE_REQUIREMENTS,
) -> tuple[Requirement, ...]:
    return table.get(stage, ())


def unmet_requirements(
    candidate: Candidate,
    stage: WorkflowStage,
    ctx: RequirementContext,
    table: Mapping[WorkflowStage, tuple[Requirement, ...]] = STAGE_REQUIREMENTS,
) -> tuple[list[str], list[str]]:
    """Evaluate a stage's requirements in order.

    Returns:
        (blockers, warnings) -- failure messages of blocking and advisory
        requirements respectively.
    """
    blockers: list[str] = []
    warnings: list[str] = []
    for requirement in requirements_for(stage, table):
        if requirement.evaluate(candidate, ctx):
            continue
        message = requirement.failure_message(candidate, ctx)
        if requirement.blocking:
            blockers.append(message)
        else:
            warnings.append(message)
    return blockers, warnings
