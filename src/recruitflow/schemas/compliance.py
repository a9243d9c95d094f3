# This project was developed with assistance from AI tools.
"""Compliance rule configuration and report schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from ..enums import (
    AlertType,
    ComplianceDomain,
    ComplianceSeverity,
    DocumentType,
    WorkflowStage,
)


class AgeLimit(BaseModel):
    """Inclusive age range in whole years."""

    min: int
    max: int


class CountryRule(BaseModel):
    """Eligibility rules for one destination country."""

    country_name: str
    default_age_limit: AgeLimit
    role_age_limits: dict[str, AgeLimit] = Field(default_factory=dict)
    min_passport_validity_days: int = 180
    checks_pcc: bool = False
    pcc_validity_days: int = 180
    pcc_warning_days: int = 150
    mandatory_documents: list[DocumentType] = Field(default_factory=list)
    medical_required: bool = True

    def age_limit_for(self, role: str | None) -> AgeLimit:
        """Pick the role-specific limit whose key appears in the role text."""
        if role:
            lowered = role.lower()
            for role_key, limit in self.role_age_limits.items():
                if role_key.lower() in lowered:
                    return limit
        return self.default_age_limit


class ComplianceIssue(BaseModel):
    id: str
    domain: ComplianceDomain
    severity: ComplianceSeverity
    message: str
    remedy: str | None = None
    blocking_stages: list[WorkflowStage] = Field(default_factory=list)

    def blocks(self, stage: WorkflowStage) -> bool:
        return stage in self.blocking_stages


class RuleResult(BaseModel):
    """Outcome of a single compliance rule."""

    rule_id: str
    domain: ComplianceDomain
    passed: bool
    score_impact: int
    issue: ComplianceIssue | None = None

    @property
    def is_critical(self) -> bool:
        return self.issue is not None and self.issue.severity == ComplianceSeverity.CRITICAL

    @property
    def is_warning(self) -> bool:
        return self.issue is not None and self.issue.severity == ComplianceSeverity.WARNING


class DomainScore(BaseModel):
    score: int
    max_score: int


class ComplianceReport(BaseModel):
    """Scored, itemised compliance report for one candidate.

    The score is advisory. Transition blocking is decided by each issue's
    ``blocking_stages``.
    """

    candidate_id: str
    generated_at: datetime
    country_rule: str
    overall_score: int
    domain_breakdown: dict[ComplianceDomain, DomainScore]
    critical_issues_count: int
    warning_issues_count: int
    results: list[RuleResult]
    is_processable: bool

    def issues(self) -> list[ComplianceIssue]:
        return [r.issue for r in self.results if r.issue is not None]

    def blocking_issues(self, stage: WorkflowStage) -> list[ComplianceIssue]:
        """Issues that prevent entering ``stage``."""
        return [issue for issue in self.issues() if issue.blocks(stage)]


class ComplianceNotification(BaseModel):
    """Per-issue notification, keyed by (issue id, candidate id) for dedup."""

    id: str
    type: AlertType
    title: str
    message: str
    timestamp: datetime
    is_read: bool = False
    candidate_id: str | None = None
    link: str | None = None


class ComplianceAlertListResponse(BaseModel):
    data: list[ComplianceNotification]
