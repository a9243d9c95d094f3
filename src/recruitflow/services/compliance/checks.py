# This project was developed with assistance from AI tools.
"""Compliance checks for passport, police clearance, medical, age,
documents and manually raised flags.

Pure functions -- no I/O, no clock reads. Each check returns one or more
RuleResult values carrying a score impact (0-100) and, when something is
wrong, an issue naming the stages it blocks. ``evaluate_candidate`` runs
every check against the candidate's destination-country rule and scores
the lot.
"""

import logging
import math
from datetime import UTC, date, datetime

from ...enums import (
    WORKFLOW_STAGES,
    AlertType,
    ComplianceDomain,
    ComplianceSeverity,
    DocumentStatus,
    DocumentType,
    FlagSeverity,
    MedicalStatus,
    PassportStatus,
    PCCStatus,
    WorkflowStage,
)
from ...schemas.candidate import Candidate
from ...schemas.compliance import (
    ComplianceIssue,
    ComplianceNotification,
    ComplianceReport,
    CountryRule,
    DomainScore,
    RuleResult,
)
from .country_rules import CountryRuleBook
from .validity import (
    age_in_years,
    passport_status,
    passport_validity_days,
    pcc_age_days,
    pcc_status,
)

logger = logging.getLogger(__name__)

FULL_SCORE = 100
HALF_SCORE = 50
OVERDUE_MEDICAL_SCORE = 20

_PASSPORT_BLOCKS = [
    WorkflowStage.EMBASSY_APPLIED,
    WorkflowStage.VISA_RECEIVED,
    WorkflowStage.DEPARTED,
]
_PASSPORT_EXPIRED_BLOCKS = [*_PASSPORT_BLOCKS, WorkflowStage.SLBFE_REGISTRATION]
_PCC_BLOCKS = [
    WorkflowStage.EMBASSY_APPLIED,
    WorkflowStage.VISA_RECEIVED,
    WorkflowStage.SLBFE_REGISTRATION,
]
_MEDICAL_FAILED_BLOCKS = [
    WorkflowStage.VISA_RECEIVED,
    WorkflowStage.SLBFE_REGISTRATION,
    WorkflowStage.DEPARTED,
]
_AGE_BLOCKS = [WorkflowStage.REGISTERED, WorkflowStage.VERIFIED, WorkflowStage.APPLIED]
_DOB_MISSING_BLOCKS = [WorkflowStage.VERIFIED, WorkflowStage.APPLIED]
_DOC_MISSING_BLOCKS = [WorkflowStage.VERIFIED, WorkflowStage.APPLIED]
_DOC_PENDING_BLOCKS = [WorkflowStage.VERIFIED]


def _passed(rule_id: str, domain: ComplianceDomain, score: int = FULL_SCORE) -> RuleResult:
    return RuleResult(rule_id=rule_id, domain=domain, passed=True, score_impact=score)


def _issue_result(
    rule_id: str,
    domain: ComplianceDomain,
    severity: ComplianceSeverity,
    message: str,
    *,
    passed: bool,
    score: int,
    remedy: str | None = None,
    blocking_stages: list[WorkflowStage] | None = None,
) -> RuleResult:
    return RuleResult(
        rule_id=rule_id,
        domain=domain,
        passed=passed,
        score_impact=score,
        issue=ComplianceIssue(
            id=rule_id,
            domain=domain,
            severity=severity,
            message=message,
            remedy=remedy,
            blocking_stages=list(blocking_stages or []),
        ),
    )


# ---------------------------------------------------------------------------
# Passport
# ---------------------------------------------------------------------------


def check_passport(candidate: Candidate, rule: CountryRule, today: date) -> RuleResult:
    """Passport must exist and hold more than the destination's minimum validity."""
    passport = candidate.passport_data
    if passport is None:
        return _issue_result(
            "PASSPORT_MISSING",
            ComplianceDomain.PASSPORT,
            ComplianceSeverity.CRITICAL,
            "Passport data is missing.",
            passed=False,
            score=0,
            remedy="Upload and enter passport details.",
            blocking_stages=_PASSPORT_BLOCKS,
        )

    status = passport_status(passport, today, rule.min_passport_validity_days)

    if status == PassportStatus.EXPIRED:
        return _issue_result(
            "PASSPORT_EXPIRED",
            ComplianceDomain.PASSPORT,
            ComplianceSeverity.CRITICAL,
            f"Passport expired on {passport.expiry_date.isoformat()}.",
            passed=False,
            score=0,
            remedy="Renew passport immediately.",
            blocking_stages=_PASSPORT_EXPIRED_BLOCKS,
        )

    if status == PassportStatus.INVALID:
        return _issue_result(
            "PASSPORT_INVALID",
            ComplianceDomain.PASSPORT,
            ComplianceSeverity.CRITICAL,
            "Passport dates are missing or inconsistent.",
            passed=False,
            score=0,
            remedy="Re-enter the passport issue and expiry dates.",
            blocking_stages=_PASSPORT_EXPIRED_BLOCKS,
        )

    if status == PassportStatus.EXPIRING:
        days = passport_validity_days(passport, today)
        return _issue_result(
            "PASSPORT_EXPIRING",
            ComplianceDomain.PASSPORT,
            ComplianceSeverity.WARNING,
            f"Passport expires in {days} days "
            f"(less than {rule.min_passport_validity_days} days).",
            passed=True,
            score=HALF_SCORE,
            remedy="Advise candidate to renew soon.",
        )

    return _passed("PASSPORT_VALID", ComplianceDomain.PASSPORT)


# ---------------------------------------------------------------------------
# Police clearance
# ---------------------------------------------------------------------------


def check_pcc(candidate: Candidate, rule: CountryRule, today: date) -> RuleResult:
    """Police clearance age check, only for destinations that require one."""
    if not rule.checks_pcc:
        return _passed("PCC_NOT_REQUIRED", ComplianceDomain.PCC)

    pcc = candidate.pcc_data
    if pcc is None or pcc.issued_date is None:
        return _issue_result(
            "PCC_MISSING",
            ComplianceDomain.PCC,
            ComplianceSeverity.CRITICAL,
            "Police Clearance Certificate is missing.",
            passed=False,
            score=0,
            remedy="Request PCC immediately.",
            blocking_stages=_PCC_BLOCKS,
        )

    status = pcc_status(pcc, today, rule.pcc_validity_days, rule.pcc_warning_days)
    age = pcc_age_days(pcc, today)

    if status == PCCStatus.EXPIRED:
        return _issue_result(
            "PCC_EXPIRED",
            ComplianceDomain.PCC,
            ComplianceSeverity.CRITICAL,
            f"PCC expired (issued {age} days ago, limit {rule.pcc_validity_days} days).",
            passed=False,
            score=0,
            remedy="Obtain new PCC.",
            blocking_stages=_PCC_BLOCKS,
        )

    if status == PCCStatus.INVALID:
        return _issue_result(
            "PCC_INVALID",
            ComplianceDomain.PCC,
            ComplianceSeverity.CRITICAL,
            "PCC issue date is in the future.",
            passed=False,
            score=0,
            remedy="Correct the PCC issue date.",
            blocking_stages=_PCC_BLOCKS,
        )

    if status == PCCStatus.EXPIRING:
        return _issue_result(
            "PCC_EXPIRING",
            ComplianceDomain.PCC,
            ComplianceSeverity.WARNING,
            f"PCC is aging ({age} days old).",
            passed=True,
            score=HALF_SCORE,
            remedy="Monitor PCC validity closely.",
        )

    return _passed("PCC_VALID", ComplianceDomain.PCC)


# ---------------------------------------------------------------------------
# Medical
# ---------------------------------------------------------------------------


def check_medical(candidate: Candidate, rule: CountryRule, today: date) -> RuleResult:
    """Medical examination status.

    A failed examination is critical whether or not the destination requires
    one. A required examination that has not started only blocks the visa.
    """
    status = candidate.medical_status

    if status == MedicalStatus.FAILED:
        return _issue_result(
            "MEDICAL_FAILED",
            ComplianceDomain.MEDICAL,
            ComplianceSeverity.CRITICAL,
            "Medical test failed.",
            passed=False,
            score=0,
            remedy="Candidate cannot proceed. Check if re-test is possible.",
            blocking_stages=_MEDICAL_FAILED_BLOCKS,
        )

    if rule.medical_required and status in (None, MedicalStatus.NOT_STARTED):
        return _issue_result(
            "MEDICAL_PENDING",
            ComplianceDomain.MEDICAL,
            ComplianceSeverity.WARNING,
            "Medical not started.",
            passed=True,
            score=HALF_SCORE,
            remedy="Schedule the medical examination.",
            blocking_stages=[WorkflowStage.VISA_RECEIVED],
        )

    if status == MedicalStatus.SCHEDULED:
        scheduled = candidate.medical_scheduled_date
        if scheduled is not None and scheduled < today:
            return _issue_result(
                "MEDICAL_OVERDUE",
                ComplianceDomain.MEDICAL,
                ComplianceSeverity.WARNING,
                "Medical appointment overdue.",
                passed=False,
                score=OVERDUE_MEDICAL_SCORE,
                remedy="Confirm attendance or reschedule the appointment.",
            )

    if status == MedicalStatus.COMPLETED:
        return _passed("MEDICAL_COMPLETED", ComplianceDomain.MEDICAL)

    return _passed("MEDICAL_IN_PROGRESS", ComplianceDomain.MEDICAL, HALF_SCORE)


# ---------------------------------------------------------------------------
# Age
# ---------------------------------------------------------------------------


def check_age(candidate: Candidate, rule: CountryRule, today: date) -> RuleResult:
    """Age in whole years against the role-specific or country default range."""
    if candidate.dob is None:
        return _issue_result(
            "DOB_MISSING",
            ComplianceDomain.AGE,
            ComplianceSeverity.CRITICAL,
            "Date of Birth missing.",
            passed=False,
            score=0,
            remedy="Record the candidate's date of birth.",
            blocking_stages=_DOB_MISSING_BLOCKS,
        )

    age = age_in_years(candidate.dob, today)
    limits = rule.age_limit_for(candidate.role)

    if age < limits.min:
        return _issue_result(
            "AGE_TOO_YOUNG",
            ComplianceDomain.AGE,
            ComplianceSeverity.CRITICAL,
            f"Candidate is too young: {age} (Min: {limits.min}).",
            passed=False,
            score=0,
            blocking_stages=_AGE_BLOCKS,
        )

    if age > limits.max:
        return _issue_result(
            "AGE_TOO_OLD",
            ComplianceDomain.AGE,
            ComplianceSeverity.CRITICAL,
            f"Candidate is too old: {age} (Max: {limits.max}).",
            passed=False,
            score=0,
            blocking_stages=_AGE_BLOCKS,
        )

    return _passed("AGE_VALID", ComplianceDomain.AGE)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def check_documents(candidate: Candidate, mandatory: list[DocumentType]) -> list[RuleResult]:
    """One result per mandatory document type required by the destination."""
    results: list[RuleResult] = []
    for doc_type in mandatory:
        doc = candidate.find_document(doc_type)
        if doc is None or not doc.is_uploaded:
            results.append(
                _issue_result(
                    f"DOC_MISSING_{doc_type.name}",
                    ComplianceDomain.DOCUMENTS,
                    ComplianceSeverity.CRITICAL,
                    f"Missing mandatory document: {doc_type.label}",
                    passed=False,
                    score=0,
                    remedy=f"Upload the {doc_type.label}.",
                    blocking_stages=_DOC_MISSING_BLOCKS,
                )
            )
        elif doc.status != DocumentStatus.APPROVED:
            results.append(
                _issue_result(
                    f"DOC_PENDING_{doc_type.name}",
                    ComplianceDomain.DOCUMENTS,
                    ComplianceSeverity.WARNING,
                    f"Document pending approval: {doc_type.label}",
                    passed=True,
                    score=HALF_SCORE,
                    remedy="Review and approve the document.",
                    blocking_stages=_DOC_PENDING_BLOCKS,
                )
            )
        else:
            results.append(_passed(f"DOC_OK_{doc_type.name}", ComplianceDomain.DOCUMENTS))
    return results


# ---------------------------------------------------------------------------
# Compliance flags
# ---------------------------------------------------------------------------


def check_flags(candidate: Candidate) -> list[RuleResult]:
    """One result per unresolved flag; a single pass when none are open."""
    if not candidate.compliance_flags:
        return [_passed("NO_FLAGS", ComplianceDomain.FLAGS)]

    active = [f for f in candidate.compliance_flags if not f.is_resolved]
    if not active:
        return [_passed("FLAGS_RESOLVED", ComplianceDomain.FLAGS)]

    results: list[RuleResult] = []
    for flag in active:
        critical = flag.severity == FlagSeverity.CRITICAL
        results.append(
            _issue_result(
                f"FLAG_{flag.id}",
                ComplianceDomain.FLAGS,
                ComplianceSeverity.CRITICAL if critical else ComplianceSeverity.WARNING,
                f"Compliance flag: {flag.reason}",
                passed=not critical,
                score=0 if critical else HALF_SCORE,
                remedy="Resolve the compliance flag.",
                blocking_stages=list(WORKFLOW_STAGES) if critical else [],
            )
        )
    return results


# ---------------------------------------------------------------------------
# Scoring and combined runner
# ---------------------------------------------------------------------------


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_results(
    results: list[RuleResult],
) -> tuple[int, dict[ComplianceDomain, DomainScore]]:
    """Overall percentage plus per-domain raw score / max score."""
    breakdown: dict[ComplianceDomain, DomainScore] = {}
    for result in results:
        current = breakdown.get(result.domain, DomainScore(score=0, max_score=0))
        breakdown[result.domain] = DomainScore(
            score=current.score + result.score_impact,
            max_score=current.max_score + FULL_SCORE,
        )

    total = sum(d.score for d in breakdown.values())
    total_max = sum(d.max_score for d in breakdown.values())
    overall = _round_half_up(total / total_max * 100) if total_max else FULL_SCORE
    return overall, breakdown


def evaluate_candidate(
    candidate: Candidate,
    *,
    rules: CountryRuleBook | None = None,
    now: datetime | None = None,
) -> ComplianceReport:
    """Run every compliance check and score the results.

    Args:
        candidate: Candidate snapshot to evaluate.
        rules: Country rule lookup (defaults to the built-in table).
        now: Evaluation time (for testing). Dates are compared in UTC.

    Returns:
        ComplianceReport. ``is_processable`` is False when any result carries
        a CRITICAL issue.
    """
    if now is None:
        now = datetime.now(UTC)
    if rules is None:
        rules = CountryRuleBook()

    today = now.date()
    rule = rules.get(candidate.target_country)

    results: list[RuleResult] = [
        check_passport(candidate, rule, today),
        check_pcc(candidate, rule, today),
        check_medical(candidate, rule, today),
        check_age(candidate, rule, today),
        *check_documents(candidate, rule.mandatory_documents),
        *check_flags(candidate),
    ]

    overall, breakdown = score_results(results)
    critical = sum(1 for r in results if r.is_critical)
    warnings = sum(1 for r in results if r.is_warning)

    logger.debug(
        "Compliance for candidate %s (%s): score=%d critical=%d warning=%d",
        candidate.id,
        rule.country_name,
        overall,
        critical,
        warnings,
    )

    return ComplianceReport(
        candidate_id=candidate.id,
        generated_at=now,
        country_rule=rule.country_name,
        overall_score=overall,
        domain_breakdown=breakdown,
        critical_issues_count=critical,
        warning_issues_count=warnings,
        results=results,
        is_processable=critical == 0,
    )


def generate_compliance_alerts(report: ComplianceReport) -> list[ComplianceNotification]:
    """One notification per CRITICAL or WARNING issue in the report.

    Ids are ``compliance-{issue_id}-{candidate_id}`` so repeated runs produce
    the same key for the same open issue.
    """
    alerts: list[ComplianceNotification] = []
    for result in report.results:
        issue = result.issue
        if issue is None or issue.severity == ComplianceSeverity.INFO:
            continue
        critical = issue.severity == ComplianceSeverity.CRITICAL
        alerts.append(
            ComplianceNotification(
                id=f"compliance-{issue.id}-{report.candidate_id}",
                type=AlertType.DELAY if critical else AlertType.WARNING,
                title=f"Compliance Alert: {result.domain.value.title()}",
                message=issue.message,
                timestamp=report.generated_at,
                candidate_id=report.candidate_id,
                link=f"/candidates/{report.candidate_id}",
            )
        )
    return alerts
