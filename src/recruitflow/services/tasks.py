# This project was developed with assistance from AI tools.
"""Staff work queue and system-wide alerts.

Scans a batch of candidates and derives to-do items from SLA state,
compliance flags, document status and stage sub-status. Read-only: no
candidate is modified.
"""

import logging
from collections.abc import Iterable, Sequence

from ..enums import (
    AlertType,
    DocumentStatus,
    EmployerStatus,
    FlagSeverity,
    PassportStatus,
    PaymentStatus,
    PCCStatus,
    StageStatus,
    TaskPriority,
    TaskType,
    WorkflowStage,
)
from ..schemas.candidate import Candidate
from ..schemas.tasks import SystemAlert, WorkTask
from .compliance.validity import passport_status, pcc_status
from .workflow import WorkflowEngine

logger = logging.getLogger(__name__)

# Stages where an unpaid balance holds up ticketing
_PAYMENT_STAGES = {WorkflowStage.SLBFE_REGISTRATION, WorkflowStage.TICKET_ISSUED}

_AWAITING_EMPLOYER = {None, EmployerStatus.PENDING}


def _task(
    candidate: Candidate,
    engine: WorkflowEngine,
    *,
    key: str,
    title: str,
    description: str,
    priority: TaskPriority,
    task_type: TaskType,
    due_date: str,
    action_label: str,
) -> WorkTask:
    return WorkTask(
        id=f"task-{key}-{candidate.id}",
        title=title,
        description=description,
        priority=priority,
        type=task_type,
        candidate_id=candidate.id,
        candidate_name=candidate.name,
        stage=candidate.stage,
        due_date=due_date,
        action_label=action_label,
        timestamp=engine.now(),
        link=f"/candidates/{candidate.id}",
    )


def _candidate_tasks(candidate: Candidate, engine: WorkflowEngine) -> list[WorkTask]:
    tasks: list[WorkTask] = []
    sla = engine.calculate_sla(candidate)
    open_flags = [f for f in candidate.compliance_flags if not f.is_resolved]
    critical_flags = [f for f in open_flags if f.severity == FlagSeverity.CRITICAL]
    warning_flags = [f for f in open_flags if f.severity == FlagSeverity.WARNING]

    if sla.overdue:
        tasks.append(
            _task(
                candidate,
                engine,
                key="sla",
                title=f"SLA Breach: {candidate.stage.label}",
                description=(
                    f"Candidate stuck in {candidate.stage.label} for {sla.days_in_stage} days "
                    f"(limit {sla.sla_days}). Immediate action required."
                ),
                priority=TaskPriority.CRITICAL,
                task_type=TaskType.ISSUE,
                due_date="Today",
                action_label="Expedite",
            )
        )

    if critical_flags:
        tasks.append(
            _task(
                candidate,
                engine,
                key="flag-crit",
                title="Resolve Critical Compliance Flag",
                description="; ".join(f.reason for f in critical_flags),
                priority=TaskPriority.CRITICAL,
                task_type=TaskType.ISSUE,
                due_date="Today",
                action_label="Review Flag",
            )
        )

    pending_docs = [d for d in candidate.documents if d.status == DocumentStatus.PENDING_REVIEW]
    if (
        candidate.stage == WorkflowStage.REGISTERED
        and candidate.stage_status == StageStatus.PENDING
        and pending_docs
    ):
        tasks.append(
            _task(
                candidate,
                engine,
                key="verify",
                title="Verify Documents",
                description=(
                    f"{len(pending_docs)} document(s) uploaded. Review and approve to proceed."
                ),
                priority=TaskPriority.HIGH,
                task_type=TaskType.VERIFICATION,
                due_date="Today",
                action_label="Review Docs",
            )
        )

    if (
        candidate.stage in _PAYMENT_STAGES
        and candidate.stage_data.payment_status != PaymentStatus.COMPLETED
    ):
        tasks.append(
            _task(
                candidate,
                engine,
                key="pay",
                title="Collect Final Payment",
                description="Ticket issuance blocked. Collect outstanding balance.",
                priority=TaskPriority.HIGH,
                task_type=TaskType.PAYMENT,
                due_date="ASAP",
                action_label="Record Payment",
            )
        )

    if warning_flags:
        tasks.append(
            _task(
                candidate,
                engine,
                key="flag-warn",
                title="Review Compliance Warning",
                description="; ".join(f.reason for f in warning_flags),
                priority=TaskPriority.MEDIUM,
                task_type=TaskType.ISSUE,
                due_date="This Week",
                action_label="Review Flag",
            )
        )

    corrections = [
        d for d in candidate.documents if d.status == DocumentStatus.CORRECTION_REQUIRED
    ]
    if corrections:
        tasks.append(
            _task(
                candidate,
                engine,
                key="fix",
                title="Follow-up on Corrections",
                description=f"{len(corrections)} document(s) need correction from candidate.",
                priority=TaskPriority.MEDIUM,
                task_type=TaskType.FOLLOW_UP,
                due_date="Tomorrow",
                action_label="Contact Candidate",
            )
        )

    if (
        candidate.stage == WorkflowStage.APPLIED
        and candidate.stage_data.employer_status in _AWAITING_EMPLOYER
        and sla.days_in_stage >= engine.settings.STALE_APPLICATION_DAYS
    ):
        tasks.append(
            _task(
                candidate,
                engine,
                key="match",
                title="Chase Employer Response",
                description=(
                    f"Applied {sla.days_in_stage} days ago with no employer response."
                ),
                priority=TaskPriority.MEDIUM,
                task_type=TaskType.APPROVAL,
                due_date="This Week",
                action_label="Match Job",
            )
        )

    return tasks


def generate_work_queue(
    candidates: Iterable[Candidate],
    *,
    engine: WorkflowEngine,
) -> list[WorkTask]:
    """Prioritised to-do list across all candidates.

    Sorted by priority weight, highest first. ``sorted`` is stable, so tasks
    of equal priority keep candidate input order.
    """
    tasks: list[WorkTask] = []
    for candidate in candidates:
        tasks.extend(_candidate_tasks(candidate, engine))
    return sorted(tasks, key=lambda t: t.priority.weight, reverse=True)


def _count_documents_status(
    candidates: Sequence[Candidate],
    engine: WorkflowEngine,
) -> tuple[int, int, int]:
    """(expired passports, expiring passports, expired PCCs)."""
    today = engine.now().date()
    expired = expiring = pcc_expired = 0
    for candidate in candidates:
        rule = engine.country_rules.get(candidate.target_country)
        if candidate.passport_data is not None:
            status = passport_status(
                candidate.passport_data, today, rule.min_passport_validity_days
            )
            if status == PassportStatus.EXPIRED:
                expired += 1
            elif status == PassportStatus.EXPIRING:
                expiring += 1
        if rule.checks_pcc and candidate.pcc_data is not None:
            status = pcc_status(
                candidate.pcc_data, today, rule.pcc_validity_days, rule.pcc_warning_days
            )
            if status == PCCStatus.EXPIRED:
                pcc_expired += 1
    return expired, expiring, pcc_expired


def generate_system_alerts(
    candidates: Iterable[Candidate],
    *,
    engine: WorkflowEngine,
) -> list[SystemAlert]:
    """One summary alert per category; categories with a zero count are omitted."""
    candidates = list(candidates)
    now = engine.now()

    overdue = len(engine.overdue_candidates(candidates))
    passports_expired, passports_expiring, pcc_expired = _count_documents_status(
        candidates, engine
    )
    new_registrations = sum(
        1
        for c in candidates
        if c.stage == WorkflowStage.REGISTERED and c.stage_status == StageStatus.PENDING
    )

    summaries = [
        ("alert-sla", AlertType.DELAY, overdue, "candidates have breached SLA limits."),
        (
            "alert-ppt-exp",
            AlertType.DELAY,
            passports_expired,
            "candidates have expired passports.",
        ),
        (
            "alert-ppt-expiring",
            AlertType.WARNING,
            passports_expiring,
            "candidates have passports expiring soon.",
        ),
        (
            "alert-pcc-exp",
            AlertType.DELAY,
            pcc_expired,
            "candidates have expired police clearance.",
        ),
        (
            "alert-new",
            AlertType.INFO,
            new_registrations,
            "new registrations waiting for review.",
        ),
    ]

    alerts = [
        SystemAlert(
            id=alert_id,
            type=alert_type,
            message=f"{count} {text}",
            timestamp=now,
            count=count,
        )
        for alert_id, alert_type, count, text in summaries
        if count > 0
    ]
    logger.debug("Generated %d system alerts for %d candidates", len(alerts), len(candidates))
    return alerts
