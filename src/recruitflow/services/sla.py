# This project was developed with assistance from AI tools.
"""Per-stage SLA tracking.

Each stage has an expected duration in days. Time in stage is counted in
started days, so one hour in a stage already counts as day one.
"""

import math
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta

from ..enums import SLALevel, WorkflowStage
from ..schemas.candidate import Candidate
from ..schemas.workflow import SLAStatus

# Expected days per stage. DEPARTED is terminal and never goes overdue.
SLA_LIMITS: dict[WorkflowStage, int] = {
    WorkflowStage.REGISTERED: 2,
    WorkflowStage.VERIFIED: 7,
    WorkflowStage.APPLIED: 14,
    WorkflowStage.OFFER_RECEIVED: 7,
    WorkflowStage.WP_RECEIVED: 14,
    WorkflowStage.EMBASSY_APPLIED: 21,
    WorkflowStage.VISA_RECEIVED: 7,
    WorkflowStage.SLBFE_REGISTRATION: 5,
    WorkflowStage.TICKET_ISSUED: 3,
    WorkflowStage.DEPARTED: 0,
}

_ONE_DAY = timedelta(days=1)


def ensure_tz(dt: datetime) -> datetime:
    """Ensure a datetime is timezone-aware (UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def days_in_stage(entered_at: datetime, now: datetime) -> int:
    """Started days since ``entered_at`` (never negative)."""
    elapsed = ensure_tz(now) - ensure_tz(entered_at)
    return max(0, math.ceil(elapsed / _ONE_DAY))


def calculate_sla(
    candidate: Candidate,
    *,
    now: datetime,
    limits: Mapping[WorkflowStage, int] = SLA_LIMITS,
    default_days: int = 7,
    warning_ratio: float = 0.8,
) -> SLAStatus:
    """SLA status of the candidate's current stage.

    Overdue strictly after the limit: a candidate exactly ``limit`` days in
    stage is still on time at the WARNING level.
    """
    stage = candidate.stage
    sla_days = limits.get(stage, default_days)
    entered_at = ensure_tz(candidate.stage_entered_at)
    days = days_in_stage(entered_at, now)

    overdue = sla_days > 0 and days > sla_days
    if overdue:
        level = SLALevel.CRITICAL
    elif sla_days > 0 and days >= warning_ratio * sla_days:
        level = SLALevel.WARNING
    else:
        level = SLALevel.ON_TIME

    percentage = round(days / sla_days * 100) if sla_days > 0 else 0

    return SLAStatus(
        stage=stage,
        entered_at=entered_at,
        deadline=entered_at + timedelta(days=sla_days),
        sla_days=sla_days,
        days_in_stage=days,
        days_remaining=sla_days - days,
        percentage_elapsed=percentage,
        overdue=overdue,
        level=level,
    )
