# This project was developed with assistance from AI tools.
"""Manually raised compliance flags.

A flag stays open until someone resolves it explicitly. While open, a
CRITICAL flag blocks every stage transition.
"""

import logging
import uuid
from datetime import UTC, datetime

from ..enums import FlagSeverity, FlagType, TimelineEventType
from ..schemas.auth import Actor
from ..schemas.candidate import Candidate, ComplianceFlag
from .timeline import record_event

logger = logging.getLogger(__name__)


class FlagNotFoundError(LookupError):
    """Raised when a flag id does not exist on the candidate."""

    pass


def raise_flag(
    candidate: Candidate,
    severity: FlagSeverity,
    reason: str,
    actor: Actor,
    *,
    flag_type: FlagType = FlagType.OTHER,
    now: datetime | None = None,
) -> ComplianceFlag:
    if now is None:
        now = datetime.now(UTC)
    flag = ComplianceFlag(
        id=f"flag-{uuid.uuid4().hex[:12]}",
        type=flag_type,
        severity=severity,
        reason=reason,
        created_by=actor.name,
        created_at=now,
    )
    candidate.compliance_flags.append(flag)
    record_event(
        candidate,
        TimelineEventType.ALERT,
        f"Compliance Flag Raised ({severity.value})",
        actor,
        description=reason,
        is_critical=severity == FlagSeverity.CRITICAL,
        metadata={"flag_id": flag.id, "flag_type": flag_type.value},
        now=now,
    )
    logger.info(
        "Flag %s (%s) raised on candidate %s by %s",
        flag.id,
        severity.value,
        candidate.id,
        actor.user_id,
    )
    return flag


def resolve_flag(
    candidate: Candidate,
    flag_id: str,
    actor: Actor,
    *,
    notes: str | None = None,
    now: datetime | None = None,
) -> ComplianceFlag:
    """Mark a flag resolved. Resolving an already-resolved flag is a no-op.

    Raises:
        FlagNotFoundError: No flag with ``flag_id`` on the candidate.
    """
    flag = next((f for f in candidate.compliance_flags if f.id == flag_id), None)
    if flag is None:
        raise FlagNotFoundError(f"Flag {flag_id} not found on candidate {candidate.id}")
    if flag.is_resolved:
        return flag
    if now is None:
        now = datetime.now(UTC)

    flag.is_resolved = True
    flag.resolved_by = actor.name
    flag.resolved_at = now
    flag.resolution_notes = notes
    record_event(
        candidate,
        TimelineEventType.NOTE,
        "Compliance Flag Resolved",
        actor,
        description=notes or flag.reason,
        metadata={"flag_id": flag.id},
        now=now,
    )
    logger.info("Flag %s resolved on candidate %s by %s", flag.id, candidate.id, actor.user_id)
    return flag
