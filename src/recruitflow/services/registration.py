# This project was developed with assistance from AI tools.
"""Candidate registration."""

import logging
import random
import uuid
from datetime import UTC, date, datetime

from ..enums import StageStatus, TimelineEventType, WorkflowStage
from ..schemas.auth import SYSTEM_ACTOR, Actor
from ..schemas.candidate import Candidate, StageHistoryEntry
from .timeline import record_event

logger = logging.getLogger(__name__)


def generate_candidate_code(year: int, rng: random.Random | None = None) -> str:
    """Human-facing candidate code, e.g. ``GW-2026-4821``."""
    number = (rng or random).randint(1000, 9999)
    return f"GW-{year}-{number}"


def register_candidate(
    *,
    name: str,
    actor: Actor = SYSTEM_ACTOR,
    dob: date | None = None,
    nic: str | None = None,
    email: str | None = None,
    phone: str | None = None,
    role: str | None = None,
    target_country: str | None = None,
    candidate_code: str | None = None,
    now: datetime | None = None,
) -> Candidate:
    """Create a candidate at the first workflow stage.

    The new record carries one stage-history entry and a SYSTEM
    "Candidate Registered" timeline event.
    """
    if now is None:
        now = datetime.now(UTC)

    candidate = Candidate(
        id=str(uuid.uuid4()),
        candidate_code=candidate_code or generate_candidate_code(now.year),
        name=name,
        nic=nic,
        email=email,
        phone=phone,
        dob=dob,
        role=role,
        target_country=target_country,
        stage=WorkflowStage.REGISTERED,
        stage_status=StageStatus.PENDING,
        stage_entered_at=now,
        stage_history=[
            StageHistoryEntry(stage=WorkflowStage.REGISTERED, timestamp=now, user_id=actor.user_id)
        ],
    )
    record_event(
        candidate,
        TimelineEventType.SYSTEM,
        "Candidate Registered",
        actor,
        description=f"{name} registered as {candidate.candidate_code}",
        now=now,
    )
    logger.info("Registered candidate %s (%s)", candidate.id, candidate.candidate_code)
    return candidate
