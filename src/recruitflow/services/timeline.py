# This project was developed with assistance from AI tools.
"""Candidate timeline (append-only audit trail).

Events are frozen once built. ``append_event`` is the only place a
candidate's ``timeline_events`` list grows; nothing here edits or removes an
existing event.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from ..enums import TimelineEventType, WorkflowStage
from ..schemas.auth import Actor
from ..schemas.candidate import Candidate, TimelineEvent


def new_event_id() -> str:
    return f"evt-{uuid.uuid4().hex}"


def build_event(
    candidate: Candidate,
    event_type: TimelineEventType,
    title: str,
    actor: Actor,
    *,
    description: str = "",
    stage: WorkflowStage | None = None,
    is_critical: bool = False,
    metadata: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> TimelineEvent:
    """Build (but do not record) an event in the candidate's context.

    ``stage`` defaults to the candidate's current stage.
    """
    if now is None:
        now = datetime.now(UTC)
    meta = {"user_id": actor.user_id, "role": actor.role.value}
    meta.update(metadata or {})
    return TimelineEvent(
        id=new_event_id(),
        type=event_type,
        title=title,
        description=description,
        timestamp=now,
        actor=actor.name,
        stage=stage if stage is not None else candidate.stage,
        is_critical=is_critical,
        metadata=meta,
    )


def append_event(candidate: Candidate, event: TimelineEvent) -> TimelineEvent:
    candidate.timeline_events.append(event)
    return event


def record_event(
    candidate: Candidate,
    event_type: TimelineEventType,
    title: str,
    actor: Actor,
    **kwargs: Any,
) -> TimelineEvent:
    """Build an event and append it to the candidate's timeline."""
    return append_event(candidate, build_event(candidate, event_type, title, actor, **kwargs))


def timeline_for_display(candidate: Candidate) -> list[TimelineEvent]:
    """Events newest first; ties keep reverse insertion order."""
    indexed = list(enumerate(candidate.timeline_events))
    indexed.sort(key=lambda pair: (pair[1].timestamp, pair[0]), reverse=True)
    return [event for _, event in indexed]
