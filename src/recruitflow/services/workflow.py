# This project was developed with assistance from AI tools.
"""Candidate workflow state machine.

Stages move strictly forward one at a time. Entering a stage requires its
entry requirements (see stage_requirements), no unresolved CRITICAL flag,
and no compliance issue that lists the stage as blocked. Privileged actors
may force any move (logged as a manual override) or roll a candidate back.

Business rejections are returned as results, never raised. Only input the
engine cannot reason about (an unknown stage, a malformed candidate) raises.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from ..core.config import Settings
from ..core.config import settings as app_settings
from ..enums import (
    WORKFLOW_STAGES,
    StageStatus,
    TimelineEventType,
    TransitionType,
    WorkflowStage,
)
from ..schemas.auth import Actor
from ..schemas.candidate import Candidate, StageHistoryEntry, TimelineEvent
from ..schemas.compliance import ComplianceReport
from ..schemas.workflow import SLAStatus, TransitionResult, TransitionValidation
from .compliance.checks import evaluate_candidate
from .compliance.country_rules import CountryRuleBook, load_country_rules
from .sla import SLA_LIMITS, calculate_sla
from .stage_requirements import (
    STAGE_REQUIREMENTS,
    Requirement,
    RequirementContext,
    unmet_requirements,
)
from .timeline import append_event, build_event

logger = logging.getLogger(__name__)

COMPLIANCE_PREFIX = "[COMPLIANCE]"
SKIP_BLOCKER = "Cannot skip stages: transitions must move forward one stage at a time"
ROLLBACK_WARNING = "This is a rollback. A reason must be provided."


class WorkflowError(ValueError):
    """Raised for input the workflow engine cannot reason about."""

    code = "workflow_error"


class UnknownStageError(WorkflowError):
    """Raised when a stage identifier is not one of the workflow stages."""

    code = "unknown_stage"


class MalformedCandidateError(WorkflowError):
    """Raised when a candidate record lacks the structure the engine needs."""

    code = "malformed_candidate"


def coerce_stage(value: WorkflowStage | str) -> WorkflowStage:
    """Resolve a stage by enum, value ("visa_received") or name ("VISA_RECEIVED")."""
    if isinstance(value, WorkflowStage):
        return value
    if isinstance(value, str):
        try:
            return WorkflowStage(value)
        except ValueError:
            member = WorkflowStage.__members__.get(value.upper())
            if member is not None:
                return member
    raise UnknownStageError(f"Unknown workflow stage: {value!r}")


def coerce_candidate(candidate: Candidate | Mapping[str, Any]) -> Candidate:
    if isinstance(candidate, Candidate):
        # model_construct() skips validation; the stage is all the engine needs
        if not isinstance(getattr(candidate, "stage", None), WorkflowStage):
            raise MalformedCandidateError(
                f"Candidate has no valid stage: {getattr(candidate, 'stage', None)!r}"
            )
        return candidate
    if isinstance(candidate, Mapping):
        try:
            return Candidate.model_validate(candidate)
        except ValidationError as e:
            raise MalformedCandidateError(f"Malformed candidate record: {e}") from e
    raise MalformedCandidateError(
        f"Expected a candidate record, got {type(candidate).__name__}"
    )


def _dedupe(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


# ---------------------------------------------------------------------------
# Stage navigation
# ---------------------------------------------------------------------------


def next_stage(stage: WorkflowStage | str) -> WorkflowStage | None:
    """The stage after ``stage``, or None at the final stage."""
    position = coerce_stage(stage).position
    if position == len(WORKFLOW_STAGES) - 1:
        return None
    return WORKFLOW_STAGES[position + 1]


def previous_stage(stage: WorkflowStage | str) -> WorkflowStage | None:
    position = coerce_stage(stage).position
    if position == 0:
        return None
    return WORKFLOW_STAGES[position - 1]


def workflow_progress(stage: WorkflowStage | str) -> int:
    """Percent of the workflow completed on reaching ``stage`` (0-100)."""
    return round(coerce_stage(stage).position / (len(WORKFLOW_STAGES) - 1) * 100)


def remaining_stages(stage: WorkflowStage | str) -> list[WorkflowStage]:
    return list(WORKFLOW_STAGES[coerce_stage(stage).position + 1 :])


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class WorkflowEngine:
    """Validates and performs stage transitions against injected rule tables.

    Args:
        requirements: Stage -> entry requirements.
        country_rules: Country rule lookup used by requirements and compliance.
        sla_limits: Stage -> expected days.
        settings: Thresholds and override roles.
        clock: Returns the current time (for testing).
    """

    def __init__(
        self,
        *,
        requirements: Mapping[WorkflowStage, tuple[Requirement, ...]] = STAGE_REQUIREMENTS,
        country_rules: CountryRuleBook | None = None,
        sla_limits: Mapping[WorkflowStage, int] = SLA_LIMITS,
        settings: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.requirements = requirements
        self.country_rules = country_rules or CountryRuleBook()
        self.sla_limits = sla_limits
        self.settings = settings or app_settings
        self._clock = clock or (lambda: datetime.now(UTC))

    def now(self) -> datetime:
        return self._clock()

    def can_override(self, actor: Actor) -> bool:
        return actor.role in self.settings.OVERRIDE_ROLES

    # -- Read-only evaluation ----------------------------------------------

    def evaluate_compliance(
        self,
        candidate: Candidate | Mapping[str, Any],
        *,
        now: datetime | None = None,
    ) -> ComplianceReport:
        candidate = coerce_candidate(candidate)
        return evaluate_candidate(
            candidate,
            rules=self.country_rules,
            now=now or self.now(),
        )

    def calculate_sla(self, candidate: Candidate | Mapping[str, Any]) -> SLAStatus:
        candidate = coerce_candidate(candidate)
        return calculate_sla(
            candidate,
            now=self.now(),
            limits=self.sla_limits,
            default_days=self.settings.DEFAULT_SLA_DAYS,
            warning_ratio=self.settings.SLA_WARNING_RATIO,
        )

    def overdue_candidates(
        self,
        candidates: Iterable[Candidate],
    ) -> list[tuple[Candidate, SLAStatus]]:
        """Candidates past their stage SLA, in input order."""
        result = []
        for candidate in candidates:
            sla = self.calculate_sla(candidate)
            if sla.overdue:
                result.append((candidate, sla))
        return result

    def _entry_blockers(
        self,
        candidate: Candidate,
        target: WorkflowStage,
        now: datetime,
    ) -> tuple[list[str], list[str]]:
        """Everything that stops ``candidate`` entering ``target`` right now."""
        ctx = RequirementContext(
            now=now,
            rule=self.country_rules.get(candidate.target_country),
            settings=self.settings,
        )
        blockers, warnings = unmet_requirements(candidate, target, ctx, self.requirements)

        for flag in candidate.compliance_flags:
            if flag.is_blocking:
                blockers.append(f"{COMPLIANCE_PREFIX} Compliance flag: {flag.reason}")

        report = self.evaluate_compliance(candidate, now=now)
        for issue in report.blocking_issues(target):
            blockers.append(f"{COMPLIANCE_PREFIX} {issue.message}")

        return _dedupe(blockers), _dedupe(warnings)

    def validate_transition(
        self,
        candidate: Candidate | Mapping[str, Any],
        target_stage: WorkflowStage | str,
    ) -> TransitionValidation:
        """Check whether ``candidate`` may move to ``target_stage``.

        Same stage and any backward move are allowed here; executing a
        backward move is the privileged ``rollback`` operation.
        """
        candidate = coerce_candidate(candidate)
        target = coerce_stage(target_stage)
        current = candidate.stage

        if target == current:
            return TransitionValidation(allowed=True)
        if target.position < current.position:
            return TransitionValidation(allowed=True, warnings=[ROLLBACK_WARNING])
        if target.position > current.position + 1:
            return TransitionValidation(allowed=False, blockers=[SKIP_BLOCKER])

        blockers, warnings = self._entry_blockers(candidate, target, self.now())
        return TransitionValidation(allowed=not blockers, blockers=blockers, warnings=warnings)

    # -- Mutations -----------------------------------------------------------

    def perform_transition(
        self,
        candidate: Candidate,
        target_stage: WorkflowStage | str,
        actor: Actor,
        *,
        reason: str | None = None,
        force: bool = False,
    ) -> TransitionResult:
        """Move the candidate to ``target_stage`` if allowed.

        With ``force=True`` a privileged actor may move to any stage,
        bypassing every check; the bypassed blockers are recorded on the
        MANUAL_OVERRIDE event. On any failure the candidate is untouched.
        """
        candidate = coerce_candidate(candidate)
        target = coerce_stage(target_stage)
        current = candidate.stage
        now = self.now()

        if target == current:
            return TransitionResult(success=True)

        if force:
            return self._forced_transition(candidate, target, actor, reason, now)

        if target.position < current.position:
            return TransitionResult(
                success=False,
                error=(
                    f"Cannot move back from {current.label} to {target.label} "
                    "with a transition; use rollback"
                ),
            )

        validation = self.validate_transition(candidate, target)
        if not validation.allowed:
            logger.info(
                "Transition %s -> %s blocked for candidate %s (%d blockers)",
                current.value,
                target.value,
                candidate.id,
                len(validation.blockers),
            )
            return TransitionResult(
                success=False,
                error=f"Transition blocked: {'; '.join(validation.blockers)}",
                blockers=validation.blockers,
            )

        event = self._transition_event(
            candidate,
            target,
            actor,
            event_type=TimelineEventType.STAGE_TRANSITION,
            transition_type=TransitionType.FORWARD,
            title=f"Moved to {target.label}",
            reason=reason,
            now=now,
            extra={"warnings": validation.warnings},
        )
        self._apply(candidate, target, event, actor, reason, now)
        logger.info(
            "Candidate %s moved %s -> %s by %s",
            candidate.id,
            current.value,
            target.value,
            actor.user_id,
        )
        return TransitionResult(success=True, event=event)

    def _forced_transition(
        self,
        candidate: Candidate,
        target: WorkflowStage,
        actor: Actor,
        reason: str | None,
        now: datetime,
    ) -> TransitionResult:
        current = candidate.stage
        if not self.can_override(actor):
            logger.warning(
                "Override of candidate %s to %s refused for %s (role=%s)",
                candidate.id,
                target.value,
                actor.user_id,
                actor.role.value,
            )
            return TransitionResult(
                success=False,
                error=f"Role '{actor.role.value}' is not permitted to override the workflow",
            )
        if not reason or not reason.strip():
            return TransitionResult(success=False, error="An override requires a reason")

        bypassed: list[str] = []
        if target.position > current.position:
            if target.position > current.position + 1:
                bypassed.append(SKIP_BLOCKER)
            blockers, _ = self._entry_blockers(candidate, target, now)
            bypassed.extend(blockers)

        event = self._transition_event(
            candidate,
            target,
            actor,
            event_type=TimelineEventType.MANUAL_OVERRIDE,
            transition_type=TransitionType.OVERRIDE,
            title=f"Manual Override: {current.label} to {target.label}",
            reason=reason,
            now=now,
            extra={"bypassed_blockers": bypassed},
        )
        self._apply(candidate, target, event, actor, reason, now)
        logger.info(
            "Candidate %s forced %s -> %s by %s (%d blockers bypassed)",
            candidate.id,
            current.value,
            target.value,
            actor.user_id,
            len(bypassed),
        )
        return TransitionResult(success=True, event=event)

    def rollback(
        self,
        candidate: Candidate,
        target_stage: WorkflowStage | str,
        actor: Actor,
        reason: str | None,
    ) -> TransitionResult:
        """Revert the candidate to an earlier stage (privileged, reason required)."""
        candidate = coerce_candidate(candidate)
        target = coerce_stage(target_stage)
        current = candidate.stage
        now = self.now()

        if target.position >= current.position:
            return TransitionResult(
                success=False,
                error=f"Rollback target must be earlier than {current.label}",
            )
        if not reason or not reason.strip():
            return TransitionResult(success=False, error="Rollback requires a reason")
        if not self.can_override(actor):
            logger.warning(
                "Rollback of candidate %s refused for %s (role=%s)",
                candidate.id,
                actor.user_id,
                actor.role.value,
            )
            return TransitionResult(
                success=False,
                error=f"Role '{actor.role.value}' is not permitted to roll back candidates",
            )

        event = self._transition_event(
            candidate,
            target,
            actor,
            event_type=TimelineEventType.MANUAL_OVERRIDE,
            transition_type=TransitionType.ROLLBACK,
            title=f"Rollback: {current.label} to {target.label}",
            reason=reason,
            now=now,
        )
        self._apply(candidate, target, event, actor, reason, now)
        logger.info(
            "Candidate %s rolled back %s -> %s by %s",
            candidate.id,
            current.value,
            target.value,
            actor.user_id,
        )
        return TransitionResult(success=True, event=event)

    def _transition_event(
        self,
        candidate: Candidate,
        target: WorkflowStage,
        actor: Actor,
        *,
        event_type: TimelineEventType,
        transition_type: TransitionType,
        title: str,
        reason: str | None,
        now: datetime,
        extra: dict[str, Any] | None = None,
    ) -> TimelineEvent:
        sla = calculate_sla(
            candidate,
            now=now,
            limits=self.sla_limits,
            default_days=self.settings.DEFAULT_SLA_DAYS,
            warning_ratio=self.settings.SLA_WARNING_RATIO,
        )
        metadata: dict[str, Any] = {
            "from_stage": candidate.stage.value,
            "to_stage": target.value,
            "transition_type": transition_type.value,
            "sla_status": "OVERDUE" if sla.overdue else "ON_TIME",
            "days_in_previous_stage": sla.days_in_stage,
            "reason": reason,
        }
        metadata.update(extra or {})
        return build_event(
            candidate,
            event_type,
            title,
            actor,
            description=reason or "",
            stage=target,
            is_critical=event_type == TimelineEventType.MANUAL_OVERRIDE,
            metadata=metadata,
            now=now,
        )

    @staticmethod
    def _apply(
        candidate: Candidate,
        target: WorkflowStage,
        event: TimelineEvent,
        actor: Actor,
        reason: str | None,
        now: datetime,
    ) -> None:
        """Apply a prepared transition. Everything is built before this runs."""
        entry = StageHistoryEntry(stage=target, timestamp=now, user_id=actor.user_id, notes=reason)
        candidate.stage = target
        candidate.stage_entered_at = now
        candidate.stage_status = StageStatus.PENDING
        candidate.stage_history.append(entry)
        append_event(candidate, event)


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_engine: WorkflowEngine | None = None


def init_workflow_engine(cfg: Settings) -> WorkflowEngine:
    """Initialise the shared engine (called once from app lifespan)."""
    global _engine  # noqa: PLW0603
    if cfg.COUNTRY_RULES_PATH is not None:
        rules = load_country_rules(cfg.COUNTRY_RULES_PATH)
    else:
        rules = CountryRuleBook()
    _engine = WorkflowEngine(country_rules=rules, settings=cfg)
    logger.info("WorkflowEngine initialised (%d country rules)", len(rules.countries()))
    return _engine


def get_workflow_engine() -> WorkflowEngine:
    """Return the shared engine, initialising it from settings on first use."""
    if _engine is None:
        return init_workflow_engine(app_settings)
    return _engine
