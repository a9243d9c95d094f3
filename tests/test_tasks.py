# This project was developed with assistance from AI tools.
"""Tests for the staff work queue and system-wide alerts."""

from datetime import timedelta

from recruitflow.enums import (
    AlertType,
    DocumentStatus,
    DocumentType,
    EmployerStatus,
    FlagSeverity,
    PaymentStatus,
    StageStatus,
    TaskPriority,
    TaskType,
    WorkflowStage,
)
from recruitflow.schemas.candidate import StageData
from recruitflow.services.tasks import generate_system_alerts, generate_work_queue

from .factories import (
    NOW,
    make_candidate,
    make_document,
    make_flag,
    make_passport,
    make_pcc,
)


def _settled(**overrides):
    """A candidate no longer waiting in Registered, so it raises nothing by default."""
    overrides.setdefault("stage", WorkflowStage.VERIFIED)
    return make_candidate(**overrides)


# ---------------------------------------------------------------------------
# Work queue
# ---------------------------------------------------------------------------


class TestWorkQueue:
    def test_quiet_candidate_has_no_tasks(self, engine):
        assert generate_work_queue([make_candidate()], engine=engine) == []

    def test_sla_breach(self, engine):
        candidate = make_candidate(stage_entered_at=NOW - timedelta(days=5))
        [task] = generate_work_queue([candidate], engine=engine)
        assert task.id == "task-sla-cand-1"
        assert task.title == "SLA Breach: Registered"
        assert task.priority == TaskPriority.CRITICAL
        assert task.type == TaskType.ISSUE
        assert task.candidate_name == "Kamala Perera"
        assert task.timestamp == NOW
        assert task.link == "/candidates/cand-1"
        assert "5 days" in task.description

    def test_critical_flag(self, engine):
        candidate = _settled(compliance_flags=[make_flag(reason="Fake certificate")])
        [task] = generate_work_queue([candidate], engine=engine)
        assert task.id == "task-flag-crit-cand-1"
        assert task.priority == TaskPriority.CRITICAL
        assert task.description == "Fake certificate"

    def test_resolved_flag_ignored(self, engine):
        candidate = _settled(compliance_flags=[make_flag(is_resolved=True)])
        assert generate_work_queue([candidate], engine=engine) == []

    def test_warning_flag(self, engine):
        candidate = _settled(compliance_flags=[make_flag(FlagSeverity.WARNING)])
        [task] = generate_work_queue([candidate], engine=engine)
        assert task.id == "task-flag-warn-cand-1"
        assert task.priority == TaskPriority.MEDIUM

    def test_verify_uploaded_documents(self, engine):
        candidate = make_candidate(
            documents=[
                make_document(DocumentType.PASSPORT, DocumentStatus.PENDING_REVIEW),
                make_document(DocumentType.CV, DocumentStatus.PENDING_REVIEW),
                make_document(DocumentType.FULL_PHOTO),
            ]
        )
        [task] = generate_work_queue([candidate], engine=engine)
        assert task.type == TaskType.VERIFICATION
        assert task.priority == TaskPriority.HIGH
        assert task.description.startswith("2 document(s) uploaded")

    def test_no_verify_task_once_in_progress(self, engine):
        candidate = make_candidate(
            stage_status=StageStatus.IN_PROGRESS,
            documents=[make_document(DocumentType.PASSPORT, DocumentStatus.PENDING_REVIEW)],
        )
        assert generate_work_queue([candidate], engine=engine) == []

    def test_payment_outstanding(self, engine):
        candidate = make_candidate(stage=WorkflowStage.SLBFE_REGISTRATION)
        [task] = generate_work_queue([candidate], engine=engine)
        assert task.id == "task-pay-cand-1"
        assert task.type == TaskType.PAYMENT
        assert task.priority == TaskPriority.HIGH

    def test_payment_completed_no_task(self, engine):
        candidate = make_candidate(
            stage=WorkflowStage.TICKET_ISSUED,
            stage_data=StageData(payment_status=PaymentStatus.COMPLETED),
        )
        assert generate_work_queue([candidate], engine=engine) == []

    def test_correction_follow_up(self, engine):
        candidate = _settled(
            documents=[make_document(DocumentType.CV, DocumentStatus.CORRECTION_REQUIRED)]
        )
        [task] = generate_work_queue([candidate], engine=engine)
        assert task.type == TaskType.FOLLOW_UP
        assert task.priority == TaskPriority.MEDIUM

    def test_stale_application(self, engine):
        candidate = make_candidate(
            stage=WorkflowStage.APPLIED, stage_entered_at=NOW - timedelta(days=14)
        )
        [task] = generate_work_queue([candidate], engine=engine)
        assert task.id == "task-match-cand-1"
        assert task.type == TaskType.APPROVAL

    def test_recent_application_no_task(self, engine):
        candidate = make_candidate(
            stage=WorkflowStage.APPLIED, stage_entered_at=NOW - timedelta(days=10)
        )
        assert generate_work_queue([candidate], engine=engine) == []

    def test_employer_selected_no_chase(self, engine):
        candidate = make_candidate(
            stage=WorkflowStage.APPLIED,
            stage_entered_at=NOW - timedelta(days=14),
            stage_data=StageData(employer_status=EmployerStatus.SELECTED),
        )
        assert generate_work_queue([candidate], engine=engine) == []

    def test_sorted_by_priority(self, engine):
        corrections = _settled(
            id="a",
            documents=[make_document(DocumentType.CV, DocumentStatus.CORRECTION_REQUIRED)],
        )
        late = make_candidate(id="b", stage_entered_at=NOW - timedelta(days=5))
        unpaid = make_candidate(id="c", stage=WorkflowStage.TICKET_ISSUED)

        tasks = generate_work_queue([corrections, late, unpaid], engine=engine)
        assert [t.priority for t in tasks] == [
            TaskPriority.CRITICAL,
            TaskPriority.HIGH,
            TaskPriority.MEDIUM,
        ]
        assert [t.candidate_id for t in tasks] == ["b", "c", "a"]

    def test_equal_priority_keeps_input_order(self, engine):
        flags = [make_flag(FlagSeverity.WARNING)]
        candidates = [_settled(id=cid, compliance_flags=flags) for cid in ("z", "m", "a")]
        tasks = generate_work_queue(candidates, engine=engine)
        assert [t.candidate_id for t in tasks] == ["z", "m", "a"]

    def test_does_not_modify_candidates(self, engine):
        candidate = make_candidate(
            stage_entered_at=NOW - timedelta(days=5),
            compliance_flags=[make_flag()],
        )
        before = candidate.model_dump()
        generate_work_queue([candidate], engine=engine)
        assert candidate.model_dump() == before


# ---------------------------------------------------------------------------
# System alerts
# ---------------------------------------------------------------------------


class TestSystemAlerts:
    def test_no_alerts_for_settled_candidates(self, engine):
        assert generate_system_alerts([_settled()], engine=engine) == []

    def test_new_registrations(self, engine):
        candidates = [make_candidate(id="a"), make_candidate(id="b"), _settled(id="c")]
        [alert] = generate_system_alerts(candidates, engine=engine)
        assert alert.id == "alert-new"
        assert alert.type == AlertType.INFO
        assert alert.count == 2
        assert alert.message == "2 new registrations waiting for review."
        assert alert.timestamp == NOW

    def test_sla_breaches(self, engine):
        late = _settled(stage_entered_at=NOW - timedelta(days=30))
        [alert] = generate_system_alerts([late], engine=engine)
        assert alert.id == "alert-sla"
        assert alert.type == AlertType.DELAY
        assert alert.message == "1 candidates have breached SLA limits."

    def test_passport_alerts(self, engine):
        candidates = [
            _settled(id="a", passport_data=make_passport(-5)),
            _settled(id="b", passport_data=make_passport(60)),
            _settled(id="c", passport_data=make_passport(90)),
            _settled(id="d", passport_data=None),
        ]
        alerts = {a.id: a for a in generate_system_alerts(candidates, engine=engine)}
        assert set(alerts) == {"alert-ppt-exp", "alert-ppt-expiring"}
        assert alerts["alert-ppt-exp"].count == 1
        assert alerts["alert-ppt-exp"].type == AlertType.DELAY
        assert alerts["alert-ppt-expiring"].count == 2
        assert alerts["alert-ppt-expiring"].type == AlertType.WARNING

    def test_expired_pcc_only_where_checked(self, engine):
        candidates = [
            _settled(id="a", pcc_data=make_pcc(200)),
            _settled(id="b", pcc_data=make_pcc(200), target_country="Atlantis"),
        ]
        [alert] = generate_system_alerts(candidates, engine=engine)
        assert alert.id == "alert-pcc-exp"
        assert alert.count == 1
        assert alert.message == "1 candidates have expired police clearance."

    def test_alert_order(self, engine):
        candidates = [
            make_candidate(id="new"),
            _settled(id="late", stage_entered_at=NOW - timedelta(days=30)),
            _settled(id="expired", passport_data=make_passport(-1)),
        ]
        ids = [a.id for a in generate_system_alerts(candidates, engine=engine)]
        assert ids == ["alert-sla", "alert-ppt-exp", "alert-new"]
