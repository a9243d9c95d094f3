# This project was developed with assistance from AI tools.
"""Tests for raising and resolving compliance flags."""

from datetime import timedelta

import pytest

from recruitflow.enums import FlagSeverity, FlagType, TimelineEventType, UserRole
from recruitflow.services.flags import FlagNotFoundError, raise_flag, resolve_flag

from .factories import NOW, make_actor, make_candidate, make_flag

OFFICER = make_actor(UserRole.COMPLIANCE_OFFICER, user_id="co-1", name="Sunil")


class TestRaiseFlag:
    def test_critical_flag(self):
        candidate = make_candidate()
        flag = raise_flag(
            candidate,
            FlagSeverity.CRITICAL,
            "Pending court case",
            OFFICER,
            flag_type=FlagType.LEGAL,
            now=NOW,
        )

        assert candidate.compliance_flags == [flag]
        assert flag.id.startswith("flag-")
        assert flag.created_by == "Sunil"
        assert flag.created_at == NOW
        assert flag.is_blocking is True

        [event] = candidate.timeline_events
        assert event.type == TimelineEventType.ALERT
        assert event.title == "Compliance Flag Raised (CRITICAL)"
        assert event.is_critical is True
        assert event.metadata["flag_id"] == flag.id
        assert event.metadata["flag_type"] == "legal"

    def test_warning_flag_not_blocking(self):
        candidate = make_candidate()
        flag = raise_flag(candidate, FlagSeverity.WARNING, "Late for interview", OFFICER, now=NOW)
        assert flag.type == FlagType.OTHER
        assert flag.is_blocking is False
        assert candidate.timeline_events[0].is_critical is False

    def test_ids_unique(self):
        candidate = make_candidate()
        first = raise_flag(candidate, FlagSeverity.WARNING, "a", OFFICER, now=NOW)
        second = raise_flag(candidate, FlagSeverity.WARNING, "b", OFFICER, now=NOW)
        assert first.id != second.id


class TestResolveFlag:
    def test_resolve(self):
        candidate = make_candidate(compliance_flags=[make_flag()])
        flag = resolve_flag(candidate, "flag-1", OFFICER, notes="Case dismissed", now=NOW)

        assert flag.is_resolved is True
        assert flag.is_blocking is False
        assert flag.resolved_by == "Sunil"
        assert flag.resolved_at == NOW
        assert flag.resolution_notes == "Case dismissed"
        [event] = candidate.timeline_events
        assert event.type == TimelineEventType.NOTE
        assert event.description == "Case dismissed"

    def test_resolving_twice_is_noop(self):
        candidate = make_candidate(compliance_flags=[make_flag()])
        resolve_flag(candidate, "flag-1", OFFICER, now=NOW)
        flag = resolve_flag(candidate, "flag-1", OFFICER, now=NOW + timedelta(days=1))

        assert flag.resolved_at == NOW
        assert len(candidate.timeline_events) == 1

    def test_unknown_flag(self):
        candidate = make_candidate(compliance_flags=[make_flag()])
        with pytest.raises(FlagNotFoundError):
            resolve_flag(candidate, "flag-404", OFFICER, now=NOW)
