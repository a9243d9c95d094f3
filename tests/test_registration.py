# This project was developed with assistance from AI tools.
"""Tests for candidate registration and the timeline helpers."""

import random
import re
from datetime import date, timedelta

import pytest

from recruitflow.enums import StageStatus, TimelineEventType, WorkflowStage
from recruitflow.services.registration import generate_candidate_code, register_candidate
from recruitflow.services.timeline import build_event, record_event, timeline_for_display

from .factories import NOW, make_actor, make_candidate


class TestCandidateCode:
    def test_format(self):
        assert re.fullmatch(r"GW-2026-\d{4}", generate_candidate_code(2026))

    def test_seeded_rng_is_repeatable(self):
        first = generate_candidate_code(2026, random.Random(7))
        second = generate_candidate_code(2026, random.Random(7))
        assert first == second


class TestRegisterCandidate:
    def test_new_candidate_starts_registered(self):
        candidate = register_candidate(
            name="Kamala Perera",
            dob=date(1995, 4, 2),
            role="Housemaid",
            target_country="Saudi Arabia",
            now=NOW,
        )

        assert re.fullmatch(r"GW-2026-\d{4}", candidate.candidate_code)
        assert candidate.stage == WorkflowStage.REGISTERED
        assert candidate.stage_status == StageStatus.PENDING
        assert candidate.stage_entered_at == NOW
        assert [h.stage for h in candidate.stage_history] == [WorkflowStage.REGISTERED]
        assert candidate.stage_history[0].user_id == "system"

        [event] = candidate.timeline_events
        assert event.type == TimelineEventType.SYSTEM
        assert event.title == "Candidate Registered"
        assert event.actor == "System"

    def test_explicit_code_and_actor(self):
        candidate = register_candidate(
            name="Ruwan",
            actor=make_actor(),
            candidate_code="GW-2026-0001",
            now=NOW,
        )
        assert candidate.candidate_code == "GW-2026-0001"
        assert candidate.stage_history[0].user_id == "staff-1"

    def test_ids_unique(self):
        first = register_candidate(name="A", now=NOW)
        second = register_candidate(name="B", now=NOW)
        assert first.id != second.id


class TestTimeline:
    def test_build_event_does_not_append(self):
        candidate = make_candidate()
        event = build_event(candidate, TimelineEventType.NOTE, "Called", make_actor(), now=NOW)
        assert candidate.timeline_events == []
        assert event.stage == WorkflowStage.REGISTERED
        assert event.metadata == {"user_id": "staff-1", "role": "recruiter"}

    def test_event_metadata_is_read_only(self):
        candidate = make_candidate()
        event = record_event(
            candidate,
            TimelineEventType.NOTE,
            "Called",
            make_actor(),
            metadata={"attempts": [1, 2]},
            now=NOW,
        )
        with pytest.raises(TypeError):
            event.metadata["attempts"] = []
        with pytest.raises(AttributeError):
            event.metadata["attempts"].append(3)
        assert event.model_dump()["metadata"] == {
            "user_id": "staff-1",
            "role": "recruiter",
            "attempts": [1, 2],
        }

    def test_display_is_newest_first(self):
        candidate = make_candidate()
        actor = make_actor()
        for offset, title in ((0, "first"), (2, "third"), (1, "second")):
            record_event(
                candidate,
                TimelineEventType.NOTE,
                title,
                actor,
                now=NOW + timedelta(hours=offset),
            )
        assert [e.title for e in timeline_for_display(candidate)] == ["third", "second", "first"]
        assert [e.title for e in candidate.timeline_events] == ["first", "third", "second"]

    def test_same_timestamp_latest_recorded_first(self):
        candidate = make_candidate()
        for title in ("a", "b"):
            record_event(candidate, TimelineEventType.NOTE, title, make_actor(), now=NOW)
        assert [e.title for e in timeline_for_display(candidate)] == ["b", "a"]
