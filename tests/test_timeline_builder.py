#!/usr/bin/env python3
"""
Timeline builder tests
"""

import itertools

import pytest

from core.request_lifecycle import RequestKind, Role, UiPhase, build_timeline

P = UiPhase


def states(timeline):
    return [step.state for step in timeline]


def ids(timeline):
    return [step.id for step in timeline]


class TestTimelineShape:

    @pytest.mark.parametrize("role,kind,phase", list(itertools.product(Role, RequestKind, UiPhase)))
    def test_monotonic(self, role, kind, phase):
        """At most one current step, no done step after a todo step"""
        timeline = build_timeline(role, kind, phase)
        assert states(timeline).count("current") <= 1

        seen_todo = False
        for state in states(timeline):
            if state == "todo":
                seen_todo = True
            assert not (seen_todo and state == "done")
            if state == "current":
                assert not seen_todo

    @pytest.mark.parametrize("role", list(Role))
    @pytest.mark.parametrize("kind", list(RequestKind))
    @pytest.mark.parametrize("phase", [P.CANCELLED, P.REJECTED, P.ERROR])
    def test_unmatched_phase_is_all_todo(self, role, kind, phase):
        timeline = build_timeline(role, kind, phase)
        assert timeline
        assert set(states(timeline)) == {"todo"}

    def test_unknown_phase_string_is_all_todo(self):
        assert set(states(build_timeline("patient", "exam", "teleported"))) == {"todo"}


class TestDocumentTimeline:

    def test_patient_steps(self):
        timeline = build_timeline(Role.PATIENT, RequestKind.PRESCRIPTION, P.AWAITING_PAYMENT)
        assert ids(timeline) == ["sent", "review", "payment", "signed", "delivered"]
        assert states(timeline) == ["done", "done", "current", "todo", "todo"]

    def test_patient_waiting_doctor_sits_on_signed_step(self):
        timeline = build_timeline(Role.PATIENT, RequestKind.EXAM, P.WAITING_DOCTOR)
        assert states(timeline) == ["done", "done", "done", "current", "todo"]

    def test_patient_ai_step_only_when_requested(self):
        with_ai = build_timeline(Role.PATIENT, RequestKind.EXAM, P.REVIEW, show_ai_step=True)
        assert ids(with_ai) == ["sent", "ai", "review", "payment", "signed", "delivered"]
        assert states(with_ai) == ["done", "done", "current", "todo", "todo", "todo"]

    def test_ai_phase_always_shows_ai_step(self):
        timeline = build_timeline(Role.PATIENT, RequestKind.PRESCRIPTION, P.AI)
        assert ids(timeline)[1] == "ai"
        assert states(timeline)[:2] == ["done", "current"]

    def test_doctor_never_has_ai_step(self):
        timeline = build_timeline(Role.DOCTOR, RequestKind.PRESCRIPTION, P.REVIEW, show_ai_step=True)
        assert "ai" not in ids(timeline)
        assert ids(timeline) == ["new", "review", "payment", "sign", "delivered"]

    def test_doctor_signed_sits_on_delivered_step(self):
        timeline = build_timeline(Role.DOCTOR, RequestKind.EXAM, P.SIGNED)
        assert states(timeline) == ["done", "done", "done", "done", "current"]


class TestConsultationTimeline:

    def test_patient_steps(self):
        timeline = build_timeline(Role.PATIENT, RequestKind.CONSULTATION, P.IN_CONSULTATION)
        assert ids(timeline) == ["searching", "payment", "ready", "consultation", "finished"]
        assert states(timeline) == ["done", "done", "done", "current", "todo"]

    def test_doctor_payment_step_covers_consult_ready(self):
        timeline = build_timeline(Role.DOCTOR, RequestKind.CONSULTATION, P.CONSULT_READY)
        assert ids(timeline) == ["new", "payment", "consultation", "finished"]
        assert states(timeline) == ["done", "current", "todo", "todo"]

    def test_labels(self):
        timeline = build_timeline("doctor", "consultation", "sent")
        assert [step.label for step in timeline] == ["Nova", "Pagamento", "Em atendimento", "Finalizada"]
