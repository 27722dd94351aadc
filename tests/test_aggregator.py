#!/usr/bin/env python3
"""
Dashboard aggregator tests
"""

from datetime import datetime

import pytest

from core.request_lifecycle import (
    MedicalRequest,
    Role,
    count_by_bucket,
    counters_for,
    counters_for_doctor,
    counters_for_patient,
    historical_grouped_by_day,
    historical_grouped_by_period,
    is_historical,
    pending_for_panel,
)

NOW = datetime(2026, 3, 20, 15, 0, 0)


class TestDoctorCounters:

    def test_inbox_counters(self, doctor_inbox):
        assert counters_for(Role.DOCTOR, doctor_inbox) == {
            "na_fila": 1,
            "consulta_pronta": 1,
            "em_consulta": 1,
            "pendentes_total": 3,
        }

    def test_queue_counts_legacy_statuses(self, request_factory):
        requests = [
            request_factory("pending"),
            request_factory("analyzing"),
            request_factory("pending_payment"),
            request_factory("searching_doctor", "consultation"),
            request_factory("paid"),
        ]
        counters = counters_for_doctor(requests)
        assert counters["na_fila"] == 4
        assert counters["pendentes_total"] == 5

    def test_finished_consultation_not_pending(self, request_factory):
        counters = counters_for_doctor([request_factory("consultation_finished", "consultation")])
        assert counters["pendentes_total"] == 0

    def test_empty(self):
        assert counters_for("doctor", []) == {
            "na_fila": 0, "consulta_pronta": 0, "em_consulta": 0, "pendentes_total": 0,
        }


class TestPatientCounters:

    def test_counters(self, request_factory):
        requests = [
            request_factory("in_review"),
            request_factory("analyzing", "exam"),
            request_factory("approved_pending_payment"),
            request_factory("consultation_ready", "consultation"),
            request_factory("paid"),
            request_factory("signed"),
            request_factory("completed", "exam"),
            request_factory("submitted"),
        ]
        assert counters_for_patient(requests) == {"pending": 2, "to_pay": 2, "ready": 2}

    def test_unknown_role_uses_patient_counters(self, request_factory):
        assert counters_for("guest", [request_factory("in_review")]) == {"pending": 1, "to_pay": 0, "ready": 0}


class TestCountByBucket:

    def test_every_bucket_reported(self, doctor_inbox):
        assert count_by_bucket(Role.DOCTOR, doctor_inbox) == {
            "pending": 2,
            "to_pay": 0,
            "ready": 0,
            "in_consultation": 1,
            "historical": 2,
            "none": 0,
        }

    def test_patient_buckets(self, doctor_inbox):
        buckets = count_by_bucket(Role.PATIENT, doctor_inbox)
        assert buckets["to_pay"] == 1
        assert buckets["ready"] == 1
        assert sum(buckets.values()) == len(doctor_inbox)


class TestPendingForPanel:

    def test_doctor_panel_keeps_input_order(self, doctor_inbox):
        panel = pending_for_panel(Role.DOCTOR, doctor_inbox, limit=10)
        assert [r["id"] for r in panel] == ["r1", "r2", "r3"]

    def test_limit(self, doctor_inbox):
        assert [r["id"] for r in pending_for_panel("doctor", doctor_inbox, limit=2)] == ["r1", "r2"]

    def test_default_limit_is_three(self, request_factory):
        requests = [request_factory("submitted", id=f"r{i}") for i in range(6)]
        assert len(pending_for_panel(Role.DOCTOR, requests)) == 3

    @pytest.mark.parametrize("limit", [0, -4])
    def test_non_positive_limit(self, doctor_inbox, limit):
        assert pending_for_panel(Role.DOCTOR, doctor_inbox, limit=limit) == []

    def test_returns_caller_objects(self, doctor_inbox):
        panel = pending_for_panel(Role.DOCTOR, doctor_inbox, limit=1)
        assert panel[0] is doctor_inbox[0]

    def test_patient_panel(self, request_factory):
        requests = [
            request_factory("cancelled", id="a"),
            request_factory("consultation_finished", "consultation", id="b"),
            request_factory("approved_pending_payment", id="c"),
            request_factory("delivered", id="d"),
        ]
        assert [r["id"] for r in pending_for_panel(Role.PATIENT, requests, 5)] == ["c", "d"]

    def test_is_historical(self, request_factory):
        assert is_historical(request_factory("delivered"))
        assert is_historical(request_factory("rejected"), Role.PATIENT)
        assert not is_historical(request_factory("signed"))


class TestHistoricalSummaries:

    @pytest.fixture
    def history(self, request_factory):
        return [
            request_factory("delivered", updatedAt="2026-03-20T09:00:00Z"),
            request_factory("rejected", updatedAt="2026-03-20T10:00:00"),
            request_factory("consultation_finished", "consultation", signedAt="2026-03-19T18:00:00+00:00"),
            request_factory("cancelled", createdAt="2026-03-05T08:00:00"),
            request_factory("delivered", updatedAt="2025-12-01T08:00:00"),
            request_factory("delivered", updatedAt="not-a-date"),
            request_factory("delivered"),
            # not historical for the doctor
            request_factory("signed", updatedAt="2026-03-20T11:00:00"),
        ]

    def test_grouped_by_day(self, history):
        groups = historical_grouped_by_day(history, now=NOW)
        assert groups == [
            {"dayLabel": "Hoje", "dateKey": "2026-03-20", "count": 2},
            {"dayLabel": "Ontem", "dateKey": "2026-03-19", "count": 1},
            {"dayLabel": "05/03", "dateKey": "2026-03-05", "count": 1},
            {"dayLabel": "01/12", "dateKey": "2025-12-01", "count": 1},
        ]

    def test_grouped_by_day_max_days(self, history):
        groups = historical_grouped_by_day(history, Role.DOCTOR, max_days=2, now=NOW)
        assert [g["dateKey"] for g in groups] == ["2026-03-20", "2026-03-19"]

    def test_grouped_by_period(self, history):
        assert historical_grouped_by_period(history, now=NOW) == [
            {"label": "Semana", "count": 3},
            {"label": "Mês", "count": 4},
            {"label": "3 meses", "count": 4},
            {"label": "6 meses", "count": 5},
        ]

    def test_reference_time_prefers_updated_at(self):
        record = MedicalRequest(
            status="delivered",
            createdAt="2026-01-01T00:00:00",
            updatedAt="2026-03-20T00:00:00",
        )
        groups = historical_grouped_by_day([record], now=NOW)
        assert groups[0]["dateKey"] == "2026-03-20"

    @pytest.mark.parametrize("stamp", [
        "2026-03-20T10:00:00.1234567Z",
        "2026-03-20T10:00:00.5Z",
        "2026-03-20T10:00:00.12345+00:00",
    ])
    def test_uneven_fractional_seconds(self, stamp):
        groups = historical_grouped_by_day([{"status": "delivered", "updatedAt": stamp}], now=NOW)
        assert groups == [{"dayLabel": "Hoje", "dateKey": "2026-03-20", "count": 1}]


class TestLooselyTypedRecords:

    def test_numeric_id_counted(self):
        assert counters_for("doctor", [{"id": 7, "status": "submitted"}])["na_fila"] == 1

    def test_null_status_does_not_raise(self):
        assert counters_for("patient", [{"id": "r1", "status": None}]) == {"pending": 0, "to_pay": 0, "ready": 0}
        assert count_by_bucket("doctor", [{"id": "r1", "status": None}])["pending"] == 1
