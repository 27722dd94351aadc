"""
pytest configuration - shared fixtures
"""
import pytest
import os
import sys

# Project root on the import path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.request_lifecycle import NormalizedStatus, RequestKind, Role

RAW_STATUSES = [status.value for status in NormalizedStatus] + [
    "pending", "analyzing", "pending_payment", "approved", "completed",
]


def make_request(status, request_type="prescription", **extra):
    """Minimal request payload as the API returns it"""
    payload = {"id": extra.pop("id", f"req-{status}"), "status": status, "requestType": request_type}
    payload.update(extra)
    return payload


@pytest.fixture
def request_factory():
    return make_request


@pytest.fixture
def all_raw_statuses():
    """Canonical and legacy statuses"""
    return list(RAW_STATUSES)


@pytest.fixture
def all_roles():
    return list(Role)


@pytest.fixture
def all_kinds():
    return list(RequestKind)


@pytest.fixture
def doctor_inbox():
    """Five requests spread over queue, consultation and historical statuses"""
    return [
        make_request("submitted", "prescription", id="r1"),
        make_request("consultation_ready", "consultation", id="r2"),
        make_request("in_consultation", "consultation", id="r3"),
        make_request("delivered", "exam", id="r4"),
        make_request("rejected", "prescription", id="r5"),
    ]


def pytest_configure(config):
    config.addinivalue_line("markers", "regression: regression guard for lifecycle rules")
