#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Dashboard aggregator

Runs the UI model pipeline over a request collection and folds the results
into counters, the bounded "needs attention" panel and historical summaries.
Input order is preserved everywhere; ordering belongs to the caller's fetch.
"""

import logging
import re
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Union

from config.settings import REQUEST_UI_CONFIG
from .models import (
    CountersBucket,
    MedicalRequest,
    NormalizedStatus,
    RequestLike,
    RequestUiModel,
    Role,
    UiPhase,
    as_request,
    coerce_role,
)
from .status_normalizer import normalize_request_status
from .ui_model import get_ui_model

logger = logging.getLogger(__name__)

S = NormalizedStatus

# Doctor "Na fila" card
DOCTOR_QUEUE_STATUSES = frozenset({
    S.SUBMITTED, S.IN_REVIEW, S.APPROVED_PENDING_PAYMENT, S.SEARCHING_DOCTOR,
})

PATIENT_PENDING_PHASES = frozenset({UiPhase.REVIEW, UiPhase.AI})
PATIENT_READY_PHASES = frozenset({UiPhase.SIGNED, UiPhase.DELIVERED})


def _needs_attention(ui: RequestUiModel) -> bool:
    return ui.counters_bucket is not CountersBucket.HISTORICAL and ui.phase is not UiPhase.FINISHED


def counters_for_patient(requests: Iterable[RequestLike]) -> Dict[str, int]:
    """Patient dashboard: in analysis / to pay / ready"""
    counters = {"pending": 0, "to_pay": 0, "ready": 0}
    for request in requests:
        ui = get_ui_model(request, Role.PATIENT)
        # "Em análise médica" reflects only the analysis phases
        if ui.phase in PATIENT_PENDING_PHASES:
            counters["pending"] += 1
        if ui.actions.can_pay:
            counters["to_pay"] += 1
        if ui.phase in PATIENT_READY_PHASES:
            counters["ready"] += 1
    return counters


def counters_for_doctor(requests: Iterable[RequestLike]) -> Dict[str, int]:
    """Doctor dashboard: queue / consultation ready / in consultation / total pending"""
    counters = {"na_fila": 0, "consulta_pronta": 0, "em_consulta": 0, "pendentes_total": 0}
    for request in requests:
        record = as_request(request)
        ui = get_ui_model(record, Role.DOCTOR)
        status = normalize_request_status(record.status)
        if status in DOCTOR_QUEUE_STATUSES:
            counters["na_fila"] += 1
        if status is S.CONSULTATION_READY:
            counters["consulta_pronta"] += 1
        if status is S.IN_CONSULTATION:
            counters["em_consulta"] += 1
        if _needs_attention(ui):
            counters["pendentes_total"] += 1
    return counters


def counters_for(role: Union[Role, str], requests: Iterable[RequestLike]) -> Dict[str, int]:
    """Role-specific dashboard counters; unknown roles get the patient counters"""
    if coerce_role(role) is Role.DOCTOR:
        counters = counters_for_doctor(requests)
    else:
        counters = counters_for_patient(requests)
    logger.debug(f"Dashboard counters for {role!r}: {counters}")
    return counters


def count_by_bucket(role: Union[Role, str], requests: Iterable[RequestLike]) -> Dict[str, int]:
    """Count per counters bucket (every bucket present, zeros included)"""
    tally = Counter(get_ui_model(request, role).counters_bucket for request in requests)
    return {bucket.value: tally.get(bucket, 0) for bucket in CountersBucket}


def pending_for_panel(
    role: Union[Role, str],
    requests: Iterable[RequestLike],
    limit: Optional[int] = None,
) -> List[RequestLike]:
    """
    Requests that still need attention, truncated to `limit`

    Everything not historical and not finished, in input order. The items
    returned are the caller's own objects.
    """
    if limit is None:
        limit = REQUEST_UI_CONFIG["panel_limit"]
    limit = max(limit, 0)

    pending = []
    for request in requests:
        if len(pending) >= limit:
            break
        if _needs_attention(get_ui_model(request, role)):
            pending.append(request)
    return pending


def is_historical(request: RequestLike, role: Union[Role, str] = Role.DOCTOR) -> bool:
    """Finished requests (not shown on the pending panel)"""
    return not _needs_attention(get_ui_model(request, role))


# ============================================
# Historical summaries
# ============================================

# fromisoformat before 3.11 only takes 3 or 6 fractional digits
_FRACTION_RE = re.compile(r"(:\d{2})\.(\d+)")


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """ISO timestamp as naive UTC; None when missing or unparsable"""
    if not value:
        return None
    value = _FRACTION_RE.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", value.strip())
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def reference_time(request: MedicalRequest) -> Optional[datetime]:
    """Most recent meaningful timestamp: updatedAt, then signedAt, then createdAt"""
    return _parse_timestamp(request.updated_at or request.signed_at or request.created_at)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _historical_times(requests: Iterable[RequestLike], role: Union[Role, str]) -> List[datetime]:
    times = []
    for request in requests:
        record = as_request(request)
        if not is_historical(record, role):
            continue
        moment = reference_time(record)
        if moment is not None:
            times.append(moment)
    return times


def _day_label(day: datetime, today: datetime) -> str:
    diff_days = (today.date() - day.date()).days
    if diff_days == 0:
        return "Hoje"
    if diff_days == 1:
        return "Ontem"
    return day.strftime("%d/%m")


def historical_grouped_by_day(
    requests: Iterable[RequestLike],
    role: Union[Role, str] = Role.DOCTOR,
    max_days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Dict[str, object]]:
    """Historical requests per day, newest day first, at most `max_days` groups"""
    if max_days is None:
        max_days = REQUEST_UI_CONFIG["historical_max_days"]
    now = now or _utc_now()

    by_day = Counter(moment.date().isoformat() for moment in _historical_times(requests, role))
    keys = sorted(by_day, reverse=True)[:max(max_days, 0)]
    return [
        {
            "dayLabel": _day_label(datetime.fromisoformat(key), now),
            "dateKey": key,
            "count": by_day[key],
        }
        for key in keys
    ]


def historical_grouped_by_period(
    requests: Iterable[RequestLike],
    role: Union[Role, str] = Role.DOCTOR,
    now: Optional[datetime] = None,
) -> List[Dict[str, object]]:
    """Historical counts for the last week, current month, 3 and 6 months"""
    now = now or _utc_now()
    today = datetime(now.year, now.month, now.day)
    periods = [
        ("Semana", today - timedelta(days=7)),
        ("Mês", datetime(today.year, today.month, 1)),
        ("3 meses", today - timedelta(days=90)),
        ("6 meses", today - timedelta(days=180)),
    ]

    times = _historical_times(requests, role)
    return [
        {"label": label, "count": sum(1 for moment in times if moment >= start)}
        for label, start in periods
    ]
