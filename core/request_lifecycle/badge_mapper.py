#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Badge / colour mapper

One visual vocabulary for the whole app: the colour depends on the phase
only, never on role or kind.
"""

from typing import Dict, Union

from .models import NormalizedStatus, RequestKind, RequestUiColorKey, Role, UiPhase
from .status_labels import STATUS_LABELS_PT

P = UiPhase
C = RequestUiColorKey

PHASE_COLORS: Dict[UiPhase, RequestUiColorKey] = {
    P.AWAITING_PAYMENT: C.WAITING,
    P.CONSULT_READY: C.WAITING,
    P.SIGNED: C.SUCCESS,
    P.DELIVERED: C.SUCCESS,
    P.FINISHED: C.SUCCESS,
    P.SENT: C.ACTION,
    P.AI: C.ACTION,
    P.REVIEW: C.ACTION,
    P.READY_TO_SIGN: C.ACTION,
    P.IN_CONSULTATION: C.ACTION,
    P.WAITING_DOCTOR: C.ACTION,
    P.CANCELLED: C.HISTORICAL,
    P.REJECTED: C.HISTORICAL,
    P.ERROR: C.HISTORICAL,
}

_missing = set(UiPhase) - set(PHASE_COLORS)
if _missing:
    raise RuntimeError(f"No badge colour for phases: {sorted(p.value for p in _missing)}")

# Foreground / background per colour key
UI_STATUS_COLORS: Dict[RequestUiColorKey, Dict[str, str]] = {
    C.ACTION: {"color": "#3B82F6", "bg": "#DBEAFE"},
    C.SUCCESS: {"color": "#059669", "bg": "#D1FAE5"},
    C.WAITING: {"color": "#D97706", "bg": "#FEF3C7"},
    C.HISTORICAL: {"color": "#6B7280", "bg": "#F3F4F6"},
}


def color_for_phase(phase: Union[UiPhase, str]) -> RequestUiColorKey:
    """Colour key for a phase; unknown phase strings are historical"""
    try:
        return PHASE_COLORS[UiPhase(phase)]
    except ValueError:
        return C.HISTORICAL


def badge_label(title: str, status: NormalizedStatus, role: Role, kind: RequestKind) -> str:
    """Short badge text; falls back to the phase title"""
    if status is NormalizedStatus.SUBMITTED:
        return "Enviado" if role is Role.PATIENT else "Novo pedido"
    if status is NormalizedStatus.PAID:
        return "Aguardando médico" if role is Role.PATIENT else "Pronto para assinar"
    if status is NormalizedStatus.CONSULTATION_READY:
        return "Consulta pronta" if kind is RequestKind.CONSULTATION else title
    return STATUS_LABELS_PT.get(status.value, title)
