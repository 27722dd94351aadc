#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Phase resolver - role-aware and kind-aware phase tables

Core rules:
1. A patient never has an action while the request is `paid` (it is
   "waiting for the doctor").
2. A patient can only pay in `approved_pending_payment` (legacy
   `pending_payment`) and, for consultations, in `consultation_ready`.
3. A doctor can approve/reject in `submitted` and `in_review` (legacy
   `pending`, `analyzing`).
4. The same status never grants the same capability to both roles.

The lookup table is built once at import time as kind -> role -> status ->
PhaseConfig; missing cells resolve to the kind's initial phase with no actions.
"""

import logging
from dataclasses import replace
from typing import Dict, Optional, Union

from .models import (
    CountersBucket,
    NormalizedStatus,
    PhaseConfig,
    RequestKind,
    Role,
    TERMINAL_STATUSES,
    UiActions,
    UiPhase,
    coerce_kind,
    coerce_role,
)
from .status_labels import STATUS_LABELS_PT
from .status_normalizer import is_known_status, normalize_request_status

logger = logging.getLogger(__name__)

S = NormalizedStatus
P = UiPhase
B = CountersBucket

AWAITING_PATIENT_PAYMENT = "Aguardando pagamento do paciente"
GENERIC_DISABLED_REASON = "Ação indisponível para este pedido."

# Raw status that surfaces the automated pre-screening step to patients
AI_SCREENING_RAW_STATUS = "analyzing"

# ============================================
# Terminal statuses (shared by every role and kind)
# ============================================

TERMINAL_CONFIGS: Dict[NormalizedStatus, PhaseConfig] = {
    S.REJECTED: PhaseConfig(phase=P.REJECTED, title="Rejeitado", counters_bucket=B.HISTORICAL),
    S.CANCELLED: PhaseConfig(phase=P.CANCELLED, title="Cancelado", counters_bucket=B.HISTORICAL),
}

# ============================================
# Prescription / exam (document workflow)
# ============================================

_DOCUMENT_PATIENT: Dict[NormalizedStatus, PhaseConfig] = {
    S.SUBMITTED: PhaseConfig(
        phase=P.SENT, title="Enviado",
        actions=UiActions(can_cancel=True), counters_bucket=B.PENDING),
    S.IN_REVIEW: PhaseConfig(
        phase=P.REVIEW, title=STATUS_LABELS_PT["in_review"],
        actions=UiActions(can_cancel=True), counters_bucket=B.PENDING),
    S.APPROVED_PENDING_PAYMENT: PhaseConfig(
        phase=P.AWAITING_PAYMENT, title="Aguardando pagamento",
        actions=UiActions(can_pay=True, can_cancel=True), counters_bucket=B.TO_PAY),
    # 🔑 paid: nothing left for the patient to do
    S.PAID: PhaseConfig(
        phase=P.WAITING_DOCTOR, title="Aguardando médico preparar e assinar",
        counters_bucket=B.PENDING),
    S.SIGNED: PhaseConfig(
        phase=P.SIGNED, title="Documento pronto",
        actions=UiActions(can_download=True), counters_bucket=B.READY),
    S.DELIVERED: PhaseConfig(
        phase=P.DELIVERED, title="Entregue / disponível",
        actions=UiActions(can_download=True), counters_bucket=B.READY),
}

_DOCUMENT_DOCTOR: Dict[NormalizedStatus, PhaseConfig] = {
    S.SUBMITTED: PhaseConfig(
        phase=P.SENT, title="Novo pedido",
        actions=UiActions(can_approve=True, can_reject=True), counters_bucket=B.PENDING),
    S.IN_REVIEW: PhaseConfig(
        phase=P.REVIEW, title=STATUS_LABELS_PT["in_review"],
        actions=UiActions(can_approve=True, can_reject=True), counters_bucket=B.PENDING),
    S.APPROVED_PENDING_PAYMENT: PhaseConfig(
        phase=P.AWAITING_PAYMENT, title=AWAITING_PATIENT_PAYMENT,
        counters_bucket=B.PENDING, disabled_reason=AWAITING_PATIENT_PAYMENT),
    S.PAID: PhaseConfig(
        phase=P.READY_TO_SIGN, title="Pronto para assinar",
        actions=UiActions(can_sign=True), counters_bucket=B.PENDING),
    S.SIGNED: PhaseConfig(
        phase=P.SIGNED, title="Assinado",
        actions=UiActions(can_deliver=True), counters_bucket=B.PENDING,
        disabled_reason="Pedido já assinado"),
    S.DELIVERED: PhaseConfig(
        phase=P.DELIVERED, title="Entregue",
        counters_bucket=B.HISTORICAL, disabled_reason="Pedido já entregue"),
}

# ============================================
# Consultation (doctor accepts before payment)
# ============================================

_CONSULTATION_PATIENT: Dict[NormalizedStatus, PhaseConfig] = {
    S.SUBMITTED: PhaseConfig(
        phase=P.SENT, title="Buscando médico",
        actions=UiActions(can_cancel=True), counters_bucket=B.PENDING),
    S.SEARCHING_DOCTOR: PhaseConfig(
        phase=P.SENT, title="Buscando médico",
        actions=UiActions(can_cancel=True), counters_bucket=B.PENDING),
    S.CONSULTATION_READY: PhaseConfig(
        phase=P.CONSULT_READY, title="Médico aceitou — pagar para iniciar",
        actions=UiActions(can_pay=True, can_cancel=True), counters_bucket=B.TO_PAY),
    S.APPROVED_PENDING_PAYMENT: PhaseConfig(
        phase=P.AWAITING_PAYMENT, title="Aguardando pagamento",
        actions=UiActions(can_pay=True, can_cancel=True), counters_bucket=B.TO_PAY),
    S.PAID: PhaseConfig(
        phase=P.CONSULT_READY, title="Pronto para entrar na consulta",
        actions=UiActions(can_join_call=True), counters_bucket=B.PENDING),
    S.IN_CONSULTATION: PhaseConfig(
        phase=P.IN_CONSULTATION, title="Em consulta",
        actions=UiActions(can_join_call=True), counters_bucket=B.IN_CONSULTATION),
    S.CONSULTATION_FINISHED: PhaseConfig(
        phase=P.FINISHED, title="Finalizada", counters_bucket=B.READY),
}

_CONSULTATION_DOCTOR: Dict[NormalizedStatus, PhaseConfig] = {
    S.SUBMITTED: PhaseConfig(
        phase=P.SENT, title="Nova consulta disponível",
        actions=UiActions(can_approve=True, can_reject=True, can_accept_consultation=True),
        counters_bucket=B.PENDING),
    S.SEARCHING_DOCTOR: PhaseConfig(
        phase=P.SENT, title="Nova consulta disponível",
        actions=UiActions(can_approve=True, can_reject=True, can_accept_consultation=True),
        counters_bucket=B.PENDING),
    S.CONSULTATION_READY: PhaseConfig(
        phase=P.CONSULT_READY, title="Aguardando pagamento",
        counters_bucket=B.PENDING, disabled_reason=AWAITING_PATIENT_PAYMENT),
    S.APPROVED_PENDING_PAYMENT: PhaseConfig(
        phase=P.AWAITING_PAYMENT, title="Aguardando pagamento",
        counters_bucket=B.PENDING, disabled_reason=AWAITING_PATIENT_PAYMENT),
    S.PAID: PhaseConfig(
        phase=P.CONSULT_READY, title="Pode iniciar",
        actions=UiActions(can_join_call=True), counters_bucket=B.PENDING),
    S.IN_CONSULTATION: PhaseConfig(
        phase=P.IN_CONSULTATION, title="Em atendimento",
        actions=UiActions(can_join_call=True), counters_bucket=B.IN_CONSULTATION),
    S.CONSULTATION_FINISHED: PhaseConfig(
        phase=P.FINISHED, title="Finalizada", counters_bucket=B.HISTORICAL),
}

# Initial phase of each table, no actions enabled
DEFAULT_CONFIGS: Dict[RequestKind, Dict[Role, PhaseConfig]] = {
    RequestKind.PRESCRIPTION: {
        Role.PATIENT: PhaseConfig(phase=P.SENT, title="Enviado", counters_bucket=B.PENDING),
        Role.DOCTOR: PhaseConfig(phase=P.SENT, title="Novo pedido", counters_bucket=B.PENDING),
    },
    RequestKind.CONSULTATION: {
        Role.PATIENT: PhaseConfig(phase=P.SENT, title="Buscando médico", counters_bucket=B.PENDING),
        Role.DOCTOR: PhaseConfig(phase=P.SENT, title="Nova consulta disponível", counters_bucket=B.PENDING),
    },
}
DEFAULT_CONFIGS[RequestKind.EXAM] = DEFAULT_CONFIGS[RequestKind.PRESCRIPTION]

PHASE_TABLE: Dict[RequestKind, Dict[Role, Dict[NormalizedStatus, PhaseConfig]]] = {
    RequestKind.PRESCRIPTION: {Role.PATIENT: _DOCUMENT_PATIENT, Role.DOCTOR: _DOCUMENT_DOCTOR},
    RequestKind.EXAM: {Role.PATIENT: _DOCUMENT_PATIENT, Role.DOCTOR: _DOCUMENT_DOCTOR},
    RequestKind.CONSULTATION: {Role.PATIENT: _CONSULTATION_PATIENT, Role.DOCTOR: _CONSULTATION_DOCTOR},
}


def _check_tables() -> None:
    """Every (kind, role) pair must have a table and a default"""
    for kind in RequestKind:
        for role in Role:
            if role not in PHASE_TABLE.get(kind, {}) or role not in DEFAULT_CONFIGS.get(kind, {}):
                raise RuntimeError(f"Phase table missing for kind={kind.value}, role={role.value}")
    missing_terminal = TERMINAL_STATUSES - set(TERMINAL_CONFIGS)
    if missing_terminal:
        raise RuntimeError(f"Terminal config missing for {sorted(s.value for s in missing_terminal)}")


_check_tables()


def resolve_phase(
    role: Union[Role, str, None],
    kind: Union[RequestKind, str, None],
    status: Union[NormalizedStatus, str, None],
    raw_status: Optional[str] = None,
) -> PhaseConfig:
    """
    Phase configuration for one (role, kind, status) tuple

    Args:
        role: patient or doctor; unknown roles get the initial phase with no actions
        kind: request kind; unknown kinds are treated as prescriptions
        status: normalized status (raw strings are normalized here)
        raw_status: status exactly as received, used to detect AI pre-screening

    Returns:
        PhaseConfig, never None
    """
    normalized = normalize_request_status(status)
    if raw_status is None and isinstance(status, str):
        raw_status = status
    request_kind = coerce_kind(kind)

    terminal = TERMINAL_CONFIGS.get(normalized)
    if terminal is not None:
        return terminal

    resolved_role = coerce_role(role)
    if resolved_role is None:
        logger.warning(f"Unknown role {role!r}, resolving to the initial phase with no actions")
        return replace(
            DEFAULT_CONFIGS[request_kind][Role.PATIENT],
            disabled_reason=GENERIC_DISABLED_REASON,
        )

    # Unrecognized raw values never inherit the fallback status' actions
    recognized = (is_known_status(raw_status) if raw_status is not None
                  else isinstance(status, NormalizedStatus))
    if not recognized:
        return DEFAULT_CONFIGS[request_kind][resolved_role]

    table = PHASE_TABLE[request_kind][resolved_role]
    config = table.get(normalized, DEFAULT_CONFIGS[request_kind][resolved_role])

    # AI pre-screening is shown to the patient only, and only for documents
    if (request_kind is not RequestKind.CONSULTATION
            and resolved_role is Role.PATIENT
            and raw_status == AI_SCREENING_RAW_STATUS):
        return replace(config, phase=P.AI, title="Análise IA")

    return config
