#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Timeline builder - ordered progress steps per role and kind
"""

from typing import List, Tuple, Union

from .models import RequestKind, Role, UiPhase, UiTimelineStep, coerce_kind, coerce_role
from .status_labels import STATUS_LABELS_PT

P = UiPhase

DONE = "done"
CURRENT = "current"
TODO = "todo"

# (step id, label, phases that place the request on this step)
StepDef = Tuple[str, str, Tuple[UiPhase, ...]]

AI_STEP: StepDef = ("ai", "Análise IA", (P.AI,))

DOCUMENT_PATIENT_STEPS: Tuple[StepDef, ...] = (
    ("sent", "Enviado", (P.SENT,)),
    ("review", STATUS_LABELS_PT["in_review"], (P.REVIEW,)),
    ("payment", "Pagamento", (P.AWAITING_PAYMENT,)),
    ("signed", "Assinado", (P.WAITING_DOCTOR, P.SIGNED)),
    ("delivered", "Entregue", (P.DELIVERED,)),
)

DOCUMENT_DOCTOR_STEPS: Tuple[StepDef, ...] = (
    ("new", "Novo", (P.SENT,)),
    ("review", STATUS_LABELS_PT["in_review"], (P.REVIEW,)),
    ("payment", "Aguardando pagamento", (P.AWAITING_PAYMENT,)),
    ("sign", "Assinar", (P.READY_TO_SIGN,)),
    ("delivered", "Entregue", (P.SIGNED, P.DELIVERED)),
)

CONSULTATION_PATIENT_STEPS: Tuple[StepDef, ...] = (
    ("searching", "Buscando", (P.SENT,)),
    ("payment", "Pagamento", (P.AWAITING_PAYMENT,)),
    ("ready", "Pronta", (P.CONSULT_READY,)),
    ("consultation", "Em Consulta", (P.IN_CONSULTATION,)),
    ("finished", "Finalizada", (P.FINISHED,)),
)

CONSULTATION_DOCTOR_STEPS: Tuple[StepDef, ...] = (
    ("new", "Nova", (P.SENT,)),
    ("payment", "Pagamento", (P.CONSULT_READY, P.AWAITING_PAYMENT)),
    ("consultation", "Em atendimento", (P.IN_CONSULTATION,)),
    ("finished", "Finalizada", (P.FINISHED,)),
)


def step_definitions(
    role: Union[Role, str, None],
    kind: Union[RequestKind, str, None],
    show_ai_step: bool = False,
) -> Tuple[StepDef, ...]:
    """Step list for a role/kind; unknown roles use the patient list"""
    is_doctor = coerce_role(role) is Role.DOCTOR
    if coerce_kind(kind) is RequestKind.CONSULTATION:
        return CONSULTATION_DOCTOR_STEPS if is_doctor else CONSULTATION_PATIENT_STEPS
    if is_doctor:
        return DOCUMENT_DOCTOR_STEPS
    if show_ai_step:
        return DOCUMENT_PATIENT_STEPS[:1] + (AI_STEP,) + DOCUMENT_PATIENT_STEPS[1:]
    return DOCUMENT_PATIENT_STEPS


def build_timeline(
    role: Union[Role, str, None],
    kind: Union[RequestKind, str, None],
    phase: Union[UiPhase, str],
    show_ai_step: bool = False,
) -> List[UiTimelineStep]:
    """
    Build the progress timeline for a resolved phase

    The first step whose phase set contains `phase` is current, earlier steps
    are done, later ones todo. When no step matches (terminal phases, or a
    phase the list does not know) every step is todo.
    """
    try:
        current_phase = UiPhase(phase)
    except ValueError:
        current_phase = None

    # the patient document list always carries the AI step while in it
    show_ai = show_ai_step or current_phase is P.AI
    steps = step_definitions(role, kind, show_ai)

    current_index = next(
        (i for i, (_, _, phases) in enumerate(steps) if current_phase in phases),
        None,
    )

    timeline = []
    for i, (step_id, label, _) in enumerate(steps):
        if current_index is None or i > current_index:
            state = TODO
        elif i == current_index:
            state = CURRENT
        else:
            state = DONE
        timeline.append(UiTimelineStep(id=step_id, label=label, state=state))
    return timeline
