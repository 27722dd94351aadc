#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Action gate - "can I do this?" and "why not?" for a request
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional, Union

from .models import RequestLike, Role, UiActions, UiPhase
from .phase_resolver import GENERIC_DISABLED_REASON
from .ui_model import get_ui_model

P = UiPhase


class GuardAction(Enum):
    """Actions a screen may try to perform"""
    PAY = "pay"
    SIGN = "sign"
    DELIVER = "deliver"
    APPROVE = "approve"
    REJECT = "reject"
    JOIN_CALL = "join_call"
    DOWNLOAD = "download"
    CANCEL = "cancel"
    ACCEPT_CONSULTATION = "accept_consultation"


# GuardAction -> UiActions flag
ACTION_FLAGS: Dict[GuardAction, str] = {
    GuardAction.PAY: "can_pay",
    GuardAction.SIGN: "can_sign",
    GuardAction.DELIVER: "can_deliver",
    GuardAction.APPROVE: "can_approve",
    GuardAction.REJECT: "can_reject",
    GuardAction.JOIN_CALL: "can_join_call",
    GuardAction.DOWNLOAD: "can_download",
    GuardAction.CANCEL: "can_cancel",
    GuardAction.ACCEPT_CONSULTATION: "can_accept_consultation",
}

# Phases in which the lifecycle already went past the action
ALREADY_DONE_PHASES: Dict[GuardAction, FrozenSet[UiPhase]] = {
    GuardAction.PAY: frozenset({
        P.WAITING_DOCTOR, P.READY_TO_SIGN, P.SIGNED, P.DELIVERED, P.IN_CONSULTATION, P.FINISHED,
    }),
    GuardAction.SIGN: frozenset({P.SIGNED, P.DELIVERED}),
    GuardAction.DELIVER: frozenset({P.DELIVERED}),
}

ALREADY_DONE_MESSAGES: Dict[GuardAction, str] = {
    GuardAction.PAY: "Pagamento já foi realizado.",
    GuardAction.SIGN: "Pedido já assinado.",
    GuardAction.DELIVER: "Pedido já entregue.",
}

FALLBACK_MESSAGES: Dict[GuardAction, str] = {
    GuardAction.PAY: "Este pedido não está disponível para pagamento.",
    GuardAction.SIGN: "Este pedido não está pronto para assinatura.",
    GuardAction.DELIVER: "Este pedido não está pronto para entrega.",
}


def _coerce_action(action: Union[GuardAction, str, None]) -> Optional[GuardAction]:
    if isinstance(action, GuardAction):
        return action
    try:
        return GuardAction(action)
    except ValueError:
        return None


def actions_for(request: RequestLike, role: Union[Role, str]) -> UiActions:
    """Complete action record (every flag populated)"""
    return get_ui_model(request, role).actions


def is_action_allowed(
    request: RequestLike,
    role: Union[Role, str],
    action: Union[GuardAction, str],
) -> bool:
    guard = _coerce_action(action)
    if guard is None:
        return False
    return getattr(actions_for(request, role), ACTION_FLAGS[guard])


def get_blocked_action_message(
    request: RequestLike,
    role: Union[Role, str],
    action: Union[GuardAction, str],
) -> str:
    """
    Why an action is unavailable

    Empty string when the action is allowed. Otherwise an "already done"
    message if the lifecycle passed that step, else the phase's disabled
    reason, else a generic per-action message.
    """
    guard = _coerce_action(action)
    if guard is None:
        return GENERIC_DISABLED_REASON

    ui = get_ui_model(request, role)
    if getattr(ui.actions, ACTION_FLAGS[guard]):
        return ""

    if ui.phase in ALREADY_DONE_PHASES.get(guard, frozenset()):
        return ALREADY_DONE_MESSAGES[guard]

    # pay is always explained from the patient's point of view
    if guard is GuardAction.PAY:
        return FALLBACK_MESSAGES[guard]

    return ui.disabled_reason or FALLBACK_MESSAGES.get(guard, GENERIC_DISABLED_REASON)
