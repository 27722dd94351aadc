#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Portuguese labels for backend statuses (display only)

Backend enums, API payloads and database values never change; these strings
are only what the user reads on badges, timelines, cards and counters.
"""

from typing import Dict

STATUS_LABELS_PT: Dict[str, str] = {
    # prescription / exam
    "submitted": "Enviado",
    "analyzing": "Em análise médica",
    "in_review": "Em análise médica",
    "approved_pending_payment": "Aguardando pagamento",
    "paid": "Pago",
    "signed": "Assinado",
    "delivered": "Entregue",
    # consultation
    "searching_doctor": "Buscando médico",
    "consultation_ready": "Consulta pronta",
    "in_consultation": "Em consulta",
    "consultation_finished": "Finalizada",
    # common
    "rejected": "Rejeitado",
    "cancelled": "Cancelado",
    # legacy
    "pending": "Pendente",
    "pending_payment": "Aguardando pagamento",
    "approved": "Aprovado",
    "completed": "Concluído",
}

# Cards and generic lists show queued requests as "Na fila"
STATUS_DISPLAY_LABELS_PT: Dict[str, str] = {
    **STATUS_LABELS_PT,
    "submitted": "Na fila",
    "searching_doctor": "Na fila",
}


def get_status_label_pt(status: str) -> str:
    """PT label for a raw backend status; the raw value when unmapped"""
    return STATUS_LABELS_PT.get(status, status)


def get_status_display_label_pt(status: str) -> str:
    return STATUS_DISPLAY_LABELS_PT.get(status, status)
