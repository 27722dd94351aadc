#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Request UI model - single source of truth for request -> view model

Pipeline: raw status -> normalizer -> phase resolver -> {actions, timeline,
badge}. Pure: the same request and role always produce an equal model.
"""

from typing import Union

from .badge_mapper import badge_label, color_for_phase
from .models import (
    Badge,
    NormalizedStatus,
    RequestLike,
    RequestUiModel,
    Role,
    as_request,
    coerce_role,
)
from .phase_resolver import AI_SCREENING_RAW_STATUS, resolve_phase
from .status_normalizer import normalize_request_status
from .timeline_builder import build_timeline


def get_ui_model(request: RequestLike, role: Union[Role, str]) -> RequestUiModel:
    """
    Derive the full view model of a request for one role

    Args:
        request: MedicalRequest or mapping with at least `status`
        role: patient or doctor

    Returns:
        RequestUiModel
    """
    record = as_request(request)
    kind = record.kind
    raw_status = record.status
    status = normalize_request_status(raw_status)
    config = resolve_phase(role, kind, status, raw_status)

    resolved_role = coerce_role(role) or Role.PATIENT
    show_ai_step = raw_status == AI_SCREENING_RAW_STATUS or status is NormalizedStatus.IN_REVIEW

    return RequestUiModel(
        phase=config.phase,
        title=config.title,
        subtitle=config.subtitle,
        badge=Badge(
            label=badge_label(config.title, status, resolved_role, kind),
            color_key=color_for_phase(config.phase),
        ),
        timeline_steps=build_timeline(resolved_role, kind, config.phase, show_ai_step),
        actions=config.actions,
        counters_bucket=config.counters_bucket,
        disabled_reason=config.disabled_reason,
    )
