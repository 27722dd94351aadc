#!/usr/bin/env python3
"""
Request lifecycle module
Status normalization, phase resolution, action guards, timelines, badges and
dashboard aggregation for medical requests
"""

from .models import (
    Badge,
    CountersBucket,
    MedicalRequest,
    NormalizedStatus,
    PagedRequests,
    PhaseConfig,
    RequestKind,
    RequestUiColorKey,
    RequestUiModel,
    Role,
    UiActions,
    UiPhase,
    UiTimelineStep,
)

from .status_normalizer import normalize_request_status, LEGACY_STATUS_ALIASES
from .status_labels import STATUS_LABELS_PT, STATUS_DISPLAY_LABELS_PT, get_status_label_pt
from .phase_resolver import resolve_phase
from .badge_mapper import UI_STATUS_COLORS, badge_label, color_for_phase
from .timeline_builder import build_timeline
from .ui_model import get_ui_model
from .action_gate import GuardAction, actions_for, get_blocked_action_message, is_action_allowed

from .aggregator import (
    count_by_bucket,
    counters_for,
    counters_for_doctor,
    counters_for_patient,
    historical_grouped_by_day,
    historical_grouped_by_period,
    is_historical,
    pending_for_panel,
)

__all__ = [
    'Badge',
    'CountersBucket',
    'MedicalRequest',
    'NormalizedStatus',
    'PagedRequests',
    'PhaseConfig',
    'RequestKind',
    'RequestUiColorKey',
    'RequestUiModel',
    'Role',
    'UiActions',
    'UiPhase',
    'UiTimelineStep',
    'normalize_request_status',
    'LEGACY_STATUS_ALIASES',
    'STATUS_LABELS_PT',
    'STATUS_DISPLAY_LABELS_PT',
    'get_status_label_pt',
    'resolve_phase',
    'UI_STATUS_COLORS',
    'badge_label',
    'color_for_phase',
    'build_timeline',
    'get_ui_model',
    'GuardAction',
    'actions_for',
    'get_blocked_action_message',
    'is_action_allowed',
    'count_by_bucket',
    'counters_for',
    'counters_for_doctor',
    'counters_for_patient',
    'historical_grouped_by_day',
    'historical_grouped_by_period',
    'is_historical',
    'pending_for_panel',
]
