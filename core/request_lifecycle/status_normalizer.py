#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Status normalizer - single entry point for raw backend statuses

Collapses deprecated aliases onto the canonical status set. Total over every
string: unknown values fall back to SUBMITTED, the earliest and least
privileged state.
"""

import logging
from typing import Dict, Optional, Union

from .models import NormalizedStatus

logger = logging.getLogger(__name__)

# Legacy values still present in historical rows
LEGACY_STATUS_ALIASES: Dict[str, NormalizedStatus] = {
    "pending": NormalizedStatus.SUBMITTED,
    "analyzing": NormalizedStatus.IN_REVIEW,
    "pending_payment": NormalizedStatus.APPROVED_PENDING_PAYMENT,
    "approved": NormalizedStatus.PAID,
    "completed": NormalizedStatus.DELIVERED,
}

_CANONICAL_STATUSES: Dict[str, NormalizedStatus] = {
    status.value: status for status in NormalizedStatus
}

FALLBACK_STATUS = NormalizedStatus.SUBMITTED


def normalize_request_status(raw_status: Union[str, NormalizedStatus, None]) -> NormalizedStatus:
    """Canonical status for any raw status string"""
    if isinstance(raw_status, NormalizedStatus):
        return raw_status

    alias = LEGACY_STATUS_ALIASES.get(raw_status) if isinstance(raw_status, str) else None
    if alias is not None:
        logger.debug(f"Legacy status '{raw_status}' normalized to '{alias.value}'")
        return alias

    canonical: Optional[NormalizedStatus] = (
        _CANONICAL_STATUSES.get(raw_status) if isinstance(raw_status, str) else None
    )
    if canonical is not None:
        return canonical

    logger.warning(f"Unknown request status {raw_status!r}, falling back to '{FALLBACK_STATUS.value}'")
    return FALLBACK_STATUS


def is_legacy_status(raw_status: str) -> bool:
    return raw_status in LEGACY_STATUS_ALIASES


def is_known_status(raw_status) -> bool:
    """Canonical value or legacy alias"""
    if isinstance(raw_status, NormalizedStatus):
        return True
    return isinstance(raw_status, str) and (
        raw_status in LEGACY_STATUS_ALIASES or raw_status in _CANONICAL_STATUSES
    )
