#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Request lifecycle data model

Closed enums shared by every component of the lifecycle model, the read-only
MedicalRequest record received from the backend, and the view-model
dataclasses handed to rendering code.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NormalizedStatus(Enum):
    """Canonical backend status, after collapsing legacy aliases"""
    # prescription / exam
    SUBMITTED = "submitted"                                  # created by the patient
    IN_REVIEW = "in_review"                                  # doctor is reviewing
    APPROVED_PENDING_PAYMENT = "approved_pending_payment"    # approved, waiting for the patient to pay
    PAID = "paid"                                            # paid, waiting for the signature
    SIGNED = "signed"                                        # signed PDF available
    DELIVERED = "delivered"                                  # final success state
    # common terminal states
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    # consultation
    SEARCHING_DOCTOR = "searching_doctor"
    CONSULTATION_READY = "consultation_ready"
    IN_CONSULTATION = "in_consultation"
    CONSULTATION_FINISHED = "consultation_finished"


class Role(Enum):
    """Consumer role of the view model"""
    PATIENT = "patient"
    DOCTOR = "doctor"


class RequestKind(Enum):
    """Kind of medical request"""
    PRESCRIPTION = "prescription"
    EXAM = "exam"
    CONSULTATION = "consultation"


class UiPhase(Enum):
    """UI-facing lifecycle stage"""
    SENT = "sent"
    AI = "ai"                              # automated pre-screening, patient only
    REVIEW = "review"
    AWAITING_PAYMENT = "awaiting_payment"
    WAITING_DOCTOR = "waiting_doctor"
    READY_TO_SIGN = "ready_to_sign"
    SIGNED = "signed"
    DELIVERED = "delivered"
    CONSULT_READY = "consult_ready"
    IN_CONSULTATION = "in_consultation"
    FINISHED = "finished"
    CANCELLED = "cancelled"
    REJECTED = "rejected"
    ERROR = "error"


class RequestUiColorKey(Enum):
    """Badge colour semantics: blue = action, green = success, amber = waiting, grey = historical"""
    ACTION = "action"
    SUCCESS = "success"
    WAITING = "waiting"
    HISTORICAL = "historical"


class CountersBucket(Enum):
    """Coarse dashboard category"""
    PENDING = "pending"
    TO_PAY = "to_pay"
    READY = "ready"
    IN_CONSULTATION = "in_consultation"
    HISTORICAL = "historical"
    NONE = "none"


TERMINAL_STATUSES = frozenset({NormalizedStatus.REJECTED, NormalizedStatus.CANCELLED})


def coerce_role(role: Union[Role, str, None]) -> Optional[Role]:
    """Role member for a role or its string value; None when unknown"""
    if isinstance(role, Role):
        return role
    try:
        return Role(role)
    except ValueError:
        return None


def coerce_kind(kind: Union[RequestKind, str, None]) -> RequestKind:
    """Request kind for a raw requestType; anything unrecognised is a prescription"""
    if isinstance(kind, RequestKind):
        return kind
    if kind == RequestKind.CONSULTATION.value:
        return RequestKind.CONSULTATION
    if kind == RequestKind.EXAM.value:
        return RequestKind.EXAM
    return RequestKind.PRESCRIPTION


# ============================================
# Input records (owned by the backend, read-only here)
# ============================================

class MedicalRequest(BaseModel):
    """Request record as returned by the requests API"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    status: str = ""
    request_type: Optional[str] = Field(default=None, alias="requestType")
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    signed_at: Optional[str] = Field(default=None, alias="signedAt")
    patient_name: Optional[str] = Field(default=None, alias="patientName")
    doctor_name: Optional[str] = Field(default=None, alias="doctorName")
    medications: Optional[List[str]] = None
    exams: Optional[List[str]] = None
    symptoms: Optional[str] = None
    price: Optional[float] = None
    ai_risk_level: Optional[str] = Field(default=None, alias="aiRiskLevel")

    @field_validator("status", mode="before")
    @classmethod
    def _status_as_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator(
        "id", "request_type", "created_at", "updated_at", "signed_at",
        "patient_name", "doctor_name", "symptoms", "ai_risk_level",
        mode="before",
    )
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("medications", "exams", mode="before")
    @classmethod
    def _text_list(cls, value: Any) -> Optional[List[str]]:
        if not isinstance(value, (list, tuple)):
            return None
        return [item if isinstance(item, str) else str(item) for item in value if item is not None]

    @field_validator("price", mode="before")
    @classmethod
    def _optional_price(cls, value: Any) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    @property
    def kind(self) -> RequestKind:
        return coerce_kind(self.request_type)


class PagedRequests(BaseModel):
    """Paginated fetch envelope"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    items: List[MedicalRequest] = Field(default_factory=list)
    total_count: int = Field(default=0, alias="totalCount")


RequestLike = Union[MedicalRequest, Mapping[str, Any]]


def as_request(request: RequestLike) -> MedicalRequest:
    """Validate a plain mapping into a MedicalRequest; records pass through"""
    if isinstance(request, MedicalRequest):
        return request
    if not isinstance(request, Mapping):
        return MedicalRequest()
    return MedicalRequest.model_validate(dict(request))


# ============================================
# View model
# ============================================

@dataclass(frozen=True)
class UiActions:
    """Permitted actions; every flag defaults to False"""
    can_pay: bool = False
    can_approve: bool = False
    can_reject: bool = False
    can_sign: bool = False
    can_deliver: bool = False
    can_join_call: bool = False
    can_download: bool = False
    can_cancel: bool = False
    can_accept_consultation: bool = False

    def enabled(self) -> List[str]:
        return [name for name, value in self.__dict__.items() if value]

    def to_dict(self) -> Dict[str, bool]:
        return {
            "canPay": self.can_pay,
            "canApprove": self.can_approve,
            "canReject": self.can_reject,
            "canSign": self.can_sign,
            "canDeliver": self.can_deliver,
            "canJoinCall": self.can_join_call,
            "canDownload": self.can_download,
            "canCancel": self.can_cancel,
            "canAcceptConsultation": self.can_accept_consultation,
        }


NO_ACTIONS = UiActions()


@dataclass(frozen=True)
class PhaseConfig:
    """One cell of the phase table"""
    phase: UiPhase
    title: str
    counters_bucket: CountersBucket
    actions: UiActions = NO_ACTIONS
    subtitle: Optional[str] = None
    disabled_reason: Optional[str] = None


@dataclass(frozen=True)
class UiTimelineStep:
    id: str
    label: str
    state: str  # done | current | todo

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "label": self.label, "state": self.state}


@dataclass(frozen=True)
class Badge:
    label: str
    color_key: RequestUiColorKey

    def to_dict(self) -> Dict[str, str]:
        return {"label": self.label, "colorKey": self.color_key.value}


@dataclass(frozen=True)
class RequestUiModel:
    """Everything the UI needs to render one request"""
    phase: UiPhase
    title: str
    badge: Badge
    actions: UiActions
    counters_bucket: CountersBucket
    timeline_steps: List[UiTimelineStep] = field(default_factory=list)
    subtitle: Optional[str] = None
    disabled_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialized view model (camelCase keys, enum values as strings)"""
        return {
            "phase": self.phase.value,
            "title": self.title,
            "subtitle": self.subtitle,
            "badge": self.badge.to_dict(),
            "timelineSteps": [step.to_dict() for step in self.timeline_steps],
            "actions": self.actions.to_dict(),
            "countersBucket": self.counters_bucket.value,
            "disabledReason": self.disabled_reason,
        }
