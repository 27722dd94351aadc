"""
Request UI model routes
Expose the lifecycle view models to rendering clients
"""
import logging
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.middleware.exception_handler import bad_request
from api.utils.api_response import APIResponse
from core.request_lifecycle import (
    MedicalRequest,
    PagedRequests,
    Role,
    count_by_bucket,
    counters_for,
    get_blocked_action_message,
    get_ui_model,
    historical_grouped_by_period,
    is_action_allowed,
    pending_for_panel,
)
from core.request_lifecycle.models import coerce_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/requests/ui", tags=["request-ui"])


class UiModelRequest(BaseModel):
    """View model for one request"""
    role: str
    request: MedicalRequest


class UiModelsRequest(BaseModel):
    """View models for one page of requests"""
    role: str
    page: PagedRequests


class DashboardRequest(BaseModel):
    role: str
    page: PagedRequests
    limit: Optional[int] = Field(default=None, ge=0)


class GuardRequest(BaseModel):
    role: str
    action: str
    request: MedicalRequest


def _require_role(role: str) -> Role:
    resolved = coerce_role(role)
    if resolved is None:
        raise bad_request("Invalid role", f"expected 'patient' or 'doctor', got {role!r}")
    return resolved


@router.get("/health")
async def health_check():
    return APIResponse.success({"status": "ok"})


@router.post("/model")
async def get_request_ui_model(body: UiModelRequest):
    """View model of a single request"""
    role = _require_role(body.role)
    return APIResponse.success(get_ui_model(body.request, role).to_dict())


@router.post("/models")
async def get_request_ui_models(body: UiModelsRequest):
    """View models of a page of requests, in page order"""
    role = _require_role(body.role)
    items = [
        {"id": request.id, "model": get_ui_model(request, role).to_dict()}
        for request in body.page.items
    ]
    return APIResponse.success({"items": items, "totalCount": body.page.total_count})


@router.post("/dashboard")
async def get_dashboard(body: DashboardRequest):
    """Counters, buckets, pending panel and historical summary"""
    role = _require_role(body.role)
    requests = body.page.items
    pending = pending_for_panel(role, requests, body.limit)

    logger.info(f"Dashboard built for {role.value}: {len(requests)} requests, {len(pending)} pending on panel")

    return APIResponse.success({
        "counters": counters_for(role, requests),
        "buckets": count_by_bucket(role, requests),
        "pending": [request.id for request in pending],
        "historicalByPeriod": historical_grouped_by_period(requests, role),
    })


@router.post("/guard")
async def check_action(body: GuardRequest):
    """Whether an action is allowed, and why not"""
    role = _require_role(body.role)
    return APIResponse.success({
        "allowed": is_action_allowed(body.request, role, body.action),
        "message": get_blocked_action_message(body.request, role, body.action),
    })
