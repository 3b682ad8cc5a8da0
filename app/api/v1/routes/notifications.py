from typing import List, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from infrastructure.logging import get_module_logger
from infrastructure.notifications import FailureLogEntry
from infrastructure.services import NotificationServiceDep

logger = get_module_logger()
router = APIRouter(prefix="/notifications", tags=["Notifications"])


class RateLimitResetRequest(BaseModel):
    identity: str = Field(min_length=1)
    limit_type: str = Field(default="api", min_length=1)


@router.get("/failures", response_model=List[FailureLogEntry])
def list_failures(
    service: NotificationServiceDep,
    limit: Optional[int] = Query(default=None, ge=1),
):
    """Most recent delivery failures, newest first."""
    return service.list_failures(limit)


@router.delete("/failures")
def clear_failures(service: NotificationServiceDep):
    """Remove every failure log entry."""
    service.clear_failures()
    return {"cleared": True}


@router.post("/rate-limits/reset")
def reset_rate_limit(body: RateLimitResetRequest, service: NotificationServiceDep):
    """Clear the current rate limit window of an identity."""
    service.reset_rate_limit(body.identity, body.limit_type)
    logger.info(
        "rate_limit_reset_requested",
        identity=body.identity,
        limit_type=body.limit_type,
    )
    return {"identity": body.identity, "limit_type": body.limit_type, "reset": True}
