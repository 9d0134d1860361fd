"""Activity log API: read-only, paginated."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from humanika.api.v1.dependencies import get_activity_log_repo, require_reviewer_role
from humanika.application.dtos.user import UserResult
from humanika.application.interfaces.repositories import IActivityLogRepository
from humanika.schemas.activity import ActivityLogEntryResponse, ActivityLogListResponse
from humanika.shared.enums import ActivityType

router = APIRouter()


@router.get("", response_model=ActivityLogListResponse)
async def list_activities(
    current_user: Annotated[
        UserResult, Depends(require_reviewer_role("activity", "view"))
    ],
    repo: Annotated[IActivityLogRepository, Depends(get_activity_log_repo)],
    activity_type: ActivityType | None = Query(None),
    entity_type: str | None = Query(None),
    entity_id: str | None = Query(None),
    from_timestamp: datetime | None = Query(None, alias="from"),
    to_timestamp: datetime | None = Query(None, alias="to"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """List activity entries, newest first. Reviewer roles only (entries carry IP and user agent)."""
    filters = {
        "activity_type": activity_type,
        "entity_type": entity_type,
        "entity_id": entity_id,
        "from_timestamp": from_timestamp,
        "to_timestamp": to_timestamp,
    }
    entries = await repo.list(skip=(page - 1) * limit, limit=limit, **filters)
    total = await repo.count(**filters)
    return ActivityLogListResponse(
        items=[ActivityLogEntryResponse.model_validate(e) for e in entries],
        page=page,
        limit=limit,
        total=total,
    )
