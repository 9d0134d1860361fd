"""Request/response schemas for the activity log API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from humanika.shared.enums import ActivityType


class ActivityLogEntryResponse(BaseModel):
    """Single activity log entry (read)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str | None
    activity_type: ActivityType
    entity_type: str
    entity_id: str | None
    description: str
    metadata: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None
    created_at: datetime


class ActivityLogListResponse(BaseModel):
    """Paginated list of activity log entries."""

    items: list[ActivityLogEntryResponse]
    page: int
    limit: int
    total: int
