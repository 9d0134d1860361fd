"""DTOs for the activity log (who changed what and when)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from humanika.shared.enums import ActivityType


@dataclass(frozen=True)
class ActivityLogEntryCreate:
    """Input for appending one activity log record. Append-only; no update."""

    user_id: str | None
    activity_type: ActivityType
    entity_type: str
    entity_id: str | None
    description: str
    metadata: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    request_id: str | None


@dataclass(frozen=True)
class ActivityLogResult:
    """Single activity log entry (read-model for list)."""

    id: str
    user_id: str | None
    activity_type: ActivityType
    entity_type: str
    entity_id: str | None
    description: str
    metadata: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    request_id: str | None
    created_at: datetime
