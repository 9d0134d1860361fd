"""Activity log service: writes to activity_log table. Implements IActivityLogger."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from humanika.application.dtos.activity_log import ActivityLogEntryCreate
from humanika.shared.context import get_request_context

if TYPE_CHECKING:
    from humanika.application.interfaces.repositories import IActivityLogRepository
    from humanika.shared.enums import ActivityType


class ActivityLogService:
    """Appends activity entries, filling client address and request id from the request context."""

    def __init__(self, repo: IActivityLogRepository) -> None:
        self._repo = repo

    async def log(
        self,
        *,
        user_id: str | None,
        activity_type: ActivityType,
        entity_type: str,
        entity_id: str | None,
        description: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Append one activity log entry."""
        ctx = get_request_context()
        entry = ActivityLogEntryCreate(
            user_id=user_id if user_id is not None else ctx.user_id,
            activity_type=activity_type,
            entity_type=entity_type,
            entity_id=entity_id,
            description=description,
            metadata=metadata,
            ip_address=ctx.ip_address,
            user_agent=ctx.user_agent,
            request_id=ctx.request_id,
        )
        await self._repo.create(entry)
