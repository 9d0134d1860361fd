"""Activity log repository. Append-only; implements IActivityLogRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from humanika.application.dtos.activity_log import (
    ActivityLogEntryCreate,
    ActivityLogResult,
)
from humanika.infrastructure.persistence.models.activity_log import ActivityLog
from humanika.shared.enums import ActivityType
from humanika.shared.utils import ensure_utc, generate_cuid


def _orm_to_result(row: ActivityLog) -> ActivityLogResult:
    """Map ORM to application DTO."""
    return ActivityLogResult(
        id=row.id,
        user_id=row.user_id,
        activity_type=ActivityType(row.activity_type),
        entity_type=row.entity_type,
        entity_id=row.entity_id,
        description=row.description,
        metadata=row.metadata_,
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        request_id=row.request_id,
        created_at=ensure_utc(row.created_at),
    )


def _conditions(
    activity_type: ActivityType | None,
    entity_type: str | None,
    entity_id: str | None,
    from_timestamp: datetime | None,
    to_timestamp: datetime | None,
) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if activity_type is not None:
        conditions.append(ActivityLog.activity_type == activity_type.value)
    if entity_type is not None:
        conditions.append(ActivityLog.entity_type == entity_type)
    if entity_id is not None:
        conditions.append(ActivityLog.entity_id == entity_id)
    if from_timestamp is not None:
        conditions.append(ActivityLog.created_at >= from_timestamp)
    if to_timestamp is not None:
        conditions.append(ActivityLog.created_at <= to_timestamp)
    return conditions


class ActivityLogRepository:
    """Append-only activity log repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, entry: ActivityLogEntryCreate) -> ActivityLogResult:
        """Append one entry; return created record."""
        row = ActivityLog(
            id=generate_cuid(),
            user_id=entry.user_id,
            activity_type=entry.activity_type.value,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            description=entry.description,
            metadata_=entry.metadata,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            request_id=entry.request_id,
        )
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return _orm_to_result(row)

    async def list(
        self,
        *,
        skip: int = 0,
        limit: int = 100,
        activity_type: ActivityType | None = None,
        entity_type: str | None = None,
        entity_id: str | None = None,
        from_timestamp: datetime | None = None,
        to_timestamp: datetime | None = None,
    ) -> list[ActivityLogResult]:
        """List entries with optional filters (newest first)."""
        stmt = (
            select(ActivityLog)
            .where(
                *_conditions(
                    activity_type, entity_type, entity_id, from_timestamp, to_timestamp
                )
            )
            .order_by(ActivityLog.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]

    async def count(
        self,
        *,
        activity_type: ActivityType | None = None,
        entity_type: str | None = None,
        entity_id: str | None = None,
        from_timestamp: datetime | None = None,
        to_timestamp: datetime | None = None,
    ) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(ActivityLog)
            .where(
                *_conditions(
                    activity_type, entity_type, entity_id, from_timestamp, to_timestamp
                )
            )
        )
        return int(result.scalar_one())
