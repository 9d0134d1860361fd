"""Approval record repository. Implements IApprovalRecordStore.

Never touches the owning entity. Pending uniqueness is checked in code and
guaranteed by the partial unique index uq_approval_record_one_pending;
resolution is a conditional UPDATE so only one concurrent resolver wins.
"""

from __future__ import annotations

from sqlalchemy import and_, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from humanika.application.dtos.approval import ApprovalFilters
from humanika.domain.entities import ApprovalRecordEntity
from humanika.domain.enums import ApprovalDecision, EntityType
from humanika.domain.exceptions import (
    AlreadyResolvedError,
    DuplicatePendingError,
    ResourceNotFoundException,
)
from humanika.infrastructure.persistence.models.approval_record import ApprovalRecord
from humanika.infrastructure.persistence.repositories.base import BaseRepository
from humanika.shared.telemetry.logging import get_logger
from humanika.shared.utils import ensure_utc, utc_now

logger = get_logger(__name__)

_PENDING = ApprovalDecision.PENDING.value


def _record_to_entity(row: ApprovalRecord) -> ApprovalRecordEntity:
    """Map ORM to domain entity."""
    return ApprovalRecordEntity(
        id=row.id,
        entity_type=EntityType(row.entity_type),
        entity_id=row.entity_id,
        submitter_id=row.submitter_id,
        reviewer_id=row.reviewer_id,
        decision=ApprovalDecision(row.decision),
        note=row.note,
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
        resolved_at=ensure_utc(row.resolved_at),
    )


def _filter_conditions(filters: ApprovalFilters) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if filters.decision is not None:
        conditions.append(ApprovalRecord.decision == filters.decision.value)
    if filters.entity_type is not None:
        conditions.append(ApprovalRecord.entity_type == filters.entity_type.value)
    return conditions


class ApprovalRecordRepository(BaseRepository[ApprovalRecord]):
    """SQLAlchemy-backed approval record store."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ApprovalRecord)

    async def create(  # type: ignore[override]
        self,
        entity_type: EntityType,
        entity_id: str,
        submitter_id: str | None = None,
        initial_decision: ApprovalDecision | None = None,
        reviewer_id: str | None = None,
    ) -> ApprovalRecordEntity:
        """Insert a record (PENDING unless initial_decision says otherwise).

        A non-pending initial decision stores an already resolved record: it
        needs reviewer_id and must not be one that requires a note.

        Raises:
            DuplicatePendingError: A pending record exists (including a racing insert).
            NoteRequiredError: initial_decision is REJECTED or REVISION.
            ValidationException: Resolved initial_decision without reviewer_id.
        """
        decision = ApprovalRecordEntity.validate_initial(
            initial_decision or ApprovalDecision.PENDING, reviewer_id
        )
        pending = decision == ApprovalDecision.PENDING
        if pending and await self.find_pending(entity_type, entity_id) is not None:
            raise DuplicatePendingError(entity_type.value, entity_id)
        now = utc_now()
        # Explicit timestamps keep history ordered within a single transaction.
        row = ApprovalRecord(
            entity_type=entity_type.value,
            entity_id=entity_id,
            submitter_id=submitter_id,
            reviewer_id=None if pending else reviewer_id,
            decision=decision.value,
            created_at=now,
            updated_at=now,
            resolved_at=None if pending else now,
        )
        try:
            async with self.db.begin_nested():
                created = await super().create(row)
        except IntegrityError as e:
            # Savepoint rolled back; the partial unique index caught a concurrent submit.
            logger.info(
                "Pending approval insert lost race for %s %s: %s",
                entity_type.value,
                entity_id,
                e.orig,
            )
            raise DuplicatePendingError(entity_type.value, entity_id) from e
        return _record_to_entity(created)

    async def resolve(
        self,
        record_id: str,
        reviewer_id: str,
        decision: ApprovalDecision,
        note: str | None = None,
    ) -> ApprovalRecordEntity:
        """Resolve a pending record with a review decision.

        Raises:
            ValidationException: decision is not APPROVED, REJECTED or REVISION.
            NoteRequiredError: REJECTED/REVISION without a note.
            AlreadyResolvedError: Record is no longer PENDING.
            ResourceNotFoundException: No record with record_id.
        """
        clean_note = ApprovalRecordEntity.validate_resolution(decision, reviewer_id, note)
        return await self._close(record_id, reviewer_id, decision, clean_note)

    async def cancel(self, record_id: str, user_id: str) -> ApprovalRecordEntity:
        """Mark a pending record CANCELLED; user_id is stored as reviewer_id."""
        ApprovalRecordEntity.validate_resolution(
            ApprovalDecision.CANCELLED, user_id, None, allow_cancel=True
        )
        return await self._close(record_id, user_id, ApprovalDecision.CANCELLED, None)

    async def _close(
        self,
        record_id: str,
        reviewer_id: str,
        decision: ApprovalDecision,
        note: str | None,
    ) -> ApprovalRecordEntity:
        now = utc_now()
        stmt = (
            update(ApprovalRecord)
            .where(
                and_(
                    ApprovalRecord.id == record_id,
                    ApprovalRecord.decision == _PENDING,
                )
            )
            .values(
                decision=decision.value,
                reviewer_id=reviewer_id,
                note=note,
                resolved_at=now,
                updated_at=now,
            )
            .returning(ApprovalRecord)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.db.execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            existing = await self.get_by_id(record_id)
            if existing is None:
                raise ResourceNotFoundException("approval_record", record_id)
            raise AlreadyResolvedError(record_id, existing.decision.value)
        return _record_to_entity(row)

    async def get_by_id(self, record_id: str) -> ApprovalRecordEntity | None:  # type: ignore[override]
        row = await super().get_by_id(record_id)
        return _record_to_entity(row) if row else None

    async def find_pending(
        self, entity_type: EntityType, entity_id: str
    ) -> ApprovalRecordEntity | None:
        result = await self.db.execute(
            select(ApprovalRecord).where(
                ApprovalRecord.entity_type == entity_type.value,
                ApprovalRecord.entity_id == entity_id,
                ApprovalRecord.decision == _PENDING,
            )
        )
        row = result.scalar_one_or_none()
        return _record_to_entity(row) if row else None

    async def list_by_entity(
        self, entity_type: EntityType, entity_id: str
    ) -> list[ApprovalRecordEntity]:
        """Return the entity's records oldest first."""
        result = await self.db.execute(
            select(ApprovalRecord)
            .where(
                ApprovalRecord.entity_type == entity_type.value,
                ApprovalRecord.entity_id == entity_id,
            )
            .order_by(ApprovalRecord.created_at.asc(), ApprovalRecord.id.asc())
        )
        return [_record_to_entity(r) for r in result.scalars().all()]

    async def list_records(
        self, filters: ApprovalFilters, skip: int = 0, limit: int = 10
    ) -> list[ApprovalRecordEntity]:
        """Return the approval queue page, newest first."""
        stmt = (
            select(ApprovalRecord)
            .where(*_filter_conditions(filters))
            .order_by(ApprovalRecord.created_at.desc(), ApprovalRecord.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [_record_to_entity(r) for r in result.scalars().all()]

    async def count_records(self, filters: ApprovalFilters) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(ApprovalRecord)
            .where(*_filter_conditions(filters))
        )
        return int(result.scalar_one())
