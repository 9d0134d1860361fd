"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities or application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from humanika.application.dtos.activity_log import (
        ActivityLogEntryCreate,
        ActivityLogResult,
    )
    from humanika.application.dtos.approval import ApprovalFilters
    from humanika.application.dtos.user import UserResult
    from humanika.domain.entities import ApprovalRecordEntity
    from humanika.domain.enums import ApprovalDecision, EntityType, Status
    from humanika.shared.enums import ActivityType


# Approval record store interface
class IApprovalRecordStore(Protocol):
    """Durable storage and lookup of approval records. Never mutates the owning entity."""

    async def create(
        self,
        entity_type: EntityType,
        entity_id: str,
        submitter_id: str | None = None,
        initial_decision: ApprovalDecision | None = None,
        reviewer_id: str | None = None,
    ) -> ApprovalRecordEntity:
        """Create a record (PENDING by default). Raises DuplicatePendingError if one is pending.

        A resolved initial_decision needs reviewer_id (ValidationException) and
        may not require a note (NoteRequiredError).
        """

    async def resolve(
        self,
        record_id: str,
        reviewer_id: str,
        decision: ApprovalDecision,
        note: str | None = None,
    ) -> ApprovalRecordEntity:
        """Resolve a pending record. Raises NoteRequiredError, AlreadyResolvedError."""

    async def cancel(self, record_id: str, user_id: str) -> ApprovalRecordEntity:
        """Mark a pending record CANCELLED (owner withdrawal). Raises AlreadyResolvedError."""

    async def get_by_id(self, record_id: str) -> ApprovalRecordEntity | None:
        """Return record by ID."""

    async def find_pending(
        self, entity_type: EntityType, entity_id: str
    ) -> ApprovalRecordEntity | None:
        """Return the pending record for the entity, or None."""

    async def list_by_entity(
        self, entity_type: EntityType, entity_id: str
    ) -> list[ApprovalRecordEntity]:
        """Return all records for the entity, oldest first (audit history)."""

    async def list_records(
        self, filters: ApprovalFilters, skip: int = 0, limit: int = 10
    ) -> list[ApprovalRecordEntity]:
        """Return records matching filters, newest first (approval queue)."""

    async def count_records(self, filters: ApprovalFilters) -> int:
        """Return total count of records matching filters."""


# Entity adapter interface (one implementation per entity kind)
class IEntityAdapter(Protocol):
    """Maps generic workflow calls onto one entity kind's persistence. No business rules."""

    entity_type: EntityType
    allows_resubmission: bool
    publishable: bool

    async def get_owner_id(self, entity_id: str) -> str | None:
        """Return the owner (responsible user) id. Raises ResourceNotFoundException."""

    async def get_current_status(self, entity_id: str, *, lock: bool = False) -> Status:
        """Return current status; lock=True holds a row lock for the transaction.

        Raises ResourceNotFoundException.
        """

    async def get_display_name(self, entity_id: str) -> str:
        """Return the entity's display label (name, letter subject, article title)."""

    async def set_status(self, entity_id: str, status: Status) -> None:
        """Persist the new status. Raises ResourceNotFoundException."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user lookups used by authorization and login."""

    async def get_user(self, user_id: str) -> UserResult | None:
        """Return user by ID."""

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        """Return user if email/password match and the user is active."""


# Activity log repository interface
class IActivityLogRepository(Protocol):
    """Append-only activity log (audit trail)."""

    async def create(self, entry: ActivityLogEntryCreate) -> ActivityLogResult:
        """Append one entry; return created record."""

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

    async def count(
        self,
        *,
        activity_type: ActivityType | None = None,
        entity_type: str | None = None,
        entity_id: str | None = None,
        from_timestamp: datetime | None = None,
        to_timestamp: datetime | None = None,
    ) -> int:
        """Count entries matching filters."""
