"""Service interfaces (ports) for the application layer.

Protocols for the unit of work, reviewer authorization and activity logging
collaborators used by the approval workflow engine.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from humanika.domain.enums import EntityType
    from humanika.shared.enums import ActivityType


class IUnitOfWork(Protocol):
    """Transaction scope for one workflow operation (all-or-nothing)."""

    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Return an async context manager; exceptions inside roll back every write."""
        ...


class IReviewerAuthorizer(Protocol):
    """Decides whether a user may review, archive or publish an entity kind."""

    async def require_reviewer(
        self, user_id: str, entity_type: EntityType, action: str
    ) -> None:
        """Raise AuthorizationException if user_id may not perform action on entity_type."""


class IActivityLogger(Protocol):
    """Records who changed what and when (append-only)."""

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
        """Append one activity entry."""
