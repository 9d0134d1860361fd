"""Reviewer authorization: role-based check for review, archive and publish."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from humanika.domain.enums import EntityType, UserRole
from humanika.domain.exceptions import AuthorizationException
from humanika.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from humanika.application.interfaces.repositories import IUserRepository

logger = get_logger(__name__)

# Approval on works, events, proposals, accountability reports, letters and
# transactions is granted to the supervisory and executive boards.
DEFAULT_REVIEWER_ROLES: frozenset[UserRole] = frozenset({UserRole.DPO, UserRole.BPH})


class RoleReviewerAuthorizer:
    """Allows a user to review when active and holding one of the reviewer roles.

    role_overrides narrows or widens the role set for one entity kind.
    """

    def __init__(
        self,
        user_repo: IUserRepository,
        reviewer_roles: Iterable[UserRole | str] = DEFAULT_REVIEWER_ROLES,
        role_overrides: dict[EntityType, Iterable[UserRole | str]] | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._roles = frozenset(UserRole(r) for r in reviewer_roles)
        self._overrides = {
            et: frozenset(UserRole(r) for r in roles)
            for et, roles in (role_overrides or {}).items()
        }

    def roles_for(self, entity_type: EntityType) -> frozenset[UserRole]:
        """Return the roles allowed to review entity_type."""
        return self._overrides.get(entity_type, self._roles)

    async def require_reviewer(
        self, user_id: str, entity_type: EntityType, action: str
    ) -> None:
        """Raise AuthorizationException if user is unknown, inactive or lacks a reviewer role."""
        user = await self._user_repo.get_user(user_id)
        if user is None or not user.is_active or user.role not in self.roles_for(entity_type):
            logger.info(
                "Denied %s on %s for user %s (role=%s)",
                action,
                entity_type.value,
                user_id,
                user.role.value if user else None,
            )
            raise AuthorizationException(resource=entity_type.value, action=action)
