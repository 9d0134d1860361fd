"""RoleReviewerAuthorizer unit tests with a mocked user repository."""

from unittest.mock import AsyncMock

import pytest

from humanika.application.dtos.user import UserResult
from humanika.application.services import DEFAULT_REVIEWER_ROLES, RoleReviewerAuthorizer
from humanika.domain.enums import EntityType, UserRole
from humanika.domain.exceptions import AuthorizationException


def _user(role: UserRole, *, is_active: bool = True) -> UserResult:
    return UserResult(
        id="u1", name="Ayu", email="ayu@example.org", role=role, is_active=is_active
    )


def _authorizer(user: UserResult | None, **kwargs) -> RoleReviewerAuthorizer:
    repo = AsyncMock()
    repo.get_user = AsyncMock(return_value=user)
    return RoleReviewerAuthorizer(repo, **kwargs)


def test_default_roles_are_supervisory_and_executive_boards() -> None:
    assert DEFAULT_REVIEWER_ROLES == frozenset({UserRole.DPO, UserRole.BPH})


@pytest.mark.parametrize("role", [UserRole.DPO, UserRole.BPH])
async def test_reviewer_roles_allowed(role: UserRole) -> None:
    await _authorizer(_user(role)).require_reviewer("u1", EntityType.EVENT, "approve")


@pytest.mark.parametrize("role", [UserRole.PENGURUS, UserRole.ANGGOTA])
async def test_other_roles_denied(role: UserRole) -> None:
    with pytest.raises(AuthorizationException) as exc_info:
        await _authorizer(_user(role)).require_reviewer("u1", EntityType.EVENT, "approve")
    assert exc_info.value.details == {"resource": "EVENT", "action": "approve"}


async def test_unknown_user_denied() -> None:
    with pytest.raises(AuthorizationException):
        await _authorizer(None).require_reviewer("ghost", EntityType.LETTER, "archive")


async def test_inactive_reviewer_denied() -> None:
    with pytest.raises(AuthorizationException):
        await _authorizer(_user(UserRole.DPO, is_active=False)).require_reviewer(
            "u1", EntityType.FINANCE, "approve"
        )


async def test_configured_roles_accept_strings() -> None:
    authz = _authorizer(_user(UserRole.PENGURUS), reviewer_roles=["PENGURUS"])
    await authz.require_reviewer("u1", EntityType.DOCUMENT, "approve")


async def test_role_override_per_entity_type() -> None:
    authz = _authorizer(
        _user(UserRole.BPH),
        role_overrides={EntityType.FINANCE: [UserRole.DPO]},
    )
    assert authz.roles_for(EntityType.FINANCE) == frozenset({UserRole.DPO})
    await authz.require_reviewer("u1", EntityType.EVENT, "approve")
    with pytest.raises(AuthorizationException):
        await authz.require_reviewer("u1", EntityType.FINANCE, "approve")
