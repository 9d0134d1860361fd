"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the current user and the
approval workflow services. Routes depend only on these, never on
repositories directly. Write routes get a transactional session
(get_db_transactional); the engine's unit of work nests a savepoint in it.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from humanika.application.dtos.user import UserResult
from humanika.application.services import (
    ApprovalQueryService,
    ApprovalWorkflowEngine,
    RoleReviewerAuthorizer,
)
from humanika.core.config import get_settings
from humanika.domain.exceptions import AuthorizationException
from humanika.infrastructure.persistence.database import get_db, get_db_transactional
from humanika.infrastructure.persistence.repositories import (
    ActivityLogRepository,
    ApprovalRecordRepository,
    UserRepository,
    build_adapter_registry,
)
from humanika.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork
from humanika.infrastructure.security.jwt import verify_token
from humanika.infrastructure.services import ActivityLogService
from humanika.shared.context import set_request_context

_http_bearer = HTTPBearer(auto_error=False)


def get_user_repo(db: Annotated[AsyncSession, Depends(get_db)]) -> UserRepository:
    """User repository for login and token lookups (read session)."""
    return UserRepository(db)


def get_activity_log_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ActivityLogRepository:
    """Activity log repository for read routes."""
    return ActivityLogRepository(db)


def _build_engine(db: AsyncSession) -> ApprovalWorkflowEngine:
    settings = get_settings()
    return ApprovalWorkflowEngine(
        store=ApprovalRecordRepository(db),
        adapters=build_adapter_registry(db),
        unit_of_work=SqlAlchemyUnitOfWork(db),
        authorizer=RoleReviewerAuthorizer(
            UserRepository(db), reviewer_roles=settings.reviewer_roles
        ),
        activity_logger=ActivityLogService(ActivityLogRepository(db)),
    )


def get_approval_workflow(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ApprovalWorkflowEngine:
    """Workflow engine bound to a transactional session (write routes)."""
    return _build_engine(db)


def get_approval_workflow_readonly(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApprovalWorkflowEngine:
    """Workflow engine bound to a read session (history)."""
    return _build_engine(db)


def get_approval_query_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApprovalQueryService:
    """Approval queue queries (read session)."""
    return ApprovalQueryService(ApprovalRecordRepository(db))


async def get_current_user_optional(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult | None:
    """Return current user from JWT if present and active; else None.

    Sets the request context (user, client address, request id) read by the
    activity logger.
    """
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
    except ValueError:
        return None
    user = await user_repo.get_user(payload["sub"])
    if user is None or not user.is_active:
        return None
    set_request_context(
        user_id=user.id,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        request_id=getattr(request.state, "request_id", None),
    )
    return user


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user from JWT; raise 401 if missing or invalid."""
    if current_user is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


CurrentUser = Annotated[UserResult, Depends(get_current_user)]


def require_reviewer_role(resource: str, action: str):
    """Dependency factory: require JWT auth and one of the configured reviewer roles."""

    async def _require(current_user: CurrentUser) -> UserResult:
        if current_user.role.value not in get_settings().reviewer_roles:
            raise AuthorizationException(resource=resource, action=action)
        return current_user

    return _require


def get_user_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UserRepository:
    """User repository on the transactional session (login records an activity)."""
    return UserRepository(db)


def get_activity_logger_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ActivityLogService:
    """Activity logger sharing the request's transactional session."""
    return ActivityLogService(ActivityLogRepository(db))
