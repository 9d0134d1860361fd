"""Auth API: email/password login returning a JWT."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from humanika.api.v1.dependencies import (
    get_activity_logger_for_write,
    get_user_repo_for_write,
)
from humanika.core.limiter import limit_auth
from humanika.infrastructure.persistence.repositories.user_repo import UserRepository
from humanika.infrastructure.security.jwt import create_access_token
from humanika.infrastructure.services import ActivityLogService
from humanika.schemas.auth import LoginRequest, TokenResponse
from humanika.shared.context import set_request_context
from humanika.shared.enums import ActivityType

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
    activity: Annotated[ActivityLogService, Depends(get_activity_logger_for_write)],
):
    """Authenticate with email and password; return a bearer token."""
    user = await user_repo.authenticate(body.email, body.password)
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    set_request_context(
        user_id=user.id,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        request_id=getattr(request.state, "request_id", None),
    )
    await activity.log(
        user_id=user.id,
        activity_type=ActivityType.LOGIN,
        entity_type="USER",
        entity_id=user.id,
        description=f"{user.name} logged in",
    )
    token = create_access_token(user.id, role=user.role.value)
    return TokenResponse(access_token=token, user_id=user.id, role=user.role)
