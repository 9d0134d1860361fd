"""Request context management using contextvars.

Provides async-safe storage for request-scoped data such as the current
user, client address and request id. The activity logger reads these so
callers do not have to thread request metadata through the workflow engine.

Usage:
    set_request_context(user_id="user123", ip_address="10.0.0.1")
    ctx = get_request_context()
"""

from contextvars import ContextVar
from dataclasses import dataclass

_current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)
_current_ip_address: ContextVar[str | None] = ContextVar(
    "current_ip_address", default=None
)
_current_user_agent: ContextVar[str | None] = ContextVar(
    "current_user_agent", default=None
)
_current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the current request context."""

    user_id: str | None
    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None


def set_request_context(
    user_id: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
    request_id: str | None = None,
) -> None:
    """Set the request context for the current task.

    Call in dependency injection after authentication.

    Args:
        user_id: Authenticated user ID or None.
        ip_address: Optional client IP.
        user_agent: Optional client user agent.
        request_id: Optional request id (from RequestIDMiddleware).
    """
    _current_user_id.set(user_id)
    _current_ip_address.set(ip_address)
    _current_user_agent.set(user_agent)
    _current_request_id.set(request_id)


def clear_request_context() -> None:
    """Clear the request context."""
    set_request_context()


def get_request_context() -> RequestContext:
    """Return a snapshot of the current request context."""
    return RequestContext(
        user_id=_current_user_id.get(),
        ip_address=_current_ip_address.get(),
        user_agent=_current_user_agent.get(),
        request_id=_current_request_id.get(),
    )
