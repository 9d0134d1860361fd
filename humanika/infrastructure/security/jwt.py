"""JWT access tokens for HUMANIKA users.

Tokens carry the user id in ``sub`` and the role at issue time in ``role``.
Authorization always re-reads the role from the user store; the claim is
informational for clients.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from humanika.core.config import get_settings


def create_access_token(
    user_id: str,
    *,
    role: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token for user_id.

    Args:
        user_id: Subject of the token.
        role: Optional role claim.
        expires_delta: Optional TTL; else settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {"sub": user_id, "exp": datetime.now(UTC) + ttl}
    if role:
        claims["role"] = role
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Decode and verify a token; return its claims.

    Raises:
        ValueError: Token is malformed, expired, badly signed or lacks sub/exp.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload
