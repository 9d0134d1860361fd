"""Auth API schemas."""

from pydantic import BaseModel, EmailStr, Field

from humanika.domain.enums import UserRole


class LoginRequest(BaseModel):
    """Request body for login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    user_id: str
    role: UserRole
