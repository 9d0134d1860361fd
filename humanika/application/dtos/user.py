"""DTOs for users (no dependency on ORM)."""

from dataclasses import dataclass

from humanika.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, authenticate). No password."""

    id: str
    name: str
    email: str
    role: UserRole
    is_active: bool
