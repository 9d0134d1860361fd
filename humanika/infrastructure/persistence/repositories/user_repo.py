"""User repository. Interface methods return application DTOs (no password)."""

from __future__ import annotations

import asyncio

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from humanika.application.dtos.user import UserResult
from humanika.domain.enums import UserRole
from humanika.infrastructure.persistence.models.user import User
from humanika.infrastructure.persistence.repositories.base import BaseRepository
from humanika.infrastructure.security.password import hash_password, verify_password

# Hash compared against when the email is unknown so lookups take the same time.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(hash_password, "not-a-real-password")
    return _dummy_hash_cache


def _user_to_result(u: User) -> UserResult:
    return UserResult(
        id=u.id,
        name=u.name,
        email=u.email,
        role=UserRole(u.role),
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """User lookups for login and reviewer authorization."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_user(self, user_id: str) -> UserResult | None:
        user = await self.get_by_id(user_id)
        return _user_to_result(user) if user else None

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        """Return the user when credentials match and the account is active."""
        user = await self.get_by_email(email)
        if user is None:
            await asyncio.to_thread(verify_password, password, await _get_dummy_hash())
            return None
        if not user.is_active:
            return None
        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            return None
        return _user_to_result(user)

    async def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.ANGGOTA,
    ) -> UserResult:
        user = User(
            name=name,
            email=email.strip().lower(),
            hashed_password=await asyncio.to_thread(hash_password, password),
            role=role.value,
        )
        created = await self.create(user)
        return _user_to_result(created)
