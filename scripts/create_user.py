"""Create a user with a role (bootstrap reviewers and owners).

Usage:
    python -m scripts.create_user <email> <name> <role> [password]
role is one of DPO, BPH, PENGURUS, ANGGOTA. If password is omitted, a random
one is printed.
"""

import asyncio
import secrets
import sys

from humanika.domain.enums import UserRole
from humanika.infrastructure.persistence.database import _ensure_engine, dispose_engine
from humanika.infrastructure.persistence.repositories import UserRepository


async def main() -> None:
    """Create the user in one transaction."""
    if len(sys.argv) < 4:
        print(
            "Usage: python -m scripts.create_user <email> <name> <role> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    email, name, role_arg = sys.argv[1], sys.argv[2], sys.argv[3].upper()
    if role_arg not in UserRole.values():
        print(f"Unknown role {role_arg}; expected one of {', '.join(UserRole.values())}", file=sys.stderr)
        sys.exit(1)
    password = sys.argv[4] if len(sys.argv) > 4 else secrets.token_urlsafe(12)

    session_factory = _ensure_engine()
    try:
        async with session_factory() as session:
            async with session.begin():
                user = await UserRepository(session).create_user(
                    name=name, email=email, password=password, role=UserRole(role_arg)
                )
        print(f"Created user: {user.id} ({user.email}) role {user.role.value}")
        if len(sys.argv) <= 4:
            print(f"Password: {password}")
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
