"""Shared helpers: CUID2 ids and timezone-aware UTC timestamps.

Repositories map approval record and activity timestamps to DTOs through
ensure_utc(), so naive values read back from the database are aware UTC.
"""

from datetime import UTC, datetime

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2 primary key."""
    return str(_next_cuid())


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize a datetime read from the database to aware UTC.

    Naive values are taken to be UTC already; None passes through.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


__all__ = ["ensure_utc", "generate_cuid", "utc_now"]
