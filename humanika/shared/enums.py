"""Shared enumerations for HUMANIKA.

Cross-cutting enums used by application and infrastructure (e.g. activity
log). Workflow enums (Status, ApprovalDecision, EntityType) live in
humanika.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ActivityType(_ValuesMixin, str, Enum):
    """Activity log action types (who did what)."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    UPLOAD = "UPLOAD"
    DOWNLOAD = "DOWNLOAD"
    OTHER = "OTHER"
