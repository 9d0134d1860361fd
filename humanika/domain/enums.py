"""Domain enumerations for the approval workflow.

Enums represent fixed sets of domain values: entity lifecycle status,
reviewer decisions, approvable entity kinds and organization roles.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for validation or CHECK constraints)."""
        return [member.value for member in cls]


class Status(_ValuesMixin, str, Enum):
    """Lifecycle status of an approvable entity.

    PUBLISH and PRIVATE are only reachable for publishable kinds
    (letters, articles).
    """

    DRAFT = "DRAFT"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    ARCHIVED = "ARCHIVED"
    PUBLISH = "PUBLISH"
    PRIVATE = "PRIVATE"


class ApprovalDecision(_ValuesMixin, str, Enum):
    """Decision held by an approval record. PENDING until resolved."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    REVISION = "REVISION"
    CANCELLED = "CANCELLED"

    @property
    def requires_note(self) -> bool:
        """Negative decisions must carry a justification."""
        return self in (ApprovalDecision.REJECTED, ApprovalDecision.REVISION)

    @classmethod
    def review_decisions(cls) -> frozenset["ApprovalDecision"]:
        """Decisions a reviewer may hand down."""
        return frozenset({cls.APPROVED, cls.REJECTED, cls.REVISION})


class EntityType(_ValuesMixin, str, Enum):
    """Kinds of entity gated by the approval workflow."""

    WORK_PROGRAM = "WORK_PROGRAM"
    EVENT = "EVENT"
    FINANCE = "FINANCE"
    DOCUMENT = "DOCUMENT"
    LETTER = "LETTER"
    ARTICLE = "ARTICLE"


class UserRole(_ValuesMixin, str, Enum):
    """Organization roles (DPO: supervisory board, BPH: executive board)."""

    DPO = "DPO"
    BPH = "BPH"
    PENGURUS = "PENGURUS"
    ANGGOTA = "ANGGOTA"
