"""Approval record ORM model. One reviewer decision on one entity instance."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from humanika.domain.enums import ApprovalDecision, EntityType
from humanika.infrastructure.persistence.database import Base
from humanika.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin

_DECISION_VALUES = ", ".join(f"'{d}'" for d in ApprovalDecision.values())
_ENTITY_TYPE_VALUES = ", ".join(f"'{e}'" for e in EntityType.values())


class ApprovalRecord(CuidMixin, TimestampMixin, Base):
    """Approval record. Table: approval_record.

    (entity_type, entity_id) is a weak reference, not a foreign key: records
    outlive nothing and own nothing. At most one PENDING record per entity is
    enforced by a partial unique index.
    """

    __tablename__ = "approval_record"

    entity_type: Mapped[str] = mapped_column(String(20), nullable=False)
    entity_id: Mapped[str] = mapped_column(String, nullable=False)
    submitter_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    reviewer_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    decision: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ApprovalDecision.PENDING.value,
        server_default=ApprovalDecision.PENDING.value,
        index=True,
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    resolved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("ix_approval_record_entity", "entity_type", "entity_id", "created_at"),
        Index(
            "uq_approval_record_one_pending",
            "entity_type",
            "entity_id",
            unique=True,
            postgresql_where=text("decision = 'PENDING'"),
        ),
        CheckConstraint(
            f"decision IN ({_DECISION_VALUES})", name="ck_approval_record_decision"
        ),
        CheckConstraint(
            f"entity_type IN ({_ENTITY_TYPE_VALUES})",
            name="ck_approval_record_entity_type",
        ),
        CheckConstraint(
            "decision NOT IN ('REJECTED', 'REVISION') OR length(trim(note)) > 0",
            name="ck_approval_record_note_required",
        ),
    )
