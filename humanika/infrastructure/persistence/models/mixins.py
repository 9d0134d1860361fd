"""SQLAlchemy mixins for common model patterns: CuidMixin, TimestampMixin, ApprovableMixin."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from humanika.domain.enums import Status
from humanika.shared.utils import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class ApprovableMixin:
    """Columns shared by every entity that goes through approval: owner and status.

    owner_id is the responsible user (event PIC, finance/document/letter/article
    creator). Status is written only through the approval workflow.
    """

    @declared_attr
    def owner_id(cls) -> Mapped[str | None]:
        return mapped_column(
            String,
            ForeignKey("app_user.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        )

    @declared_attr
    def status(cls) -> Mapped[str]:
        return mapped_column(
            String(20),
            nullable=False,
            default=Status.DRAFT.value,
            server_default=Status.DRAFT.value,
            index=True,
        )


class ApprovableModel(CuidMixin, TimestampMixin, ApprovableMixin):
    """Combined mixin: CUID + timestamps + owner/status. Common for approvable entities."""

    __abstract__ = True
