"""ORM models for the entity kinds that go through approval.

Each table carries owner_id and status (ApprovableMixin); the remaining
columns are the minimum needed to label the entity in the approval queue.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from humanika.domain.enums import Status
from humanika.infrastructure.persistence.database import Base
from humanika.infrastructure.persistence.models.mixins import ApprovableModel

_STATUS_VALUES = ", ".join(f"'{s}'" for s in Status.values())


def _status_check(table: str) -> CheckConstraint:
    return CheckConstraint(f"status IN ({_STATUS_VALUES})", name=f"ck_{table}_status")


class WorkProgram(ApprovableModel, Base):
    """Work program (program kerja). Table: work_program."""

    __tablename__ = "work_program"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    schedule: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (_status_check("work_program"),)


class Event(ApprovableModel, Base):
    """Event (kegiatan). Table: event. owner_id is the person in charge."""

    __tablename__ = "event"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (_status_check("event"),)


class Finance(ApprovableModel, Base):
    """Finance transaction. Table: finance."""

    __tablename__ = "finance"

    name: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    transaction_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (_status_check("finance"),)


class Document(ApprovableModel, Base):
    """Document. Table: document."""

    __tablename__ = "document"

    name: Mapped[str] = mapped_column(String, nullable=False)
    file_url: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (_status_check("document"),)


class Letter(ApprovableModel, Base):
    """Letter. Table: letter. Display label is the subject."""

    __tablename__ = "letter"

    subject: Mapped[str] = mapped_column(String, nullable=False)
    letter_number: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (_status_check("letter"),)


class Article(ApprovableModel, Base):
    """Article. Table: article. Display label is the title."""

    __tablename__ = "article"

    title: Mapped[str] = mapped_column(String, nullable=False)
    slug: Mapped[str | None] = mapped_column(String, nullable=True, unique=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (_status_check("article"),)
