"""User ORM model for authentication and reviewer roles."""

from sqlalchemy import Boolean, CheckConstraint, String, text
from sqlalchemy.orm import Mapped, mapped_column

from humanika.domain.enums import UserRole
from humanika.infrastructure.persistence.database import Base
from humanika.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin

_ROLE_VALUES = ", ".join(f"'{r}'" for r in UserRole.values())


class User(CuidMixin, TimestampMixin, Base):
    """User model. Table: app_user. Email is unique."""

    __tablename__ = "app_user"

    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.ANGGOTA.value
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )

    __table_args__ = (
        CheckConstraint(f"role IN ({_ROLE_VALUES})", name="ck_app_user_role"),
    )
