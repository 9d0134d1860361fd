"""Persistence models: ORM entities and mixins."""

from humanika.infrastructure.persistence.models.activity_log import ActivityLog
from humanika.infrastructure.persistence.models.approvable import (
    Article,
    Document,
    Event,
    Finance,
    Letter,
    WorkProgram,
)
from humanika.infrastructure.persistence.models.approval_record import ApprovalRecord
from humanika.infrastructure.persistence.models.mixins import (
    ApprovableMixin,
    ApprovableModel,
    CuidMixin,
    TimestampMixin,
)
from humanika.infrastructure.persistence.models.user import User

__all__ = [
    "ActivityLog",
    "ApprovalRecord",
    "ApprovableMixin",
    "ApprovableModel",
    "Article",
    "CuidMixin",
    "Document",
    "Event",
    "Finance",
    "Letter",
    "TimestampMixin",
    "User",
    "WorkProgram",
]
