"""Repositories: SQLAlchemy implementations of the application ports."""

from humanika.infrastructure.persistence.repositories.activity_log_repo import (
    ActivityLogRepository,
)
from humanika.infrastructure.persistence.repositories.approval_record_repo import (
    ApprovalRecordRepository,
)
from humanika.infrastructure.persistence.repositories.base import BaseRepository
from humanika.infrastructure.persistence.repositories.entity_adapter import (
    SqlAlchemyEntityAdapter,
    build_adapter_registry,
)
from humanika.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "ActivityLogRepository",
    "ApprovalRecordRepository",
    "BaseRepository",
    "SqlAlchemyEntityAdapter",
    "UserRepository",
    "build_adapter_registry",
]
