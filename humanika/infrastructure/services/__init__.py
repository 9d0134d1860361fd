"""Infrastructure services: activity logging."""

from humanika.infrastructure.services.activity_log_service import ActivityLogService

__all__ = ["ActivityLogService"]
