"""Application services: approval workflow engine, queries, adapters registry, reviewer authorization."""

from humanika.application.services.adapter_registry import (
    AdapterRegistry,
    parse_entity_type,
)
from humanika.application.services.approval_queries import ApprovalQueryService
from humanika.application.services.approval_workflow import ApprovalWorkflowEngine
from humanika.application.services.reviewer_authorization import (
    DEFAULT_REVIEWER_ROLES,
    RoleReviewerAuthorizer,
)

__all__ = [
    "AdapterRegistry",
    "ApprovalQueryService",
    "ApprovalWorkflowEngine",
    "DEFAULT_REVIEWER_ROLES",
    "RoleReviewerAuthorizer",
    "parse_entity_type",
]
