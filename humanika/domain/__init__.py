"""Domain layer: entities, enums, transition table and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from humanika.domain.entities import ApprovalRecordEntity
from humanika.domain.enums import ApprovalDecision, EntityType, Status, UserRole
from humanika.domain.exceptions import (
    AlreadyResolvedError,
    AuthenticationException,
    AuthorizationException,
    DuplicatePendingError,
    HumanikaException,
    InvalidTransitionError,
    NoPendingApprovalError,
    NoteRequiredError,
    NotOwnerError,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    # Entities
    "ApprovalRecordEntity",
    # Enums
    "ApprovalDecision",
    "EntityType",
    "Status",
    "UserRole",
    # Exceptions
    "AlreadyResolvedError",
    "AuthenticationException",
    "AuthorizationException",
    "DuplicatePendingError",
    "HumanikaException",
    "InvalidTransitionError",
    "NoPendingApprovalError",
    "NoteRequiredError",
    "NotOwnerError",
    "ResourceNotFoundException",
    "ValidationException",
]
