"""Domain exceptions for HUMANIKA.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class HumanikaException(Exception):
    """Base exception for all HUMANIKA application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API error handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(HumanikaException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(HumanikaException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(HumanikaException):
    """Raised when the user lacks required permissions for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'EVENT', 'LETTER').
            action: Optional action that was attempted (e.g. 'approve', 'archive').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(HumanikaException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'EVENT', 'approval_record').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


# ---------------------------------------------------------------------------
# Approval workflow
# ---------------------------------------------------------------------------


class InvalidTransitionError(HumanikaException):
    """Raised when a status change is not in the transition table (or the adapter forbids it)."""

    def __init__(
        self,
        source: str,
        target: str,
        entity_type: str | None = None,
        entity_id: str | None = None,
    ) -> None:
        """Initialize with the attempted source/target pair.

        Args:
            source: Current status value.
            target: Requested status value.
            entity_type: Optional entity kind for context.
            entity_id: Optional entity id for context.
        """
        details: dict[str, Any] = {"source": source, "target": target}
        if entity_type:
            details["entity_type"] = entity_type
        if entity_id:
            details["entity_id"] = entity_id
        super().__init__(
            f"Invalid status transition: {source} -> {target}",
            "INVALID_TRANSITION",
            details,
        )
        self.source = source
        self.target = target


class NotOwnerError(HumanikaException):
    """Raised when the submitter is not the entity's designated owner."""

    def __init__(self, entity_type: str, entity_id: str, user_id: str) -> None:
        super().__init__(
            f"User {user_id} is not the owner of {entity_type} {entity_id}",
            "NOT_OWNER",
            {"entity_type": entity_type, "entity_id": entity_id, "user_id": user_id},
        )


class NoPendingApprovalError(HumanikaException):
    """Raised when a review (or withdrawal) finds no pending approval record."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        super().__init__(
            f"No pending approval for {entity_type} {entity_id}",
            "NO_PENDING_APPROVAL",
            {"entity_type": entity_type, "entity_id": entity_id},
        )


class DuplicatePendingError(HumanikaException):
    """Raised when a pending approval record already exists for the entity."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        super().__init__(
            f"{entity_type} {entity_id} already has a pending approval",
            "DUPLICATE_PENDING",
            {"entity_type": entity_type, "entity_id": entity_id},
        )


class AlreadyResolvedError(HumanikaException):
    """Raised when resolving an approval record whose decision is no longer PENDING."""

    def __init__(self, record_id: str, decision: str | None = None) -> None:
        details: dict[str, Any] = {"record_id": record_id}
        if decision:
            details["decision"] = decision
        super().__init__(
            f"Approval record {record_id} is already resolved",
            "ALREADY_RESOLVED",
            details,
        )


class NoteRequiredError(HumanikaException):
    """Raised when a REJECTED or REVISION decision carries no note."""

    def __init__(self, decision: str) -> None:
        super().__init__(
            f"A note is required for decision {decision}",
            "NOTE_REQUIRED",
            {"decision": decision, "field": "note"},
        )
