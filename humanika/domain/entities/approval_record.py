"""Approval record domain entity: one reviewer decision on one entity instance."""

from dataclasses import dataclass
from datetime import datetime

from humanika.domain.enums import ApprovalDecision, EntityType
from humanika.domain.exceptions import NoteRequiredError, ValidationException


@dataclass(frozen=True)
class ApprovalRecordEntity:
    """Approval record (read-model returned by the approval record store).

    entity_id is a weak back-reference: the record never owns the entity's
    lifecycle.
    """

    id: str
    entity_type: EntityType
    entity_id: str
    submitter_id: str | None
    reviewer_id: str | None
    decision: ApprovalDecision
    note: str | None
    created_at: datetime
    updated_at: datetime
    resolved_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        """Return whether the record still awaits a decision."""
        return self.decision == ApprovalDecision.PENDING

    @staticmethod
    def validate_resolution(
        decision: ApprovalDecision,
        reviewer_id: str | None,
        note: str | None,
        *,
        allow_cancel: bool = False,
    ) -> str | None:
        """Validate a resolution request; return the normalized note.

        Args:
            decision: Target decision (APPROVED, REJECTED, REVISION; CANCELLED if allow_cancel).
            reviewer_id: User resolving the record; required.
            note: Optional note; required (non-blank) for REJECTED and REVISION.
            allow_cancel: Accept CANCELLED (owner withdrawal).

        Raises:
            ValidationException: Decision is not a resolution or reviewer missing.
            NoteRequiredError: Negative decision without a note.
        """
        allowed = set(ApprovalDecision.review_decisions())
        if allow_cancel:
            allowed.add(ApprovalDecision.CANCELLED)
        if decision not in allowed:
            raise ValidationException(
                f"Decision {decision.value} cannot resolve an approval",
                field="decision",
            )
        if not reviewer_id:
            raise ValidationException("reviewer_id is required", field="reviewer_id")
        normalized = note.strip() if note else None
        if decision.requires_note and not normalized:
            raise NoteRequiredError(decision.value)
        return normalized or None

    @staticmethod
    def validate_initial(
        decision: ApprovalDecision, reviewer_id: str | None
    ) -> ApprovalDecision:
        """Validate the decision a new record starts with.

        PENDING needs no reviewer. Any other decision stores an already
        resolved record, so its reviewer is required. Decisions that require
        a note are refused because a new record carries none.

        Raises:
            NoteRequiredError: decision is REJECTED or REVISION.
            ValidationException: Resolved decision without reviewer_id.
        """
        if decision.requires_note:
            raise NoteRequiredError(decision.value)
        if decision != ApprovalDecision.PENDING and not reviewer_id:
            raise ValidationException(
                f"reviewer_id is required for a {decision.value} record",
                field="reviewer_id",
            )
        return decision
