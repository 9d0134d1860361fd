"""ApprovalRecordEntity resolution validation."""

from datetime import datetime, timezone

import pytest

from humanika.domain.entities import ApprovalRecordEntity
from humanika.domain.enums import ApprovalDecision, EntityType
from humanika.domain.exceptions import NoteRequiredError, ValidationException


def _record(decision: ApprovalDecision) -> ApprovalRecordEntity:
    now = datetime(2025, 1, 15, tzinfo=timezone.utc)
    return ApprovalRecordEntity(
        id="r1",
        entity_type=EntityType.EVENT,
        entity_id="ev1",
        submitter_id="u1",
        reviewer_id=None,
        decision=decision,
        note=None,
        created_at=now,
        updated_at=now,
    )


def test_is_pending() -> None:
    assert _record(ApprovalDecision.PENDING).is_pending
    assert not _record(ApprovalDecision.APPROVED).is_pending


def test_approved_without_note_is_valid() -> None:
    assert ApprovalRecordEntity.validate_resolution(
        ApprovalDecision.APPROVED, "rev", None
    ) is None


@pytest.mark.parametrize("decision", [ApprovalDecision.REJECTED, ApprovalDecision.REVISION])
@pytest.mark.parametrize("note", [None, "", "   "])
def test_negative_decision_requires_note(decision: ApprovalDecision, note: str | None) -> None:
    with pytest.raises(NoteRequiredError):
        ApprovalRecordEntity.validate_resolution(decision, "rev", note)


def test_note_is_stripped() -> None:
    assert (
        ApprovalRecordEntity.validate_resolution(
            ApprovalDecision.REJECTED, "rev", "  budget missing  "
        )
        == "budget missing"
    )


def test_pending_and_cancelled_are_not_review_decisions() -> None:
    with pytest.raises(ValidationException):
        ApprovalRecordEntity.validate_resolution(ApprovalDecision.PENDING, "rev", None)
    with pytest.raises(ValidationException):
        ApprovalRecordEntity.validate_resolution(ApprovalDecision.CANCELLED, "rev", None)
    assert (
        ApprovalRecordEntity.validate_resolution(
            ApprovalDecision.CANCELLED, "owner", None, allow_cancel=True
        )
        is None
    )


def test_reviewer_is_required() -> None:
    with pytest.raises(ValidationException) as exc_info:
        ApprovalRecordEntity.validate_resolution(ApprovalDecision.APPROVED, "", None)
    assert exc_info.value.details == {"field": "reviewer_id"}


def test_initial_pending_needs_no_reviewer() -> None:
    assert (
        ApprovalRecordEntity.validate_initial(ApprovalDecision.PENDING, None)
        == ApprovalDecision.PENDING
    )


@pytest.mark.parametrize(
    "decision", [ApprovalDecision.APPROVED, ApprovalDecision.CANCELLED]
)
def test_initial_resolved_decision_requires_reviewer(decision: ApprovalDecision) -> None:
    with pytest.raises(ValidationException) as exc_info:
        ApprovalRecordEntity.validate_initial(decision, None)
    assert exc_info.value.details == {"field": "reviewer_id"}
    assert ApprovalRecordEntity.validate_initial(decision, "u-dpo") == decision


def test_initial_decision_needing_a_note_is_refused() -> None:
    with pytest.raises(NoteRequiredError):
        ApprovalRecordEntity.validate_initial(ApprovalDecision.REJECTED, "u-dpo")
