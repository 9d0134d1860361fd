"""ApprovalWorkflowEngine unit tests with in-memory store, adapters and unit of work."""

import asyncio

import pytest

from fakes import MEMBER, OWNER, REVIEWER, WorkflowHarness
from humanika.application.dtos.approval import BulkReviewItem
from humanika.domain.enums import ApprovalDecision, EntityType, Status
from humanika.domain.exceptions import (
    AuthorizationException,
    DuplicatePendingError,
    InvalidTransitionError,
    NoPendingApprovalError,
    NoteRequiredError,
    NotOwnerError,
    ResourceNotFoundException,
    ValidationException,
)
from humanika.shared.enums import ActivityType

EVENT = EntityType.EVENT


def _add(h: WorkflowHarness, entity_id: str = "ev1", *, kind: EntityType = EVENT, **kw) -> None:
    h.adapters[kind].add(entity_id, **kw)


# ---------------------------------------------------------------------------
# submit
# ---------------------------------------------------------------------------


async def test_submit_moves_draft_to_pending_and_creates_one_record(harness) -> None:
    _add(harness)
    outcome = await harness.engine.submit(EVENT, "ev1", OWNER)

    assert outcome.entity_status == Status.PENDING
    assert outcome.approval_record is not None
    assert outcome.approval_record.decision == ApprovalDecision.PENDING
    assert outcome.approval_record.submitter_id == OWNER
    assert harness.adapters[EVENT].status_of("ev1") == Status.PENDING
    assert len(harness.store.pending_for(EVENT, "ev1")) == 1


async def test_submit_accepts_entity_type_string(harness) -> None:
    _add(harness, "wp1", kind=EntityType.WORK_PROGRAM)
    outcome = await harness.engine.submit("work-program", "wp1", OWNER)
    assert outcome.entity_type == EntityType.WORK_PROGRAM


async def test_submit_from_rejected_is_allowed(harness) -> None:
    _add(harness, status=Status.REJECTED)
    outcome = await harness.engine.submit(EVENT, "ev1", OWNER)
    assert outcome.entity_status == Status.PENDING


async def test_submit_by_non_owner_fails_without_writes(harness) -> None:
    _add(harness)
    with pytest.raises(NotOwnerError):
        await harness.engine.submit(EVENT, "ev1", "someone-else")
    assert harness.store.records == []
    assert harness.adapters[EVENT].status_of("ev1") == Status.DRAFT


async def test_submit_entity_without_owner_fails(harness) -> None:
    _add(harness, owner_id=None)
    with pytest.raises(NotOwnerError):
        await harness.engine.submit(EVENT, "ev1", OWNER)


async def test_submit_unknown_entity(harness) -> None:
    with pytest.raises(ResourceNotFoundException):
        await harness.engine.submit(EVENT, "missing", OWNER)


async def test_submit_unknown_entity_type(harness) -> None:
    with pytest.raises(ValidationException):
        await harness.engine.submit("PROPOSAL", "x", OWNER)


@pytest.mark.parametrize("status", [Status.APPROVED, Status.ARCHIVED])
async def test_submit_approved_or_archived_fails(harness, status: Status) -> None:
    _add(harness, status=status)
    with pytest.raises(InvalidTransitionError) as exc_info:
        await harness.engine.submit(EVENT, "ev1", OWNER)
    assert exc_info.value.source == status.value
    assert exc_info.value.target == Status.PENDING.value
    assert harness.store.records == []


async def test_resubmission_from_approved_when_adapter_allows(harness) -> None:
    _add(harness, "l1", kind=EntityType.LETTER, status=Status.APPROVED)
    outcome = await harness.engine.submit(EntityType.LETTER, "l1", OWNER)
    assert outcome.entity_status == Status.PENDING


async def test_second_submit_fails_with_duplicate_pending(harness) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    with pytest.raises(DuplicatePendingError):
        await harness.engine.submit(EVENT, "ev1", OWNER)
    assert len(harness.store.pending_for(EVENT, "ev1")) == 1
    assert harness.adapters[EVENT].status_of("ev1") == Status.PENDING


async def test_concurrent_submits_one_wins(harness) -> None:
    _add(harness)
    results = await asyncio.gather(
        harness.engine.submit(EVENT, "ev1", OWNER),
        harness.engine.submit(EVENT, "ev1", OWNER),
        return_exceptions=True,
    )
    errors = [r for r in results if isinstance(r, Exception)]
    assert len(errors) == 1
    assert isinstance(errors[0], DuplicatePendingError)
    assert len(harness.store.pending_for(EVENT, "ev1")) == 1
    assert harness.adapters[EVENT].status_of("ev1") == Status.PENDING


async def test_failed_status_write_rolls_back_record(harness) -> None:
    _add(harness)
    harness.adapters[EVENT].fail_on_set_status = True
    with pytest.raises(RuntimeError):
        await harness.engine.submit(EVENT, "ev1", OWNER)
    assert harness.store.records == []
    assert harness.adapters[EVENT].status_of("ev1") == Status.DRAFT
    assert harness.uow.rollbacks == 1

    harness.adapters[EVENT].fail_on_set_status = False
    outcome = await harness.engine.submit(EVENT, "ev1", OWNER)
    assert outcome.entity_status == Status.PENDING
    assert len(harness.store.records) == 1


# ---------------------------------------------------------------------------
# review
# ---------------------------------------------------------------------------


async def test_review_approved_without_note(harness) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    outcome = await harness.engine.review(EVENT, "ev1", REVIEWER, ApprovalDecision.APPROVED)

    assert outcome.entity_status == Status.APPROVED
    assert harness.adapters[EVENT].status_of("ev1") == Status.APPROVED
    history = await harness.engine.history(EVENT, "ev1")
    assert len(history) == 1
    assert history[0].decision == ApprovalDecision.APPROVED
    assert history[0].reviewer_id == REVIEWER
    assert history[0].resolved_at is not None
    assert harness.authorizer.calls == [(REVIEWER, EVENT, "approve")]


async def test_review_rejected_without_note_mutates_nothing(harness) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    with pytest.raises(NoteRequiredError):
        await harness.engine.review(EVENT, "ev1", REVIEWER, ApprovalDecision.REJECTED, "  ")
    assert harness.adapters[EVENT].status_of("ev1") == Status.PENDING
    assert len(harness.store.pending_for(EVENT, "ev1")) == 1


async def test_review_rejected_with_note(harness) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    outcome = await harness.engine.review(
        EVENT, "ev1", REVIEWER, "rejected", "Budget is missing"
    )
    assert outcome.entity_status == Status.REJECTED
    assert outcome.approval_record.note == "Budget is missing"


async def test_review_revision_returns_entity_to_draft(harness) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    outcome = await harness.engine.review(
        EVENT, "ev1", REVIEWER, ApprovalDecision.REVISION, "Fix the schedule"
    )
    assert outcome.entity_status == Status.DRAFT
    assert outcome.approval_record.decision == ApprovalDecision.REVISION
    # The owner can resubmit after revising.
    again = await harness.engine.submit(EVENT, "ev1", OWNER)
    assert again.entity_status == Status.PENDING


async def test_review_without_pending_record(harness) -> None:
    _add(harness)
    with pytest.raises(NoPendingApprovalError):
        await harness.engine.review(EVENT, "ev1", REVIEWER, ApprovalDecision.APPROVED)


async def test_review_twice_fails_second_time(harness) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    await harness.engine.review(EVENT, "ev1", REVIEWER, ApprovalDecision.APPROVED)
    with pytest.raises(NoPendingApprovalError):
        await harness.engine.review(EVENT, "ev1", REVIEWER, ApprovalDecision.APPROVED)
    assert harness.adapters[EVENT].status_of("ev1") == Status.APPROVED


async def test_review_by_non_reviewer_is_denied(harness) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    with pytest.raises(AuthorizationException):
        await harness.engine.review(EVENT, "ev1", MEMBER, ApprovalDecision.APPROVED)
    assert harness.adapters[EVENT].status_of("ev1") == Status.PENDING
    assert len(harness.store.pending_for(EVENT, "ev1")) == 1


@pytest.mark.parametrize("decision", ["PENDING", "CANCELLED", "MAYBE"])
async def test_review_rejects_non_review_decisions(harness, decision: str) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    with pytest.raises(ValidationException):
        await harness.engine.review(EVENT, "ev1", REVIEWER, decision)


async def test_failed_review_status_write_keeps_record_pending(harness) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    harness.adapters[EVENT].fail_on_set_status = True
    with pytest.raises(RuntimeError):
        await harness.engine.review(EVENT, "ev1", REVIEWER, ApprovalDecision.APPROVED)
    assert len(harness.store.pending_for(EVENT, "ev1")) == 1
    assert harness.adapters[EVENT].status_of("ev1") == Status.PENDING


# ---------------------------------------------------------------------------
# archive / withdraw / publish
# ---------------------------------------------------------------------------


async def test_archive_pending_fails(harness) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    with pytest.raises(InvalidTransitionError):
        await harness.engine.archive(EVENT, "ev1", REVIEWER)
    assert harness.adapters[EVENT].status_of("ev1") == Status.PENDING


async def test_archive_approved(harness) -> None:
    _add(harness, status=Status.APPROVED)
    outcome = await harness.engine.archive(EVENT, "ev1", REVIEWER)
    assert outcome.entity_status == Status.ARCHIVED
    assert outcome.approval_record is None
    assert harness.authorizer.calls == [(REVIEWER, EVENT, "archive")]


async def test_archive_requires_reviewer(harness) -> None:
    _add(harness, status=Status.APPROVED)
    with pytest.raises(AuthorizationException):
        await harness.engine.archive(EVENT, "ev1", OWNER)
    assert harness.adapters[EVENT].status_of("ev1") == Status.APPROVED


async def test_withdraw_returns_to_draft_and_cancels_record(harness) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    outcome = await harness.engine.withdraw(EVENT, "ev1", OWNER)

    assert outcome.entity_status == Status.DRAFT
    assert outcome.approval_record.decision == ApprovalDecision.CANCELLED
    assert outcome.approval_record.reviewer_id == OWNER
    assert harness.store.pending_for(EVENT, "ev1") == []


async def test_withdraw_by_non_owner(harness) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    with pytest.raises(NotOwnerError):
        await harness.engine.withdraw(EVENT, "ev1", REVIEWER)


async def test_withdraw_without_pending(harness) -> None:
    _add(harness)
    with pytest.raises(NoPendingApprovalError):
        await harness.engine.withdraw(EVENT, "ev1", OWNER)


async def test_publish_and_hide_letter(harness) -> None:
    _add(harness, "l1", kind=EntityType.LETTER, status=Status.APPROVED)
    published = await harness.engine.publish(EntityType.LETTER, "l1", REVIEWER)
    assert published.entity_status == Status.PUBLISH
    hidden = await harness.engine.publish(EntityType.LETTER, "l1", REVIEWER, "private")
    assert hidden.entity_status == Status.PRIVATE
    archived = await harness.engine.archive(EntityType.LETTER, "l1", REVIEWER)
    assert archived.entity_status == Status.ARCHIVED


async def test_publish_non_publishable_kind_fails(harness) -> None:
    _add(harness, status=Status.APPROVED)
    with pytest.raises(InvalidTransitionError):
        await harness.engine.publish(EVENT, "ev1", REVIEWER)


async def test_publish_requires_approved_status(harness) -> None:
    _add(harness, "a1", kind=EntityType.ARTICLE, status=Status.DRAFT)
    with pytest.raises(InvalidTransitionError):
        await harness.engine.publish(EntityType.ARTICLE, "a1", REVIEWER)


async def test_publish_invalid_visibility(harness) -> None:
    _add(harness, "a1", kind=EntityType.ARTICLE, status=Status.APPROVED)
    with pytest.raises(ValidationException):
        await harness.engine.publish(EntityType.ARTICLE, "a1", REVIEWER, Status.ARCHIVED)


# ---------------------------------------------------------------------------
# scenarios, bulk, activity
# ---------------------------------------------------------------------------


async def test_full_lifecycle_ends_in_terminal_archive(harness) -> None:
    _add(harness)
    engine = harness.engine

    submitted = await engine.submit(EVENT, "ev1", OWNER)
    assert submitted.entity_status == Status.PENDING
    assert len(harness.store.pending_for(EVENT, "ev1")) == 1

    reviewed = await engine.review(EVENT, "ev1", REVIEWER, ApprovalDecision.APPROVED)
    assert reviewed.entity_status == Status.APPROVED
    assert harness.store.pending_for(EVENT, "ev1") == []

    archived = await engine.archive(EVENT, "ev1", REVIEWER)
    assert archived.entity_status == Status.ARCHIVED

    with pytest.raises(InvalidTransitionError):
        await engine.submit(EVENT, "ev1", OWNER)
    assert harness.adapters[EVENT].status_of("ev1") == Status.ARCHIVED


async def test_review_many_reports_per_item(harness) -> None:
    _add(harness, "ev1")
    _add(harness, "ev2")
    _add(harness, "ev3")
    await harness.engine.submit(EVENT, "ev1", OWNER)
    await harness.engine.submit(EVENT, "ev3", OWNER)

    result = await harness.engine.review_many(
        [
            BulkReviewItem(EVENT, "ev1"),
            BulkReviewItem(EVENT, "ev2"),
            BulkReviewItem(EVENT, "ev3"),
        ],
        REVIEWER,
        ApprovalDecision.APPROVED,
    )

    assert result.succeeded == 2
    assert result.failed == 1
    failed = next(r for r in result.results if not r.ok)
    assert failed.entity_id == "ev2"
    assert failed.error_code == "NO_PENDING_APPROVAL"
    assert harness.adapters[EVENT].status_of("ev1") == Status.APPROVED
    assert harness.adapters[EVENT].status_of("ev3") == Status.APPROVED


async def test_review_many_with_missing_note_fails_every_item(harness) -> None:
    _add(harness)
    await harness.engine.submit(EVENT, "ev1", OWNER)
    result = await harness.engine.review_many(
        [BulkReviewItem(EVENT, "ev1")], REVIEWER, ApprovalDecision.REVISION
    )
    assert result.failed == 1
    assert result.results[0].error_code == "NOTE_REQUIRED"
    assert harness.adapters[EVENT].status_of("ev1") == Status.PENDING


async def test_activity_entries_per_operation(harness) -> None:
    _add(harness, name="Bakti Sosial")
    await harness.engine.submit(EVENT, "ev1", OWNER)
    await harness.engine.review(EVENT, "ev1", REVIEWER, ApprovalDecision.APPROVED)

    types = [e["activity_type"] for e in harness.activity.entries]
    assert types == [ActivityType.UPDATE, ActivityType.APPROVE]
    assert "Bakti Sosial" in harness.activity.entries[0]["description"]
    assert harness.activity.entries[1]["metadata"]["newData"]["status"] == "APPROVED"


async def test_failed_operation_leaves_no_activity(harness) -> None:
    _add(harness)
    harness.adapters[EVENT].fail_on_set_status = True
    with pytest.raises(RuntimeError):
        await harness.engine.submit(EVENT, "ev1", OWNER)
    assert harness.activity.entries == []


async def test_history_of_unknown_entity(harness) -> None:
    with pytest.raises(ResourceNotFoundException):
        await harness.engine.history(EVENT, "missing")


async def test_imported_resolved_record_needs_reviewer_and_leaves_submit_open(harness) -> None:
    _add(harness)
    with pytest.raises(ValidationException):
        await harness.store.create(
            EVENT, "ev1", OWNER, initial_decision=ApprovalDecision.APPROVED
        )
    imported = await harness.store.create(
        EVENT, "ev1", OWNER, initial_decision=ApprovalDecision.APPROVED, reviewer_id=REVIEWER
    )
    assert imported.reviewer_id == REVIEWER
    assert imported.resolved_at is not None

    await harness.engine.submit(EVENT, "ev1", OWNER)
    history = await harness.engine.history(EVENT, "ev1")
    assert [r.decision for r in history] == [
        ApprovalDecision.APPROVED,
        ApprovalDecision.PENDING,
    ]
