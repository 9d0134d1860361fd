"""Transition table and decision mapping unit tests."""

import pytest

from humanika.domain.enums import ApprovalDecision, Status
from humanika.domain.exceptions import InvalidTransitionError
from humanika.domain.transitions import (
    TRANSITIONS,
    allowed_targets,
    can_transition,
    ensure_transition,
    status_for_decision,
)


def test_every_status_has_a_row() -> None:
    assert set(TRANSITIONS) == set(Status)


@pytest.mark.parametrize(
    ("source", "target"),
    [
        (Status.DRAFT, Status.PENDING),
        (Status.PENDING, Status.APPROVED),
        (Status.PENDING, Status.REJECTED),
        (Status.PENDING, Status.DRAFT),
        (Status.APPROVED, Status.ARCHIVED),
        (Status.APPROVED, Status.PENDING),
        (Status.REJECTED, Status.DRAFT),
        (Status.REJECTED, Status.PENDING),
        (Status.PUBLISH, Status.PRIVATE),
        (Status.PRIVATE, Status.ARCHIVED),
    ],
)
def test_allowed_transitions(source: Status, target: Status) -> None:
    assert can_transition(source, target)
    ensure_transition(source, target)


@pytest.mark.parametrize(
    ("source", "target"),
    [
        (Status.DRAFT, Status.APPROVED),
        (Status.DRAFT, Status.ARCHIVED),
        (Status.PENDING, Status.ARCHIVED),
        (Status.REJECTED, Status.APPROVED),
        (Status.ARCHIVED, Status.PENDING),
        (Status.ARCHIVED, Status.DRAFT),
        (Status.DRAFT, Status.DRAFT),
    ],
)
def test_disallowed_transitions_raise_with_source_and_target(
    source: Status, target: Status
) -> None:
    assert not can_transition(source, target)
    with pytest.raises(InvalidTransitionError) as exc_info:
        ensure_transition(source, target, entity_type="EVENT", entity_id="ev1")
    err = exc_info.value
    assert err.source == source.value
    assert err.target == target.value
    assert err.details["entity_id"] == "ev1"
    assert err.error_code == "INVALID_TRANSITION"


def test_archived_is_terminal() -> None:
    assert allowed_targets(Status.ARCHIVED) == frozenset()


@pytest.mark.parametrize(
    ("decision", "status"),
    [
        (ApprovalDecision.APPROVED, Status.APPROVED),
        (ApprovalDecision.REJECTED, Status.REJECTED),
        (ApprovalDecision.REVISION, Status.DRAFT),
        (ApprovalDecision.CANCELLED, Status.DRAFT),
    ],
)
def test_status_for_decision(decision: ApprovalDecision, status: Status) -> None:
    assert status_for_decision(decision) == status


def test_pending_is_not_a_resolution() -> None:
    with pytest.raises(ValueError):
        status_for_decision(ApprovalDecision.PENDING)
