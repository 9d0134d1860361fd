"""Status transition table: the only legal status changes, independent of entity kind.

Entity adapters may narrow this table (e.g. no re-submission from APPROVED,
no PUBLISH/PRIVATE for non-publishable kinds) but never widen it.
"""

from collections.abc import Mapping

from humanika.domain.enums import ApprovalDecision, Status
from humanika.domain.exceptions import InvalidTransitionError

TRANSITIONS: Mapping[Status, frozenset[Status]] = {
    Status.DRAFT: frozenset({Status.PENDING}),
    # DRAFT here is reached by a REVISION decision or a withdrawal.
    Status.PENDING: frozenset({Status.APPROVED, Status.REJECTED, Status.DRAFT}),
    Status.APPROVED: frozenset(
        {Status.ARCHIVED, Status.PENDING, Status.PUBLISH, Status.PRIVATE}
    ),
    Status.REJECTED: frozenset({Status.DRAFT, Status.PENDING}),
    Status.PUBLISH: frozenset({Status.PRIVATE, Status.ARCHIVED}),
    Status.PRIVATE: frozenset({Status.PUBLISH, Status.ARCHIVED}),
    Status.ARCHIVED: frozenset(),
}

# Statuses that only publishable entity kinds may enter.
PUBLICATION_STATUSES: frozenset[Status] = frozenset({Status.PUBLISH, Status.PRIVATE})

DECISION_TO_STATUS: Mapping[ApprovalDecision, Status] = {
    ApprovalDecision.APPROVED: Status.APPROVED,
    ApprovalDecision.REJECTED: Status.REJECTED,
    ApprovalDecision.REVISION: Status.DRAFT,
    ApprovalDecision.CANCELLED: Status.DRAFT,
}


def allowed_targets(source: Status) -> frozenset[Status]:
    """Return the statuses reachable from source in one step."""
    return TRANSITIONS.get(source, frozenset())


def can_transition(source: Status, target: Status) -> bool:
    """Return True if source -> target is in the transition table."""
    return target in allowed_targets(source)


def ensure_transition(
    source: Status,
    target: Status,
    *,
    entity_type: str | None = None,
    entity_id: str | None = None,
) -> None:
    """Raise InvalidTransitionError unless source -> target is in the table."""
    if not can_transition(source, target):
        raise InvalidTransitionError(
            source.value,
            target.value,
            entity_type=entity_type,
            entity_id=entity_id,
        )


def status_for_decision(decision: ApprovalDecision) -> Status:
    """Map a resolved decision to the entity status it produces.

    Raises:
        ValueError: For PENDING, which is not a resolution.
    """
    try:
        return DECISION_TO_STATUS[decision]
    except KeyError:
        raise ValueError(f"Decision {decision.value} does not resolve an approval") from None
