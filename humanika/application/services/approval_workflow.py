"""Approval workflow engine: the only component that changes an approvable entity's status.

Each operation consults the transition table, writes the approval record
store and the entity adapter, and appends an activity entry inside one unit
of work. If any step raises, every write of that operation is rolled back.
Operations re-read the current status before acting, so retrying after a
failed transaction has no extra effect; retrying after a successful one
fails with a typed error instead of duplicating work.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from humanika.application.dtos.approval import (
    BulkReviewItem,
    BulkReviewItemResult,
    BulkReviewResult,
    WorkflowOutcome,
)
from humanika.application.services.adapter_registry import parse_entity_type
from humanika.domain.entities import ApprovalRecordEntity
from humanika.domain.enums import ApprovalDecision, EntityType, Status
from humanika.domain.exceptions import (
    DuplicatePendingError,
    HumanikaException,
    InvalidTransitionError,
    NoPendingApprovalError,
    NotOwnerError,
    ValidationException,
)
from humanika.domain.transitions import (
    PUBLICATION_STATUSES,
    ensure_transition,
    status_for_decision,
)
from humanika.shared.enums import ActivityType
from humanika.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from humanika.application.interfaces.repositories import (
        IApprovalRecordStore,
        IEntityAdapter,
    )
    from humanika.application.interfaces.services import (
        IActivityLogger,
        IReviewerAuthorizer,
        IUnitOfWork,
    )
    from humanika.application.services.adapter_registry import AdapterRegistry

logger = get_logger(__name__)

_DECISION_ACTIVITY: dict[ApprovalDecision, ActivityType] = {
    ApprovalDecision.APPROVED: ActivityType.APPROVE,
    ApprovalDecision.REJECTED: ActivityType.REJECT,
}


def _parse_decision(value: ApprovalDecision | str) -> ApprovalDecision:
    if isinstance(value, ApprovalDecision):
        return value
    try:
        return ApprovalDecision(value.strip().upper())
    except ValueError:
        raise ValidationException(
            f"Unknown decision {value!r}", field="decision"
        ) from None


class ApprovalWorkflowEngine:
    """Submit, review, withdraw, archive and publish approvable entities."""

    def __init__(
        self,
        store: IApprovalRecordStore,
        adapters: AdapterRegistry,
        unit_of_work: IUnitOfWork,
        authorizer: IReviewerAuthorizer,
        activity_logger: IActivityLogger | None = None,
    ) -> None:
        self._store = store
        self._adapters = adapters
        self._uow = unit_of_work
        self._authorizer = authorizer
        self._activity = activity_logger

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def submit(
        self,
        entity_type: EntityType | str,
        entity_id: str,
        submitter_id: str,
    ) -> WorkflowOutcome:
        """Submit an entity for review (DRAFT/REJECTED, or APPROVED when re-submission is allowed).

        Raises:
            ResourceNotFoundException: Entity does not exist.
            NotOwnerError: submitter_id is not the entity's owner.
            DuplicatePendingError: A pending approval already exists.
            InvalidTransitionError: Current status does not allow submission.
        """
        etype = parse_entity_type(entity_type)
        adapter = self._adapters.get(etype)
        async with self._uow.transaction():
            current = await adapter.get_current_status(entity_id, lock=True)
            owner_id = await adapter.get_owner_id(entity_id)
            if owner_id is None or owner_id != submitter_id:
                raise NotOwnerError(etype.value, entity_id, submitter_id)
            if await self._store.find_pending(etype, entity_id) is not None:
                raise DuplicatePendingError(etype.value, entity_id)
            self._ensure_can_enter(adapter, current, Status.PENDING, entity_id)
            record = await self._store.create(etype, entity_id, submitter_id)
            await adapter.set_status(entity_id, Status.PENDING)
            await self._log(
                adapter,
                entity_id,
                user_id=submitter_id,
                activity_type=ActivityType.UPDATE,
                verb="Submitted",
                metadata={
                    "oldData": {"status": current.value},
                    "newData": {"status": Status.PENDING.value, "approval_id": record.id},
                },
            )
        logger.info(
            "Submitted %s %s for approval (record %s)", etype.value, entity_id, record.id
        )
        return WorkflowOutcome(etype, entity_id, Status.PENDING, record)

    async def review(
        self,
        entity_type: EntityType | str,
        entity_id: str,
        reviewer_id: str,
        decision: ApprovalDecision | str,
        note: str | None = None,
    ) -> WorkflowOutcome:
        """Resolve the pending approval and synchronize the entity status.

        APPROVED -> APPROVED, REJECTED -> REJECTED, REVISION -> DRAFT.

        Raises:
            ValidationException: decision is not APPROVED, REJECTED or REVISION.
            NoteRequiredError: REJECTED/REVISION without a note (checked before any write).
            NoPendingApprovalError: Nothing pending for the entity.
            AuthorizationException: reviewer lacks a reviewer role.
            AlreadyResolvedError: A concurrent review resolved the record first.
        """
        etype = parse_entity_type(entity_type)
        resolved_decision = _parse_decision(decision)
        clean_note = ApprovalRecordEntity.validate_resolution(
            resolved_decision, reviewer_id, note
        )
        adapter = self._adapters.get(etype)
        async with self._uow.transaction():
            current = await adapter.get_current_status(entity_id, lock=True)
            pending = await self._store.find_pending(etype, entity_id)
            if pending is None:
                raise NoPendingApprovalError(etype.value, entity_id)
            await self._authorizer.require_reviewer(reviewer_id, etype, "approve")
            target = status_for_decision(resolved_decision)
            self._ensure_can_enter(adapter, current, target, entity_id)
            record = await self._store.resolve(
                pending.id, reviewer_id, resolved_decision, clean_note
            )
            await adapter.set_status(entity_id, target)
            await self._log(
                adapter,
                entity_id,
                user_id=reviewer_id,
                activity_type=_DECISION_ACTIVITY.get(
                    resolved_decision, ActivityType.UPDATE
                ),
                verb=f"Reviewed ({resolved_decision.value})",
                metadata={
                    "oldData": {"status": current.value, "decision": pending.decision.value},
                    "newData": {
                        "status": target.value,
                        "decision": resolved_decision.value,
                        "note": clean_note,
                        "approval_id": record.id,
                    },
                },
            )
        logger.info(
            "Reviewed %s %s: %s by %s",
            etype.value,
            entity_id,
            resolved_decision.value,
            reviewer_id,
        )
        return WorkflowOutcome(etype, entity_id, target, record)

    async def withdraw(
        self,
        entity_type: EntityType | str,
        entity_id: str,
        submitter_id: str,
    ) -> WorkflowOutcome:
        """Owner cancels their pending submission: record CANCELLED, entity back to DRAFT.

        Raises:
            NotOwnerError: submitter_id is not the owner.
            NoPendingApprovalError: Nothing pending.
            AlreadyResolvedError: The record was resolved concurrently.
        """
        etype = parse_entity_type(entity_type)
        adapter = self._adapters.get(etype)
        async with self._uow.transaction():
            current = await adapter.get_current_status(entity_id, lock=True)
            owner_id = await adapter.get_owner_id(entity_id)
            if owner_id is None or owner_id != submitter_id:
                raise NotOwnerError(etype.value, entity_id, submitter_id)
            pending = await self._store.find_pending(etype, entity_id)
            if pending is None:
                raise NoPendingApprovalError(etype.value, entity_id)
            target = status_for_decision(ApprovalDecision.CANCELLED)
            self._ensure_can_enter(adapter, current, target, entity_id)
            record = await self._store.cancel(pending.id, submitter_id)
            await adapter.set_status(entity_id, target)
            await self._log(
                adapter,
                entity_id,
                user_id=submitter_id,
                activity_type=ActivityType.UPDATE,
                verb="Withdrew",
                metadata={
                    "oldData": {"status": current.value},
                    "newData": {"status": target.value, "approval_id": record.id},
                },
            )
        logger.info("Withdrew %s %s from approval", etype.value, entity_id)
        return WorkflowOutcome(etype, entity_id, target, record)

    async def archive(
        self,
        entity_type: EntityType | str,
        entity_id: str,
        actor_id: str,
    ) -> WorkflowOutcome:
        """Move an approved (or published/private) entity to ARCHIVED. Terminal.

        Raises:
            AuthorizationException: actor lacks a reviewer role.
            InvalidTransitionError: Current status cannot be archived.
        """
        return await self._move(
            entity_type, entity_id, actor_id, Status.ARCHIVED, action="archive", verb="Archived"
        )

    async def publish(
        self,
        entity_type: EntityType | str,
        entity_id: str,
        actor_id: str,
        visibility: Status | str = Status.PUBLISH,
    ) -> WorkflowOutcome:
        """Set a publishable entity (letter, article) to PUBLISH or PRIVATE.

        Raises:
            ValidationException: visibility is not PUBLISH or PRIVATE.
            AuthorizationException: actor lacks a reviewer role.
            InvalidTransitionError: Entity kind is not publishable or status disallows it.
        """
        try:
            target = Status(visibility.upper() if isinstance(visibility, str) else visibility)
        except ValueError:
            target = None
        if target not in PUBLICATION_STATUSES:
            raise ValidationException(
                "visibility must be PUBLISH or PRIVATE", field="visibility"
            )
        return await self._move(
            entity_type, entity_id, actor_id, target, action="publish", verb="Published"
        )

    async def review_many(
        self,
        items: Sequence[BulkReviewItem],
        reviewer_id: str,
        decision: ApprovalDecision | str,
        note: str | None = None,
    ) -> BulkReviewResult:
        """Review several entities with the same decision; each item is its own unit of work.

        Workflow errors are reported per item; storage errors propagate.
        """
        results: list[BulkReviewItemResult] = []
        for item in items:
            try:
                outcome = await self.review(
                    item.entity_type, item.entity_id, reviewer_id, decision, note
                )
            except HumanikaException as e:
                results.append(
                    BulkReviewItemResult(
                        entity_type=item.entity_type,
                        entity_id=item.entity_id,
                        error_code=e.error_code,
                        message=e.message,
                    )
                )
                continue
            results.append(
                BulkReviewItemResult(
                    entity_type=item.entity_type,
                    entity_id=item.entity_id,
                    outcome=outcome,
                )
            )
        bulk = BulkReviewResult(results=results)
        logger.info(
            "Bulk review by %s: %d succeeded, %d failed",
            reviewer_id,
            bulk.succeeded,
            bulk.failed,
        )
        return bulk

    async def history(
        self, entity_type: EntityType | str, entity_id: str
    ) -> list[ApprovalRecordEntity]:
        """Return the entity's approval records, oldest first."""
        etype = parse_entity_type(entity_type)
        # Ensures the kind is registered and the entity exists.
        await self._adapters.get(etype).get_current_status(entity_id)
        return await self._store.list_by_entity(etype, entity_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _move(
        self,
        entity_type: EntityType | str,
        entity_id: str,
        actor_id: str,
        target: Status,
        *,
        action: str,
        verb: str,
    ) -> WorkflowOutcome:
        etype = parse_entity_type(entity_type)
        adapter = self._adapters.get(etype)
        async with self._uow.transaction():
            current = await adapter.get_current_status(entity_id, lock=True)
            await self._authorizer.require_reviewer(actor_id, etype, action)
            self._ensure_can_enter(adapter, current, target, entity_id)
            await adapter.set_status(entity_id, target)
            await self._log(
                adapter,
                entity_id,
                user_id=actor_id,
                activity_type=ActivityType.UPDATE,
                verb=verb,
                metadata={
                    "oldData": {"status": current.value},
                    "newData": {"status": target.value},
                },
            )
        logger.info("%s %s %s (%s -> %s)", verb, etype.value, entity_id, current.value, target.value)
        return WorkflowOutcome(etype, entity_id, target)

    @staticmethod
    def _ensure_can_enter(
        adapter: IEntityAdapter, current: Status, target: Status, entity_id: str
    ) -> None:
        """Check the transition table, then the adapter's narrower capabilities."""
        etype = adapter.entity_type.value
        ensure_transition(current, target, entity_type=etype, entity_id=entity_id)
        if (
            current == Status.APPROVED
            and target == Status.PENDING
            and not adapter.allows_resubmission
        ):
            raise InvalidTransitionError(
                current.value, target.value, entity_type=etype, entity_id=entity_id
            )
        if target in PUBLICATION_STATUSES and not adapter.publishable:
            raise InvalidTransitionError(
                current.value, target.value, entity_type=etype, entity_id=entity_id
            )

    async def _log(
        self,
        adapter: IEntityAdapter,
        entity_id: str,
        *,
        user_id: str,
        activity_type: ActivityType,
        verb: str,
        metadata: dict[str, Any],
    ) -> None:
        if self._activity is None:
            return
        name = await adapter.get_display_name(entity_id)
        kind = adapter.entity_type.value
        await self._activity.log(
            user_id=user_id,
            activity_type=activity_type,
            entity_type=kind,
            entity_id=entity_id,
            description=f"{verb} {kind} '{name}'",
            metadata=metadata,
        )
