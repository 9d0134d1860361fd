"""Approval workflow API: thin routes delegating to ApprovalWorkflowEngine.

Entity type in the path is case-insensitive and accepts '-' for '_'
(e.g. /approvals/work-program/{id}/submit).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from humanika.api.v1.dependencies import (
    CurrentUser,
    get_approval_query_service,
    get_approval_workflow,
    get_approval_workflow_readonly,
    require_reviewer_role,
)
from humanika.application.dtos.approval import (
    ApprovalFilters,
    BulkReviewItem,
    BulkReviewResult,
)
from humanika.application.dtos.user import UserResult
from humanika.application.services import (
    ApprovalQueryService,
    ApprovalWorkflowEngine,
    parse_entity_type,
)
from humanika.core.config import get_settings
from humanika.core.limiter import limit_writes
from humanika.domain.enums import ApprovalDecision
from humanika.domain.exceptions import ValidationException
from humanika.schemas.approval import (
    ApprovalHistoryResponse,
    ApprovalListResponse,
    ApprovalRecordResponse,
    BulkReviewItemResponse,
    BulkReviewRequest,
    BulkReviewResponse,
    PublishRequest,
    ReviewRequest,
    WorkflowOutcomeResponse,
)

router = APIRouter()

Engine = Annotated[ApprovalWorkflowEngine, Depends(get_approval_workflow)]
ApprovalViewer = Annotated[UserResult, Depends(require_reviewer_role("approval", "view"))]


def _bulk_to_response(result: BulkReviewResult) -> BulkReviewResponse:
    return BulkReviewResponse(
        results=[
            BulkReviewItemResponse(
                entity_type=r.entity_type,
                entity_id=r.entity_id,
                ok=r.ok,
                outcome=(
                    WorkflowOutcomeResponse.model_validate(r.outcome)
                    if r.outcome
                    else None
                ),
                error=r.error_code,
                message=r.message,
            )
            for r in result.results
        ],
        succeeded=result.succeeded,
        failed=result.failed,
    )


@router.get("", response_model=ApprovalListResponse)
async def list_approvals(
    current_user: ApprovalViewer,
    queries: Annotated[ApprovalQueryService, Depends(get_approval_query_service)],
    decision: ApprovalDecision | None = Query(None),
    entity_type: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    """Approval queue, newest first. Filter by decision and entity type."""
    filters = ApprovalFilters(
        decision=decision,
        entity_type=parse_entity_type(entity_type) if entity_type else None,
    )
    result = await queries.list_queue(filters, page=page, limit=limit)
    return ApprovalListResponse(
        items=[ApprovalRecordResponse.model_validate(r) for r in result.items],
        page=result.page,
        limit=result.limit,
        total=result.total,
        pages=result.pages,
    )


@router.post("/bulk-review", response_model=BulkReviewResponse)
@limit_writes
async def bulk_review(
    request: Request,
    body: BulkReviewRequest,
    current_user: CurrentUser,
    engine: Engine,
):
    """Apply one decision to several pending entities; failures are reported per item."""
    max_items = get_settings().approval_bulk_max_items
    if len(body.items) > max_items:
        raise ValidationException(
            f"At most {max_items} items per bulk review", field="items"
        )
    result = await engine.review_many(
        [BulkReviewItem(i.entity_type, i.entity_id) for i in body.items],
        reviewer_id=current_user.id,
        decision=body.decision,
        note=body.note,
    )
    return _bulk_to_response(result)


@router.get(
    "/{entity_type}/{entity_id}/history", response_model=ApprovalHistoryResponse
)
async def approval_history(
    entity_type: str,
    entity_id: str,
    current_user: ApprovalViewer,
    engine: Annotated[
        ApprovalWorkflowEngine, Depends(get_approval_workflow_readonly)
    ],
):
    """All approval records of one entity, oldest first."""
    etype = parse_entity_type(entity_type)
    records = await engine.history(etype, entity_id)
    return ApprovalHistoryResponse(
        entity_type=etype,
        entity_id=entity_id,
        items=[ApprovalRecordResponse.model_validate(r) for r in records],
    )


@router.post(
    "/{entity_type}/{entity_id}/submit",
    response_model=WorkflowOutcomeResponse,
    status_code=201,
)
@limit_writes
async def submit(
    request: Request,
    entity_type: str,
    entity_id: str,
    current_user: CurrentUser,
    engine: Engine,
):
    """Owner submits the entity for review (status -> PENDING)."""
    outcome = await engine.submit(entity_type, entity_id, current_user.id)
    return WorkflowOutcomeResponse.model_validate(outcome)


@router.post(
    "/{entity_type}/{entity_id}/review", response_model=WorkflowOutcomeResponse
)
@limit_writes
async def review(
    request: Request,
    entity_type: str,
    entity_id: str,
    body: ReviewRequest,
    current_user: CurrentUser,
    engine: Engine,
):
    """Reviewer resolves the pending approval (APPROVED, REJECTED or REVISION)."""
    outcome = await engine.review(
        entity_type, entity_id, current_user.id, body.decision, body.note
    )
    return WorkflowOutcomeResponse.model_validate(outcome)


@router.post(
    "/{entity_type}/{entity_id}/withdraw", response_model=WorkflowOutcomeResponse
)
@limit_writes
async def withdraw(
    request: Request,
    entity_type: str,
    entity_id: str,
    current_user: CurrentUser,
    engine: Engine,
):
    """Owner cancels the pending submission (status -> DRAFT)."""
    outcome = await engine.withdraw(entity_type, entity_id, current_user.id)
    return WorkflowOutcomeResponse.model_validate(outcome)


@router.post(
    "/{entity_type}/{entity_id}/archive", response_model=WorkflowOutcomeResponse
)
@limit_writes
async def archive(
    request: Request,
    entity_type: str,
    entity_id: str,
    current_user: CurrentUser,
    engine: Engine,
):
    """Move an approved entity to ARCHIVED."""
    outcome = await engine.archive(entity_type, entity_id, current_user.id)
    return WorkflowOutcomeResponse.model_validate(outcome)


@router.post(
    "/{entity_type}/{entity_id}/publish", response_model=WorkflowOutcomeResponse
)
@limit_writes
async def publish(
    request: Request,
    entity_type: str,
    entity_id: str,
    body: PublishRequest,
    current_user: CurrentUser,
    engine: Engine,
):
    """Publish or hide an approved letter or article."""
    outcome = await engine.publish(
        entity_type, entity_id, current_user.id, body.visibility
    )
    return WorkflowOutcomeResponse.model_validate(outcome)
