"""Request/response schemas for the approval workflow API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from humanika.domain.enums import ApprovalDecision, EntityType, Status


class ReviewRequest(BaseModel):
    """Body for POST /approvals/{entity_type}/{entity_id}/review."""

    decision: ApprovalDecision = Field(
        ..., description="APPROVED, REJECTED or REVISION"
    )
    note: str | None = Field(
        default=None,
        max_length=2000,
        description="Reviewer note; required for REJECTED and REVISION",
    )


class PublishRequest(BaseModel):
    """Body for POST /approvals/{entity_type}/{entity_id}/publish."""

    visibility: Status = Field(default=Status.PUBLISH, description="PUBLISH or PRIVATE")


class BulkReviewItemRequest(BaseModel):
    entity_type: EntityType
    entity_id: str = Field(..., min_length=1)


class BulkReviewRequest(BaseModel):
    """Body for POST /approvals/bulk-review. Same decision and note for every item."""

    items: list[BulkReviewItemRequest] = Field(..., min_length=1)
    decision: ApprovalDecision
    note: str | None = Field(default=None, max_length=2000)


class ApprovalRecordResponse(BaseModel):
    """Single approval record (read)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    entity_type: EntityType
    entity_id: str
    submitter_id: str | None
    reviewer_id: str | None
    decision: ApprovalDecision
    note: str | None = None
    created_at: datetime
    updated_at: datetime
    resolved_at: datetime | None = None


class WorkflowOutcomeResponse(BaseModel):
    """Result of a workflow operation."""

    model_config = ConfigDict(from_attributes=True)

    entity_type: EntityType
    entity_id: str
    entity_status: Status
    approval_record: ApprovalRecordResponse | None = None


class ApprovalListResponse(BaseModel):
    """Paginated approval queue."""

    items: list[ApprovalRecordResponse]
    page: int
    limit: int
    total: int
    pages: int


class ApprovalHistoryResponse(BaseModel):
    """Approval records for one entity, oldest first."""

    entity_type: EntityType
    entity_id: str
    items: list[ApprovalRecordResponse]


class BulkReviewItemResponse(BaseModel):
    """Per-item bulk review result: outcome on success, error/message on failure."""

    entity_type: EntityType
    entity_id: str
    ok: bool
    outcome: WorkflowOutcomeResponse | None = None
    error: str | None = None
    message: str | None = None


class BulkReviewResponse(BaseModel):
    results: list[BulkReviewItemResponse]
    succeeded: int
    failed: int
