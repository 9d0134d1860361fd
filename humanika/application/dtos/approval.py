"""DTOs for the approval workflow (outcomes, queue filters, bulk review)."""

from dataclasses import dataclass, field

from humanika.domain.entities import ApprovalRecordEntity
from humanika.domain.enums import ApprovalDecision, EntityType, Status


@dataclass(frozen=True)
class WorkflowOutcome:
    """Result of a workflow operation: new entity status and the record it touched (if any)."""

    entity_type: EntityType
    entity_id: str
    entity_status: Status
    approval_record: ApprovalRecordEntity | None = None


@dataclass(frozen=True)
class ApprovalFilters:
    """Approval queue filters; None means no filter on that field."""

    decision: ApprovalDecision | None = None
    entity_type: EntityType | None = None


@dataclass(frozen=True)
class ApprovalPage:
    """One page of the approval queue."""

    items: list[ApprovalRecordEntity]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        """Total page count (ceil(total / limit))."""
        return (self.total + self.limit - 1) // self.limit if self.limit else 0


@dataclass(frozen=True)
class BulkReviewItem:
    """One entity selected in a bulk review."""

    entity_type: EntityType
    entity_id: str


@dataclass(frozen=True)
class BulkReviewItemResult:
    """Per-item outcome of a bulk review: outcome on success, error_code/message on failure."""

    entity_type: EntityType
    entity_id: str
    outcome: WorkflowOutcome | None = None
    error_code: str | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is not None


@dataclass(frozen=True)
class BulkReviewResult:
    """Aggregate of a bulk review."""

    results: list[BulkReviewItemResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded
