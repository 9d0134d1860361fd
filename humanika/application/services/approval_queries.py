"""Approval queue queries (read-only; no status changes)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from humanika.application.dtos.approval import ApprovalFilters, ApprovalPage
from humanika.domain.exceptions import ValidationException

if TYPE_CHECKING:
    from humanika.application.interfaces.repositories import IApprovalRecordStore


class ApprovalQueryService:
    """Paginated approval queue for the admin approval pages."""

    def __init__(self, store: IApprovalRecordStore) -> None:
        self._store = store

    async def list_queue(
        self, filters: ApprovalFilters, page: int = 1, limit: int = 10
    ) -> ApprovalPage:
        """Return one page of approval records (newest first).

        Raises:
            ValidationException: page < 1 or limit < 1.
        """
        if page < 1:
            raise ValidationException("page must be >= 1", field="page")
        if limit < 1:
            raise ValidationException("limit must be >= 1", field="limit")
        skip = (page - 1) * limit
        items = await self._store.list_records(filters, skip=skip, limit=limit)
        total = await self._store.count_records(filters)
        return ApprovalPage(items=items, page=page, limit=limit, total=total)
