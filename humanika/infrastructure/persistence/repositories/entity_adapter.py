"""SQLAlchemy entity adapters: map generic workflow calls onto one approvable table.

One implementation parameterized by ORM model; build_adapter_registry wires
the six HUMANIKA entity kinds. Adapters hold no business rules.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from humanika.application.services.adapter_registry import AdapterRegistry
from humanika.domain.enums import EntityType, Status
from humanika.domain.exceptions import ResourceNotFoundException
from humanika.infrastructure.persistence.models.approvable import (
    Article,
    Document,
    Event,
    Finance,
    Letter,
    WorkProgram,
)
from humanika.infrastructure.persistence.models.mixins import ApprovableModel


class SqlAlchemyEntityAdapter:
    """Entity adapter backed by an ApprovableModel table."""

    def __init__(
        self,
        db: AsyncSession,
        model: type[ApprovableModel],
        entity_type: EntityType,
        *,
        label_attr: str = "name",
        allows_resubmission: bool = False,
        publishable: bool = False,
    ) -> None:
        self.db = db
        self.model = model
        self.entity_type = entity_type
        self.label_attr = label_attr
        self.allows_resubmission = allows_resubmission
        self.publishable = publishable

    async def _load(self, entity_id: str, *, lock: bool = False) -> Any:
        model: Any = self.model
        stmt = select(model).where(model.id == entity_id)
        if lock:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            raise ResourceNotFoundException(self.entity_type.value, entity_id)
        return row

    async def get_owner_id(self, entity_id: str) -> str | None:
        row = await self._load(entity_id)
        return row.owner_id

    async def get_current_status(self, entity_id: str, *, lock: bool = False) -> Status:
        """Return current status; lock=True issues SELECT ... FOR UPDATE."""
        row = await self._load(entity_id, lock=lock)
        return Status(row.status)

    async def get_display_name(self, entity_id: str) -> str:
        row = await self._load(entity_id)
        return str(getattr(row, self.label_attr))

    async def set_status(self, entity_id: str, status: Status) -> None:
        row = await self._load(entity_id)
        row.status = status.value
        await self.db.flush()


def build_adapter_registry(db: AsyncSession) -> AdapterRegistry:
    """Return a registry with adapters for every approvable entity kind on this session."""
    return AdapterRegistry(
        [
            SqlAlchemyEntityAdapter(db, WorkProgram, EntityType.WORK_PROGRAM),
            SqlAlchemyEntityAdapter(db, Event, EntityType.EVENT),
            SqlAlchemyEntityAdapter(db, Finance, EntityType.FINANCE),
            SqlAlchemyEntityAdapter(db, Document, EntityType.DOCUMENT),
            SqlAlchemyEntityAdapter(
                db,
                Letter,
                EntityType.LETTER,
                label_attr="subject",
                allows_resubmission=True,
                publishable=True,
            ),
            SqlAlchemyEntityAdapter(
                db,
                Article,
                EntityType.ARTICLE,
                label_attr="title",
                allows_resubmission=True,
                publishable=True,
            ),
        ]
    )
