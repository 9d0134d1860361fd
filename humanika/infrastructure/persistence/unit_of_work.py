"""SQLAlchemy unit of work: one savepoint (or transaction) per workflow operation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession


class SqlAlchemyUnitOfWork:
    """Wrap workflow writes so they commit or roll back together.

    Inside a request session that already began a transaction
    (get_db_transactional) a SAVEPOINT is used, so a failed operation in a
    bulk review rolls back only its own writes. Otherwise a transaction is
    begun and committed here.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        if self.db.in_transaction():
            async with self.db.begin_nested():
                yield
        else:
            async with self.db.begin():
                yield
