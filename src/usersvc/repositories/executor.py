"""
Query executor used by repositories to reach the store.

The executor issues one SELECT, UPDATE or DELETE per call and returns rows
as plain dictionaries. Every call runs in its own short-lived session and
transaction, so consecutive calls from a repository are independent store
requests.
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from sqlalchemy import Table, delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.sql import ColumnElement

from usersvc.core.exceptions import ConstraintViolationException, DatabaseException

Row = Dict[str, Any]


class QueryExecutor(Protocol):
    """Minimal set of statements the repositories issue against the store."""

    async def select(
        self,
        columns: Sequence[ColumnElement],
        table: Table,
        where: Optional[ColumnElement] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        ...

    async def update(
        self,
        table: Table,
        values: Mapping[str, Any],
        where: ColumnElement,
        returning: Sequence[ColumnElement],
    ) -> List[Row]:
        ...

    async def delete(
        self,
        table: Table,
        where: ColumnElement,
        returning: Sequence[ColumnElement],
    ) -> List[Row]:
        ...


class SessionQueryExecutor:
    """
    QueryExecutor backed by a SQLAlchemy ``async_sessionmaker``.

    SQLAlchemy errors are wrapped in DatabaseException (or
    ConstraintViolationException for integrity errors) with the original
    error chained as ``__cause__``.

    Example:
        engine = create_engine_from_settings(settings)
        executor = SessionQueryExecutor(create_session_factory(engine))
        rows = await executor.select([users.c.id], users, users.c.id == 1, limit=1)
    """

    def __init__(self, session_factory: async_sessionmaker):
        """
        Initialize the executor.

        Args:
            session_factory: Factory producing AsyncSession instances
        """
        self.session_factory = session_factory

    async def select(
        self,
        columns: Sequence[ColumnElement],
        table: Table,
        where: Optional[ColumnElement] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        stmt = select(*columns).select_from(table)
        if where is not None:
            stmt = stmt.where(where)
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._execute(stmt, f"select from {table.name}")

    async def update(
        self,
        table: Table,
        values: Mapping[str, Any],
        where: ColumnElement,
        returning: Sequence[ColumnElement],
    ) -> List[Row]:
        stmt = update(table).where(where).values(**dict(values)).returning(*returning)
        return await self._execute(stmt, f"update {table.name}")

    async def delete(
        self,
        table: Table,
        where: ColumnElement,
        returning: Sequence[ColumnElement],
    ) -> List[Row]:
        stmt = delete(table).where(where).returning(*returning)
        return await self._execute(stmt, f"delete from {table.name}")

    async def _execute(self, stmt, operation: str) -> List[Row]:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    result = await session.execute(stmt)
                    return [dict(row) for row in result.mappings().all()]
        except IntegrityError as e:
            raise ConstraintViolationException(
                f"Constraint violated during {operation}",
                {"operation": operation, "error": str(e.orig)},
            ) from e
        except SQLAlchemyError as e:
            raise DatabaseException(
                f"Failed to {operation}",
                {"operation": operation, "error": str(e)},
            ) from e
