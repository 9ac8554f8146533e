"""
Base repository with generic read/update/delete operations.

This module provides a generic BaseRepository class that implements
common database operations for any SQLAlchemy model. Statements are issued
through a QueryExecutor and rows come back as plain dictionaries; shaping
them into projections is left to the domain-specific repositories that
extend this class.
"""

from typing import Any, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy.sql import ColumnElement

from usersvc.core.diagnostics import DiagnosticSink
from usersvc.core.exceptions import NotFoundException
from usersvc.models.base import Base
from usersvc.repositories.executor import QueryExecutor, Row


# Generic type bound to SQLAlchemy Base
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository with read/update/delete operations.

    Type Parameters:
        ModelType: The SQLAlchemy model type this repository manages

    Example:
        class UserRepository(BaseRepository[User]):
            def __init__(self, executor: QueryExecutor, sink: DiagnosticSink):
                super().__init__(User, executor, sink)

            async def get_by_email(self, email: str) -> Optional[Row]:
                return await self.get_by_field("email", email)
    """

    def __init__(self, model: Type[ModelType], executor: QueryExecutor, sink: DiagnosticSink):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class
            executor: Query executor used for every store request
            sink: Diagnostic sink for operational events
        """
        self.model = model
        self.table = model.__table__
        self.executor = executor
        self.sink = sink

    def columns(self, *names: str) -> List[ColumnElement]:
        """
        Resolve column names to table columns.

        Args:
            names: Column names; all columns when empty

        Returns:
            List of column objects in the requested order
        """
        if not names:
            return list(self.table.c)
        return [self.table.c[name] for name in names]

    async def get(self, id: int, columns: Optional[Sequence[ColumnElement]] = None) -> Optional[Row]:
        """
        Get a single record by ID.

        Args:
            id: Primary key value
            columns: Columns to fetch (defaults to all)

        Returns:
            Row dictionary or None if not found
        """
        return await self.get_by_field("id", id, columns)

    async def get_or_fail(self, id: int, columns: Optional[Sequence[ColumnElement]] = None) -> Row:
        """
        Get a single record by ID or raise exception.

        Args:
            id: Primary key value
            columns: Columns to fetch (defaults to all)

        Returns:
            Row dictionary

        Raises:
            NotFoundException: If record not found
        """
        row = await self.get(id, columns)
        if row is None:
            raise NotFoundException(self.model.__name__, id)
        return row

    async def get_by_field(
        self,
        field: str,
        value: Any,
        columns: Optional[Sequence[ColumnElement]] = None,
    ) -> Optional[Row]:
        """
        Get the first record whose field equals the value.

        Args:
            field: Column name to match on
            value: Value the column must equal
            columns: Columns to fetch (defaults to all)

        Returns:
            Row dictionary or None if not found
        """
        rows = await self.executor.select(
            columns or self.columns(),
            self.table,
            where=self.table.c[field] == value,
            limit=1,
        )
        return rows[0] if rows else None

    async def get_all(self, columns: Optional[Sequence[ColumnElement]] = None) -> List[Row]:
        """
        Get all records in store order.

        Args:
            columns: Columns to fetch (defaults to all)

        Returns:
            List of row dictionaries
        """
        return await self.executor.select(columns or self.columns(), self.table)

    async def update_by_id(
        self,
        id: int,
        data: Mapping[str, Any],
        returning: Optional[Sequence[ColumnElement]] = None,
    ) -> Optional[Row]:
        """
        Update a record by ID with partial data.

        Args:
            id: Primary key value
            data: Dictionary of column values to set
            returning: Columns to return from the updated row

        Returns:
            Updated row dictionary or None if no row matched
        """
        rows = await self.executor.update(
            self.table,
            dict(data),
            self.table.c.id == id,
            returning or self.columns(),
        )
        return rows[0] if rows else None

    async def delete_by_id(
        self,
        id: int,
        returning: Optional[Sequence[ColumnElement]] = None,
    ) -> Optional[Row]:
        """
        Delete a record by ID.

        Args:
            id: Primary key value
            returning: Columns to return from the deleted row

        Returns:
            Deleted row dictionary or None if no row matched
        """
        rows = await self.executor.delete(
            self.table,
            self.table.c.id == id,
            returning or self.columns(),
        )
        return rows[0] if rows else None
