"""
Posts API: Table Query Builder
================================

What:  A table-scoped statement builder with explicit terminal execution methods.
How:   `where()` returns a new builder with one more equality filter. The
       `*_statement()` methods only build SQLAlchemy Core statements; the async
       terminal methods (`select`, `first`, `insert`, `update`, `delete`) execute
       exactly one statement on the session they are given.
Who:   PostService builds one TableQuery per statement it runs.

Usage:
    posts = TableQuery(Post.__table__)
    rows = await posts.select(db)                      # SELECT * FROM posts
    row = await posts.where("id", 1).first(db)         # ... WHERE id = 1 LIMIT 1
    new_id = await posts.insert(db, {"title": "A"})    # INSERT ... RETURNING id
    await posts.where("id", 1).update(db, {"title": "B"})
    await posts.where("id", 1).delete(db)

Failure contract:
    Any SQLAlchemyError raised while executing or fetching becomes a
    DatabaseError with the original chained. Build-time mistakes (unknown
    column, UPDATE/DELETE without a filter) raise KeyError/ValueError and are
    programming errors, not store failures.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from sqlalchemy import Column, Table, delete, insert, select, update
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.base import Executable

from posts_api.exceptions import DatabaseError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Row = Dict[str, Any]


class TableQuery:
    """
    Immutable statement builder over a single table.

    Filters are (column, value) equality pairs combined with AND. Builders are
    never mutated, so a base builder can be shared and refined freely.
    """

    def __init__(self, table: Table, filters: Tuple[Tuple[str, Any], ...] = ()):
        self.table = table
        self.filters = filters

    def where(self, column: str, value: Any) -> "TableQuery":
        """Return a new builder with `column = value` added to the filters."""
        self._column(column)
        return TableQuery(self.table, self.filters + ((column, value),))

    # ── Statement construction ────────────────────────────────────────────

    def select_statement(self):
        """SELECT every column of the matching rows."""
        return self._filtered(select(self.table))

    def first_statement(self):
        """SELECT the first matching row only."""
        return self.select_statement().limit(1)

    def insert_statement(self, values: Row):
        """INSERT one row and return its primary key."""
        stmt = insert(self.table)
        columns = self._values(values)
        if columns:
            stmt = stmt.values(columns)
        return stmt.returning(*self.table.primary_key.columns)

    def update_statement(self, values: Row):
        """UPDATE the matching rows. Refuses to build without a filter."""
        self._require_filters("update")
        columns = self._values(values)
        if not columns:
            raise ValueError(f"Refusing to build an UPDATE on '{self.table.name}' with no values")
        return self._filtered(update(self.table)).values(columns)

    def delete_statement(self):
        """DELETE the matching rows. Refuses to build without a filter."""
        self._require_filters("delete")
        return self._filtered(delete(self.table))

    # ── Terminal execution ────────────────────────────────────────────────

    async def select(self, db: AsyncSession) -> List[Row]:
        """All matching rows as plain dicts, in store order."""
        return await self._run(
            db,
            self.select_statement(),
            lambda result: [dict(row) for row in result.mappings().all()],
        )

    async def first(self, db: AsyncSession) -> Optional[Row]:
        """The first matching row, or None when nothing matches."""

        def fetch(result: Result) -> Optional[Row]:
            row = result.mappings().first()
            return dict(row) if row is not None else None

        return await self._run(db, self.first_statement(), fetch)

    async def insert(self, db: AsyncSession, values: Row) -> Any:
        """Insert one row and return the primary key the store generated."""
        return await self._run(
            db,
            self.insert_statement(values),
            lambda result: result.scalar_one(),
        )

    async def update(self, db: AsyncSession, values: Row) -> int:
        """Update matching rows; returns the affected row count."""
        return await self._run(
            db,
            self.update_statement(values),
            lambda result: result.rowcount,
        )

    async def delete(self, db: AsyncSession) -> int:
        """Delete matching rows; returns the affected row count."""
        return await self._run(
            db,
            self.delete_statement(),
            lambda result: result.rowcount,
        )

    # ── Helpers ───────────────────────────────────────────────────────────

    def _column(self, name: str) -> Column:
        try:
            return self.table.c[name]
        except KeyError:
            raise KeyError(f"Table '{self.table.name}' has no column '{name}'") from None

    def _values(self, values: Row) -> Row:
        return {self._column(name).name: value for name, value in values.items()}

    def _filtered(self, stmt):
        for name, value in self.filters:
            stmt = stmt.where(self._column(name) == value)
        return stmt

    def _require_filters(self, operation: str) -> None:
        if not self.filters:
            raise ValueError(
                f"Refusing to {operation} every row of '{self.table.name}': call where() first"
            )

    async def _run(
        self,
        db: AsyncSession,
        statement: Executable,
        fetch: Callable[[Result], T],
    ) -> T:
        logger.debug("SQL [%s]: %s | filters=%s", self.table.name, statement, self.filters)
        try:
            result = await db.execute(statement)
            return fetch(result)
        except SQLAlchemyError as e:
            logger.error(
                "Statement on '%s' failed: %s: %s",
                self.table.name,
                type(e).__name__,
                str(e),
            )
            raise DatabaseError(
                context={
                    "table": self.table.name,
                    "statement": str(statement),
                    "error_type": type(e).__name__,
                },
            ) from e

    def __repr__(self) -> str:
        return f"<TableQuery(table='{self.table.name}', filters={self.filters})>"
