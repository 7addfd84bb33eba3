"""
SQLAlchemy implementation of the reader's query contract.

``SelectQuery`` wraps a SQLAlchemy 2.0 ``Select`` and the synchronous
``Session`` that executes it. ``Select`` is generative, so every chaining
method returns a new ``SelectQuery`` and the receiver is never modified.

Usage::

    query = SelectQuery(session, select(UserRecord))
    reader = SelectDataReader(query).with_filter(equals("status", "active"))
    users = reader.with_limit(10).read()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import asc, desc, func, inspect, select
from sqlalchemy import column as literal_column

from .query import PredicateBuilder
from .sort import Sort, SortDirection

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.orm import Session

logger = logging.getLogger("cqrs_ddd.data_reader.sqlalchemy")


class SelectQuery:
    """
    Query object over a ``Select`` statement.

    Args:
        session: Session used to execute the statement.
        statement: The base ``Select``.
        yield_per: Optional batch size used when iterating results.
    """

    def __init__(
        self,
        session: Session,
        statement: Select[Any],
        *,
        yield_per: int | None = None,
    ) -> None:
        self._session = session
        self._statement = statement
        self._yield_per = yield_per

    @property
    def statement(self) -> Select[Any]:
        return self._statement

    def _replace(self, statement: Select[Any]) -> SelectQuery:
        return SelectQuery(self._session, statement, yield_per=self._yield_per)

    # -- chaining --------------------------------------------------------------

    def offset(self, offset: int) -> SelectQuery:
        return self._replace(self._statement.offset(offset))

    def limit(self, limit: int) -> SelectQuery:
        return self._replace(self._statement.limit(limit))

    def order_by(self, order: Sort | Mapping[str, Any] | Sequence[Any]) -> SelectQuery:
        """
        Apply ordering.

        Accepts a :class:`Sort`, a ``{field: "asc"|"desc"}`` mapping or a
        sequence of ``(field, direction)`` pairs.
        """
        if isinstance(order, Sort):
            sort = order
        elif isinstance(order, Mapping):
            sort = Sort.from_mapping(order)
        else:
            sort = Sort.from_pairs(order)

        clauses = [
            desc(self.resolve_column(field))
            if direction is SortDirection.DESC
            else asc(self.resolve_column(field))
            for field, direction in sort.order
        ]
        if not clauses:
            return self
        return self._replace(self._statement.order_by(*clauses))

    def and_where(self, predicate: Callable[[PredicateBuilder], None]) -> SelectQuery:
        builder = PredicateBuilder(self.resolve_column)
        predicate(builder)
        if not builder.clauses:
            return self
        return self._replace(self._statement.where(*builder.clauses))

    def resolve_column(self, field: str) -> ColumnElement[Any]:
        """Resolve *field* against the selected entity or columns."""
        for description in self._statement.column_descriptions:
            entity = description.get("entity")
            if entity is not None and field in inspect(entity).mapper.attrs:
                return getattr(entity, field)
        selected = self._statement.selected_columns
        if field in selected:
            return selected[field]
        return literal_column(field)

    # -- execution -------------------------------------------------------------

    def count(self) -> int:
        subquery = self._statement.order_by(None).subquery()
        count_stmt = select(func.count()).select_from(subquery)
        logger.debug("Executing count query")
        return int(self._session.execute(count_stmt).scalar_one())

    def fetch_all(self) -> Sequence[Any]:
        logger.debug("Fetching all rows")
        result = self._session.execute(self._statement)
        if self._is_single_element():
            return result.scalars().all()
        return result.all()

    def __iter__(self) -> Iterator[Any]:
        statement = self._statement
        if self._yield_per:
            statement = statement.execution_options(yield_per=self._yield_per)
        logger.debug("Streaming rows (yield_per=%s)", self._yield_per)
        result = self._session.execute(statement)
        if self._is_single_element():
            yield from result.scalars()
        else:
            yield from result

    def _is_single_element(self) -> bool:
        return len(self._statement.column_descriptions) == 1

    def __str__(self) -> str:
        bind = self._session.get_bind()
        return str(self._statement.compile(dialect=bind.dialect))

    def __repr__(self) -> str:
        return f"SelectQuery({self._statement!r})"
