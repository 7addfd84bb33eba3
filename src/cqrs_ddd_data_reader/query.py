"""
Query engine contract and predicate builder.

The reader never generates SQL itself. It relies on a query object that
satisfies :class:`QueryInterface` and hands it a :class:`FilterPredicate`
through ``and_where``. The engine invokes the predicate with a
:class:`PredicateBuilder` bound to its own column resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from sqlalchemy import column as literal_column

from .exceptions import UnsupportedOperatorError
from .filters import FilterExpression

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping, Sequence

    from sqlalchemy import ColumnElement

    from .processors.strategy import FilterProcessor


@runtime_checkable
class Countable(Protocol):
    """Query capability: report the number of matching rows."""

    def count(self) -> int: ...


@runtime_checkable
class Paginable(Protocol):
    """Query capability: offset/limit pagination."""

    def offset(self, offset: int) -> Any: ...

    def limit(self, limit: int) -> Any: ...


@runtime_checkable
class QueryInterface(Countable, Paginable, Protocol):
    """
    Full contract the reader expects from the underlying query.

    Every chaining method returns a new query and leaves the receiver
    untouched.
    """

    def order_by(self, order: Any) -> QueryInterface: ...

    def and_where(self, predicate: Callable[[PredicateBuilder], None]) -> Any: ...

    def fetch_all(self) -> Sequence[Any]: ...

    def __iter__(self) -> Iterator[Any]: ...


class PredicateBuilder:
    """
    Handle passed to predicates by the query engine.

    Resolves field references to column expressions and collects the
    ``where`` clauses produced by filter processors.
    """

    def __init__(
        self,
        resolve_column: Callable[[str], ColumnElement[Any]] | None = None,
    ) -> None:
        self._resolve_column = resolve_column or literal_column
        self._clauses: list[ColumnElement[bool]] = []

    def column(self, field: str) -> ColumnElement[Any]:
        return self._resolve_column(field)

    def where(self, *clauses: ColumnElement[bool]) -> PredicateBuilder:
        self._clauses.extend(clauses)
        return self

    @property
    def clauses(self) -> tuple[ColumnElement[bool], ...]:
        return tuple(self._clauses)

    def translate(
        self,
        expression: FilterExpression | Sequence[Any],
        processors: Mapping[str, FilterProcessor],
    ) -> tuple[ColumnElement[bool], ...]:
        """
        Dispatch *expression* to the processor registered for its tag.

        Raises:
            UnsupportedOperatorError: If no processor handles the tag.
        """
        expression = FilterExpression.from_list(expression)
        processor = processors.get(expression.operator)
        if processor is None:
            raise UnsupportedOperatorError(expression.operator, list(processors))
        return processor.get_as_where_arguments(
            expression.operands, processors, self
        )


@dataclass(frozen=True)
class FilterPredicate:
    """
    A filter expression bound to the processor registry it was created with.

    Passed to ``QueryInterface.and_where``; the engine calls it with a
    builder handle.
    """

    filter: FilterExpression
    processors: Mapping[str, FilterProcessor]

    def __call__(self, builder: PredicateBuilder) -> None:
        builder.where(*builder.translate(self.filter, self.processors))
