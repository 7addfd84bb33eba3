"""
Group processors: all (AND), any (OR), not.

Nested expressions are dispatched back through the registry, so any
registered operator may appear inside a group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, false, not_, or_, true

from ..filters import FilterOperator
from .strategy import FilterProcessor

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy import ColumnElement

    from ..query import PredicateBuilder


def _translate_all(
    arguments: Sequence[Any],
    processors: Mapping[str, FilterProcessor],
    builder: PredicateBuilder,
) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    for sub_filter in arguments:
        clauses.extend(builder.translate(sub_filter, processors))
    return clauses


class All(FilterProcessor):
    @property
    def operator(self) -> str:
        return FilterOperator.ALL.value

    def get_as_where_arguments(
        self,
        arguments: Sequence[Any],
        processors: Mapping[str, FilterProcessor],
        builder: PredicateBuilder,
    ) -> tuple[ColumnElement[bool], ...]:
        clauses = _translate_all(arguments, processors, builder)
        if not clauses:
            return (true(),)
        return (and_(*clauses),)


class Any_(FilterProcessor):
    @property
    def operator(self) -> str:
        return FilterOperator.ANY.value

    def get_as_where_arguments(
        self,
        arguments: Sequence[Any],
        processors: Mapping[str, FilterProcessor],
        builder: PredicateBuilder,
    ) -> tuple[ColumnElement[bool], ...]:
        clauses = _translate_all(arguments, processors, builder)
        if not clauses:
            return (false(),)
        return (or_(*clauses),)


class Not(FilterProcessor):
    """Negation of the AND of its operands. Not registered by default."""

    @property
    def operator(self) -> str:
        return FilterOperator.NOT.value

    def get_as_where_arguments(
        self,
        arguments: Sequence[Any],
        processors: Mapping[str, FilterProcessor],
        builder: PredicateBuilder,
    ) -> tuple[ColumnElement[bool], ...]:
        clauses = _translate_all(arguments, processors, builder)
        if not clauses:
            return (false(),)
        inner = clauses[0] if len(clauses) == 1 else and_(*clauses)
        return (not_(inner),)
