"""Comparison processors: equals, greaterThan, lessThan and friends."""

from __future__ import annotations

import operator as op_module
from typing import TYPE_CHECKING, Any, cast

from ..filters import FilterOperator
from .strategy import FilterProcessor, field_and_value

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from sqlalchemy import ColumnElement

    from ..query import PredicateBuilder


class ComparisonProcessor(FilterProcessor):
    """Base for ``column <op> value`` processors."""

    _operator: FilterOperator
    _compare: Callable[[Any, Any], Any]

    @property
    def operator(self) -> str:
        return self._operator.value

    def get_as_where_arguments(
        self,
        arguments: Sequence[Any],
        processors: Mapping[str, FilterProcessor],
        builder: PredicateBuilder,
    ) -> tuple[ColumnElement[bool], ...]:
        field, value = field_and_value(self.operator, arguments)
        clause = type(self)._compare(builder.column(field), value)
        return (cast("ColumnElement[bool]", clause),)


class Equals(ComparisonProcessor):
    _operator = FilterOperator.EQUALS
    _compare = op_module.eq


class GreaterThan(ComparisonProcessor):
    _operator = FilterOperator.GREATER_THAN
    _compare = op_module.gt


class GreaterThanOrEqual(ComparisonProcessor):
    _operator = FilterOperator.GREATER_THAN_OR_EQUAL
    _compare = op_module.ge


class LessThan(ComparisonProcessor):
    _operator = FilterOperator.LESS_THAN
    _compare = op_module.lt


class LessThanOrEqual(ComparisonProcessor):
    _operator = FilterOperator.LESS_THAN_OR_EQUAL
    _compare = op_module.le
