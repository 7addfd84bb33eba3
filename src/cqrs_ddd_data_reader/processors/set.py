"""Set membership processor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from ..exceptions import InvalidArgumentError
from ..filters import FilterOperator
from .strategy import FilterProcessor, field_and_value

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy import ColumnElement

    from ..query import PredicateBuilder


class In(FilterProcessor):
    @property
    def operator(self) -> str:
        return FilterOperator.IN.value

    def get_as_where_arguments(
        self,
        arguments: Sequence[Any],
        processors: Mapping[str, FilterProcessor],
        builder: PredicateBuilder,
    ) -> tuple[ColumnElement[bool], ...]:
        field, values = field_and_value(self.operator, arguments)
        if isinstance(values, str) or not isinstance(values, list | tuple | set):
            raise InvalidArgumentError(
                f'Filter operator "in" expects a list of values, got {values!r}',
                argument="filter",
            )
        return (cast("ColumnElement[bool]", builder.column(field).in_(list(values))),)
