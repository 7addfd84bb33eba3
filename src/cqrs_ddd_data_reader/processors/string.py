"""String matching processor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from ..filters import FilterOperator
from .strategy import FilterProcessor, field_and_value

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy import ColumnElement

    from ..query import PredicateBuilder


class Like(FilterProcessor):
    """Substring match: ``field LIKE '%value%'``."""

    @property
    def operator(self) -> str:
        return FilterOperator.LIKE.value

    def get_as_where_arguments(
        self,
        arguments: Sequence[Any],
        processors: Mapping[str, FilterProcessor],
        builder: PredicateBuilder,
    ) -> tuple[ColumnElement[bool], ...]:
        field, value = field_and_value(self.operator, arguments)
        return (cast("ColumnElement[bool]", builder.column(field).like(f"%{value}%")),)
