"""
Filter processor strategy.

Each processor translates the operands of one operator tag into
``where`` arguments for the query builder. Processors are registered in a
mapping keyed by :attr:`FilterProcessor.operator`; group processors
resolve their nested expressions through the same mapping.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy import ColumnElement

    from ..query import PredicateBuilder


class FilterProcessor(ABC):
    """Strategy interface for translating one filter operator."""

    @property
    @abstractmethod
    def operator(self) -> str:
        """The operator tag this processor handles."""
        ...

    @abstractmethod
    def get_as_where_arguments(
        self,
        arguments: Sequence[Any],
        processors: Mapping[str, FilterProcessor],
        builder: PredicateBuilder,
    ) -> tuple[ColumnElement[bool], ...]:
        """
        Build the arguments for ``builder.where``.

        Args:
            arguments: The operands of the filter expression.
            processors: The full registry, for nested dispatch.
            builder: Resolves field names to columns.

        Returns:
            A tuple of SQLAlchemy boolean expressions.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(operator={self.operator!r})"


def merge_processors(
    current: Mapping[str, FilterProcessor],
    *processors: FilterProcessor,
) -> dict[str, FilterProcessor]:
    """
    Return *current* extended with *processors*.

    Later processors override earlier ones for the same operator.

    Raises:
        InvalidArgumentError: If an item is not a ``FilterProcessor``.
    """
    merged = dict(current)
    for processor in processors:
        if not isinstance(processor, FilterProcessor):
            raise InvalidArgumentError(
                f"Expected a FilterProcessor, got {type(processor).__name__}",
                argument="processors",
            )
        merged[processor.operator] = processor
    return merged


def field_and_value(operator: str, arguments: Sequence[Any]) -> tuple[str, Any]:
    """Unpack the ``(field, value)`` operands of a leaf operator."""
    if len(arguments) != 2:
        raise InvalidArgumentError(
            f'Filter operator "{operator}" expects 2 operands, got {len(arguments)}',
            argument="filter",
        )
    field, value = arguments
    return field, value
