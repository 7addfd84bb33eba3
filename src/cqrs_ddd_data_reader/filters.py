"""
Filter model: an immutable tagged expression (operator tag + operands).

The external (wire) representation is a flat list whose first element is
the operator tag and the remainder are operands::

    ["equals", "status", "active"]
    ["in", "id", [1, 2, 3]]
    ["all", ["equals", "a", 1], ["equals", "b", 2]]

``FilterExpression.from_list`` / ``to_list`` convert between the two.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from .exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Sequence


class FilterOperator(str, Enum):
    """Operator tags understood by the default processor set."""

    EQUALS = "equals"
    IN = "in"
    LIKE = "like"
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"

    # Logical operators
    ALL = "all"
    ANY = "any"
    NOT = "not"


_GROUP_OPERATORS: frozenset[str] = frozenset(
    {FilterOperator.ALL.value, FilterOperator.ANY.value, FilterOperator.NOT.value}
)


def _freeze(value: Any) -> Any:
    if isinstance(value, list | tuple):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, FilterExpression):
        return value.to_list()
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class FilterExpression:
    """
    A single filter node.

    Attributes:
        operator: The operator tag, e.g. ``"equals"`` or ``"all"``.
        operands: Ordered operands. Leaf operators hold a field name
            followed by values; group operators hold nested expressions.
    """

    operator: str
    operands: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        operator = (
            self.operator.value
            if isinstance(self.operator, FilterOperator)
            else self.operator
        )
        if not isinstance(operator, str) or not operator:
            raise InvalidArgumentError(
                f"Filter operator must be a non-empty string, got {operator!r}",
                argument="operator",
            )
        object.__setattr__(self, "operator", operator)
        object.__setattr__(self, "operands", _freeze(self.operands))

    @classmethod
    def from_list(cls, data: Sequence[Any]) -> FilterExpression:
        """Build an expression from its flat list form."""
        if isinstance(data, FilterExpression):
            return data
        if isinstance(data, str) or not data:
            raise InvalidArgumentError(
                f"Filter must be a non-empty list, got {data!r}", argument="filter"
            )
        operator, *operands = data
        operator = getattr(operator, "value", operator)
        if operator in _GROUP_OPERATORS:
            operands = [cls.from_list(o) for o in operands]
        return cls(operator, tuple(operands))

    def to_list(self) -> list[Any]:
        """Serialise to the flat list form."""
        return [self.operator, *(_thaw(o) for o in self.operands)]


# -- factories ---------------------------------------------------------------


def equals(field: str, value: Any) -> FilterExpression:
    return FilterExpression(FilterOperator.EQUALS, (field, value))


def in_(field: str, values: Sequence[Any]) -> FilterExpression:
    return FilterExpression(FilterOperator.IN, (field, values))


def like(field: str, value: str) -> FilterExpression:
    return FilterExpression(FilterOperator.LIKE, (field, value))


def greater_than(field: str, value: Any) -> FilterExpression:
    return FilterExpression(FilterOperator.GREATER_THAN, (field, value))


def greater_than_or_equal(field: str, value: Any) -> FilterExpression:
    return FilterExpression(FilterOperator.GREATER_THAN_OR_EQUAL, (field, value))


def less_than(field: str, value: Any) -> FilterExpression:
    return FilterExpression(FilterOperator.LESS_THAN, (field, value))


def less_than_or_equal(field: str, value: Any) -> FilterExpression:
    return FilterExpression(FilterOperator.LESS_THAN_OR_EQUAL, (field, value))


def all_of(*filters: FilterExpression) -> FilterExpression:
    """Combine filters with AND."""
    return FilterExpression(FilterOperator.ALL, filters)


def any_of(*filters: FilterExpression) -> FilterExpression:
    """Combine filters with OR."""
    return FilterExpression(FilterOperator.ANY, filters)


def not_(*filters: FilterExpression) -> FilterExpression:
    """Negate filters (combined with AND)."""
    return FilterExpression(FilterOperator.NOT, filters)
