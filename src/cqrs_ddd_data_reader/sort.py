"""Sort criteria value object."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from .exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Sort:
    """
    Immutable ordered list of ``(field, direction)`` pairs.

    Usage::

        Sort.from_string("-created_at,name")
        Sort.from_mapping({"created_at": "desc", "name": "asc"})
    """

    order: tuple[tuple[str, SortDirection], ...] = ()

    def __post_init__(self) -> None:
        normalized = []
        for item in self.order:
            try:
                field, direction = item
            except (TypeError, ValueError) as exc:
                raise InvalidArgumentError(
                    f"Sort entry must be a (field, direction) pair, got {item!r}",
                    argument="sort",
                ) from exc
            normalized.append((field, _direction(direction)))
        object.__setattr__(self, "order", tuple(normalized))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Any]]) -> Sort:
        return cls(tuple(pairs))

    @classmethod
    def from_mapping(cls, order: Mapping[str, Any]) -> Sort:
        return cls(tuple(order.items()))

    @classmethod
    def from_string(cls, order: str) -> Sort:
        """
        Parse a comma-separated field list.

        A ``-`` prefix means descending, e.g. ``"-created_at,name"``.
        """
        pairs = []
        for part in order.split(","):
            part = part.strip()
            if not part:
                continue
            if part.startswith("-"):
                pairs.append((part[1:], SortDirection.DESC))
            else:
                pairs.append((part.lstrip("+"), SortDirection.ASC))
        return cls(tuple(pairs))

    def get_order(self) -> dict[str, str]:
        """Return ``{field: "asc"|"desc"}`` in declaration order."""
        return {field: direction.value for field, direction in self.order}

    def to_string(self) -> str:
        return ",".join(
            f"-{field}" if direction is SortDirection.DESC else field
            for field, direction in self.order
        )

    def __bool__(self) -> bool:
        return bool(self.order)


def _direction(value: Any) -> SortDirection:
    if isinstance(value, SortDirection):
        return value
    try:
        return SortDirection(str(value).lower())
    except ValueError as exc:
        raise InvalidArgumentError(
            f"Sort direction must be 'asc' or 'desc', got {value!r}",
            argument="sort",
        ) from exc
