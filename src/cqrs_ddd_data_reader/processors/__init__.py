"""
Filter processors and the default registry.

Usage::

    from cqrs_ddd_data_reader.processors import build_default_processors

    processors = build_default_processors()
    clauses = builder.translate(["equals", "status", "active"], processors)
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from .comparison import (
    ComparisonProcessor,
    Equals,
    GreaterThan,
    GreaterThanOrEqual,
    LessThan,
    LessThanOrEqual,
)
from .logical import All, Any_, Not
from .set import In
from .string import Like
from .strategy import FilterProcessor, merge_processors

if TYPE_CHECKING:
    from collections.abc import Mapping


def build_default_processors() -> Mapping[str, FilterProcessor]:
    """Create the read-only registry of built-in processors."""
    return MappingProxyType(
        merge_processors(
            {},
            All(),
            Any_(),
            Equals(),
            GreaterThan(),
            GreaterThanOrEqual(),
            In(),
            LessThan(),
            LessThanOrEqual(),
            Like(),
        )
    )


__all__ = [
    "All",
    "Any_",
    "ComparisonProcessor",
    "Equals",
    "FilterProcessor",
    "GreaterThan",
    "GreaterThanOrEqual",
    "In",
    "LessThan",
    "LessThanOrEqual",
    "Like",
    "Not",
    "build_default_processors",
    "merge_processors",
]
