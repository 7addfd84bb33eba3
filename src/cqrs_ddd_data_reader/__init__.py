"""Lazy, cacheable query-result reader with pluggable filter processors."""

from __future__ import annotations

from .cache import CachedCollection, CachedCount
from .exceptions import (
    DataReaderError,
    InvalidArgumentError,
    UnsupportedOperatorError,
)
from .filters import (
    FilterExpression,
    FilterOperator,
    all_of,
    any_of,
    equals,
    greater_than,
    greater_than_or_equal,
    in_,
    less_than,
    less_than_or_equal,
    like,
    not_,
)
from .processors import FilterProcessor, build_default_processors
from .query import (
    Countable,
    FilterPredicate,
    Paginable,
    PredicateBuilder,
    QueryInterface,
)
from .reader import ReaderConfig, SelectDataReader
from .select_query import SelectQuery
from .sort import Sort, SortDirection

__all__ = [
    # Reader
    "SelectDataReader",
    "ReaderConfig",
    # Query contract
    "Countable",
    "Paginable",
    "QueryInterface",
    "PredicateBuilder",
    "FilterPredicate",
    "SelectQuery",
    # Filters
    "FilterExpression",
    "FilterOperator",
    "all_of",
    "any_of",
    "equals",
    "greater_than",
    "greater_than_or_equal",
    "in_",
    "less_than",
    "less_than_or_equal",
    "like",
    "not_",
    # Processors
    "FilterProcessor",
    "build_default_processors",
    # Sort
    "Sort",
    "SortDirection",
    # Caches
    "CachedCount",
    "CachedCollection",
    # Exceptions
    "DataReaderError",
    "InvalidArgumentError",
    "UnsupportedOperatorError",
]
