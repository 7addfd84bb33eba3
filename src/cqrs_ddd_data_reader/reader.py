"""
Lazy, cacheable reader over a query object.

``SelectDataReader`` adds filtering, sorting and pagination on top of a
query that satisfies :class:`~cqrs_ddd_data_reader.query.QueryInterface`
and memoizes counts and result sets.

Every ``with_*`` method returns a new reader. Caches whose inputs changed
are replaced with fresh objects on the new reader; the others are copied,
so populating a cache on one reader never affects another:

============================  =======  ==========  =========
mutator                       count    all items   one item
============================  =======  ==========  =========
``with_limit/with_offset``    kept     reset       kept
``with_sort``                 kept     reset       reset
``with_filter``               reset    reset       reset
``with_filter_processors``    reset    reset       reset
============================  =======  ==========  =========
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .cache import CachedCollection, CachedCount
from .exceptions import InvalidArgumentError
from .filters import FilterExpression
from .processors import build_default_processors, merge_processors
from .query import Countable, FilterPredicate, Paginable
from .sort import Sort

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from .processors import FilterProcessor
    from .query import QueryInterface

logger = logging.getLogger("cqrs_ddd.data_reader")


@dataclass(frozen=True)
class ReaderConfig:
    """
    Immutable reader settings.

    Attributes:
        limit: Maximum number of rows to read.
        offset: Number of rows to skip.
        sort: Ordering applied to ``read``/``read_one``/iteration.
        filter: Filter expression translated into the query predicate.
    """

    limit: int | None = None
    offset: int | None = None
    sort: Sort | None = None
    filter: FilterExpression | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-compatible dictionary."""
        result: dict[str, Any] = {}
        if self.limit is not None:
            result["limit"] = self.limit
        if self.offset is not None:
            result["offset"] = self.offset
        if self.sort is not None:
            result["sort"] = self.sort.to_string()
        if self.filter is not None:
            result["filter"] = self.filter.to_list()
        return result


def _non_negative(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgumentError(
            f"{name} must be a non-negative integer, got {value!r}", argument=name
        )
    return value


class SelectDataReader:
    """
    Reader over a countable, paginable query.

    Args:
        query: The base query. It is never modified; every derived query
            is built from it on demand.

    Raises:
        InvalidArgumentError: If *query* cannot count or paginate.
    """

    def __init__(self, query: QueryInterface) -> None:
        if not isinstance(query, Countable):
            raise InvalidArgumentError(
                f"Query should implement {Countable.__name__} protocol",
                argument="query",
            )
        if not isinstance(query, Paginable):
            raise InvalidArgumentError(
                f"Query should implement {Paginable.__name__} protocol",
                argument="query",
            )
        self._query = query
        self._config = ReaderConfig()
        self._processors: Mapping[str, FilterProcessor] = build_default_processors()
        self._count_cache = CachedCount(self._query)
        self._items_cache = CachedCollection()
        self._one_item_cache = CachedCollection()

    # -- configuration -------------------------------------------------------

    @property
    def config(self) -> ReaderConfig:
        return self._config

    @property
    def limit(self) -> int | None:
        return self._config.limit

    @property
    def offset(self) -> int | None:
        return self._config.offset

    @property
    def filter(self) -> FilterExpression | None:
        return self._config.filter

    @property
    def processors(self) -> Mapping[str, FilterProcessor]:
        return self._processors

    def get_sort(self) -> Sort | None:
        return self._config.sort

    def with_limit(self, limit: int) -> SelectDataReader:
        limit = _non_negative("limit", limit)
        clone = self._clone()
        if clone._config.limit != limit:
            clone._config = replace(clone._config, limit=limit)
            clone._items_cache = CachedCollection()
        return clone

    def with_offset(self, offset: int) -> SelectDataReader:
        offset = _non_negative("offset", offset)
        clone = self._clone()
        if clone._config.offset != offset:
            clone._config = replace(clone._config, offset=offset)
            clone._items_cache = CachedCollection()
        return clone

    def with_sort(
        self, sort: Sort | str | Mapping[str, Any] | Sequence[Any] | None
    ) -> SelectDataReader:
        """
        Return a reader ordered by *sort* (``None`` removes ordering).

        Accepts a :class:`Sort`, a ``"-field,other"`` string, a
        ``{field: direction}`` mapping or a sequence of ``(field, direction)``
        pairs.
        """
        if isinstance(sort, str):
            sort = Sort.from_string(sort)
        elif isinstance(sort, Mapping):
            sort = Sort.from_mapping(sort)
        elif sort is not None and not isinstance(sort, Sort):
            sort = Sort.from_pairs(sort)
        clone = self._clone()
        if clone._config.sort != sort:
            clone._config = replace(clone._config, sort=sort)
            clone._items_cache = CachedCollection()
            clone._one_item_cache = CachedCollection()
        return clone

    def with_filter(
        self,
        filter: FilterExpression | Sequence[Any] | None,  # noqa: A002
    ) -> SelectDataReader:
        """Return a reader restricted by *filter* (expression or list form)."""
        expression = None if filter is None else FilterExpression.from_list(filter)
        clone = self._clone()
        if clone._config.filter is not expression:
            clone._config = replace(clone._config, filter=expression)
            clone._reset_caches()
        return clone

    def with_filter_processors(
        self, *processors: FilterProcessor
    ) -> SelectDataReader:
        """
        Return a reader with *processors* added to the registry.

        Processors for operators already registered are replaced; the
        rest of the registry is kept.
        """
        merged = MappingProxyType(merge_processors(self._processors, *processors))
        clone = self._clone()
        clone._processors = merged
        clone._reset_caches()
        return clone

    # -- reading -------------------------------------------------------------

    def count(self) -> int:
        """Total rows matching the filter, ignoring limit, offset and sort."""
        return self._count_cache.get_count()

    def read(self) -> tuple[Any, ...]:
        collection = self._items_cache.get_collection()
        if collection is not None:
            logger.debug("Items cache hit (%d rows)", len(collection))
            return collection
        items = self.build_query().fetch_all()
        self._items_cache.set_collection(items)
        return self._items_cache.get_collection() or ()

    def read_one(self) -> Any | None:
        """First row, or ``None``. Both outcomes are memoized."""
        if not self._one_item_cache.is_collected():
            if self._items_cache.is_collected():
                item = next(self._items_cache.get_generator(), None)
            else:
                item = _first(iter(self.with_limit(1)))
            self._one_item_cache.set_collection([] if item is None else [item])
        return next(self._one_item_cache.get_generator(), None)

    def __iter__(self) -> Iterator[Any]:
        """Iterate rows without populating any cache."""
        collection = self._items_cache.get_collection()
        if collection is not None:
            yield from collection
        else:
            yield from self.build_query()

    def build_query(self) -> Any:
        """Derive the query: offset, sort, limit and filter applied."""
        query: Any = self._query
        config = self._config
        if config.offset is not None:
            query = query.offset(config.offset)
        if config.sort:
            query = query.order_by(config.sort.get_order())
        if config.limit is not None:
            query = query.limit(config.limit)
        predicate = self._predicate()
        if predicate is not None:
            query = query.and_where(predicate)
        return query

    def __str__(self) -> str:
        return str(self.build_query())

    def __repr__(self) -> str:
        return f"SelectDataReader({self._config.to_dict()!r})"

    # -- internals -----------------------------------------------------------

    def _predicate(self) -> FilterPredicate | None:
        if self._config.filter is None:
            return None
        return FilterPredicate(self._config.filter, self._processors)

    def _reset_caches(self) -> None:
        self._count_cache = CachedCount(self._query, self._predicate())
        self._items_cache = CachedCollection()
        self._one_item_cache = CachedCollection()

    def _clone(self) -> SelectDataReader:
        clone = copy.copy(self)
        clone._count_cache = copy.copy(self._count_cache)
        clone._items_cache = copy.copy(self._items_cache)
        clone._one_item_cache = copy.copy(self._one_item_cache)
        return clone


def _first(iterator: Iterator[Any]) -> Any | None:
    try:
        return next(iterator, None)
    finally:
        close = getattr(iterator, "close", None)
        if close is not None:
            close()
