"""Result caches owned by a single reader instance."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .query import Countable, FilterPredicate

logger = logging.getLogger("cqrs_ddd.data_reader.cache")


class CachedCount:
    """
    Memoized row count for one query shape.

    The count query is built from the base query and the filter only;
    limit, offset and sort do not affect it. At most one count query is
    executed per instance.
    """

    def __init__(
        self,
        query: Countable,
        predicate: FilterPredicate | None = None,
    ) -> None:
        self._query = query
        self._predicate = predicate
        self._count: int | None = None

    def get_count(self) -> int:
        if self._count is None:
            query: Any = self._query
            if self._predicate is not None:
                query = query.and_where(self._predicate)
            self._count = int(query.count())
            logger.debug("Count query executed: %d", self._count)
        return self._count

    def is_counted(self) -> bool:
        return self._count is not None


class CachedCollection:
    """
    Memoized result set.

    ``None`` means "not collected yet"; an empty tuple is a collected,
    empty result.
    """

    def __init__(self) -> None:
        self._collection: tuple[Any, ...] | None = None

    def set_collection(self, items: Iterable[Any]) -> None:
        self._collection = tuple(items)

    def get_collection(self) -> tuple[Any, ...] | None:
        return self._collection

    def is_collected(self) -> bool:
        return self._collection is not None

    def get_generator(self) -> Iterator[Any]:
        """Iterate the cached items from the start."""
        yield from self._collection or ()
