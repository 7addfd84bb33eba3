"""Shared fixtures for data reader tests."""

from __future__ import annotations

from dataclasses import dataclass, replace
from operator import itemgetter
from typing import Any

import pytest
from sqlalchemy import Column, Integer, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Session

from cqrs_ddd_data_reader.query import PredicateBuilder


@dataclass
class CallLog:
    """Counts executions against the stub engine."""

    count: int = 0
    fetch_all: int = 0
    iterate: int = 0

    @property
    def total(self) -> int:
        return self.count + self.fetch_all + self.iterate


@dataclass(frozen=True)
class StubQuery:
    """
    In-memory query engine honouring the reader's query contract.

    Offset, limit and ordering are applied to ``rows``. Filter predicates
    are translated and recorded in ``clauses`` but not evaluated.
    """

    rows: tuple[dict[str, Any], ...]
    calls: CallLog
    offset_value: int | None = None
    limit_value: int | None = None
    order: tuple[tuple[str, str], ...] = ()
    clauses: tuple[Any, ...] = ()

    def offset(self, offset: int) -> StubQuery:
        return replace(self, offset_value=offset)

    def limit(self, limit: int) -> StubQuery:
        return replace(self, limit_value=limit)

    def order_by(self, order: dict[str, str]) -> StubQuery:
        return replace(self, order=tuple(order.items()))

    def and_where(self, predicate: Any) -> StubQuery:
        builder = PredicateBuilder()
        predicate(builder)
        return replace(self, clauses=self.clauses + builder.clauses)

    def count(self) -> int:
        self.calls.count += 1
        return len(self.rows)

    def fetch_all(self) -> list[dict[str, Any]]:
        self.calls.fetch_all += 1
        return self._select()

    def __iter__(self):
        self.calls.iterate += 1
        yield from self._select()

    def compiled_clauses(self) -> list[str]:
        return [
            str(c.compile(compile_kwargs={"literal_binds": True}))
            for c in self.clauses
        ]

    def _select(self) -> list[dict[str, Any]]:
        rows = list(self.rows)
        for field, direction in reversed(self.order):
            rows.sort(key=itemgetter(field), reverse=direction == "desc")
        start = self.offset_value or 0
        end = None if self.limit_value is None else start + self.limit_value
        return rows[start:end]

    def __str__(self) -> str:
        parts = ["SELECT * FROM stub"]
        if self.clauses:
            parts.append("WHERE " + " AND ".join(self.compiled_clauses()))
        if self.order:
            parts.append(
                "ORDER BY " + ", ".join(f"{f} {d.upper()}" for f, d in self.order)
            )
        if self.limit_value is not None:
            parts.append(f"LIMIT {self.limit_value}")
        if self.offset_value is not None:
            parts.append(f"OFFSET {self.offset_value}")
        return " ".join(parts)


USERS: tuple[dict[str, Any], ...] = (
    {"id": 1, "name": "alice", "status": "active", "age": 31},
    {"id": 2, "name": "bob", "status": "inactive", "age": 45},
    {"id": 3, "name": "carol", "status": "active", "age": 27},
    {"id": 4, "name": "dave", "status": "active", "age": 38},
    {"id": 5, "name": "erin", "status": "banned", "age": 22},
)


@pytest.fixture
def calls() -> CallLog:
    return CallLog()


@pytest.fixture
def stub_query(calls: CallLog) -> StubQuery:
    return StubQuery(rows=USERS, calls=calls)


@pytest.fixture
def empty_query(calls: CallLog) -> StubQuery:
    return StubQuery(rows=(), calls=calls)


# -- SQLAlchemy --------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class UserRecord(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    name = Column(String)
    status = Column(String)
    age = Column(Integer)


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as db_session:
        db_session.add_all([UserRecord(**row) for row in USERS])
        db_session.commit()
        yield db_session
    engine.dispose()


@pytest.fixture
def user_model() -> type[UserRecord]:
    return UserRecord
