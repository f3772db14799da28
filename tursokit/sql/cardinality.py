"""Reduce a statement outcome to the number of rows the caller asked for.

Three policies share the same input, one StatementOutcome:

- exactly_one: one row, anything else is a CardinalityError
- zero_or_one: no row gives None, one row gives that row
- all_rows: the rows as returned, in engine order

zero_or_one also gives None when the statement returned more than one row.
It does not check uniqueness; a query that must match at most one row should
say so in SQL (LIMIT 1, a unique constraint).

Every policy keeps affected_row_count and last_insert_rowid of the outcome.
An outcome that is an SqlError is raised.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..errors import CardinalityError, SqlError
from .pipeline import StatementOutcome, StatementSuccess

T = TypeVar("T")


class Cardinality(enum.Enum):
    ONE = "one"
    MAYBE_ONE = "maybe_one"
    ALL = "all"


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    value: T
    affected_row_count: int
    last_insert_rowid: str | None


@dataclass(frozen=True)
class ExecuteResult:
    affected_row_count: int
    last_insert_rowid: str | None


def _success(outcome: StatementOutcome) -> StatementSuccess[Any]:
    if isinstance(outcome, SqlError):
        raise outcome
    return outcome


def _result(success: StatementSuccess[Any], value: T) -> QueryResult[T]:
    return QueryResult(
        value=value,
        affected_row_count=success.affected_row_count,
        last_insert_rowid=success.last_insert_rowid,
    )


def exactly_one(outcome: StatementOutcome) -> QueryResult[Any]:
    success = _success(outcome)
    if not success.rows:
        raise CardinalityError("no results", row_count=0)
    if len(success.rows) > 1:
        raise CardinalityError(
            f"expected exactly one row, got {len(success.rows)}",
            row_count=len(success.rows),
        )
    return _result(success, success.rows[0])


def zero_or_one(outcome: StatementOutcome) -> QueryResult[Any]:
    success = _success(outcome)
    if len(success.rows) == 1:
        return _result(success, success.rows[0])
    return _result(success, None)


def all_rows(outcome: StatementOutcome) -> QueryResult[list[Any]]:
    success = _success(outcome)
    return _result(success, list(success.rows))


def execute_result(outcome: StatementOutcome) -> ExecuteResult:
    success = _success(outcome)
    return ExecuteResult(
        affected_row_count=success.affected_row_count,
        last_insert_rowid=success.last_insert_rowid,
    )


_POLICIES = {
    Cardinality.ONE: exactly_one,
    Cardinality.MAYBE_ONE: zero_or_one,
    Cardinality.ALL: all_rows,
}


def reduce_outcome(outcome: StatementOutcome, cardinality: Cardinality) -> QueryResult[Any]:
    return _POLICIES[cardinality](outcome)
