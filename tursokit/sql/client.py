"""SQL operations against a database's pipeline endpoint.

Every function sends exactly one POST to ``/v2/pipeline`` and takes the
DatabaseConnection to use as its first argument.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence, TypeVar

from ..config import DatabaseConnection
from ..errors import SqlError
from ..transport import bearer_headers
from .cardinality import (
    Cardinality,
    ExecuteResult,
    QueryResult,
    all_rows,
    exactly_one,
    execute_result,
    reduce_outcome,
    zero_or_one,
)
from .pipeline import BatchResult, build_pipeline_request, decode_pipeline_response
from .statement import Query, Statement

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def batch(
    connection: DatabaseConnection, statements: Sequence[Statement | Query[Any]]
) -> BatchResult:
    """Run statements in order in one pipeline.

    SQL errors do not raise here: each failing statement is represented by
    its SqlError in ``outcomes``.

    Raises:
        TransportError: If the request fails or the response cannot be decoded
    """
    statements = list(statements)
    if not statements:
        raise ValueError("batch() needs at least one statement")

    logger.debug(
        "Sending %d statement(s) to %s", len(statements), connection.hostname
    )
    response = await connection.transport.send(
        "POST",
        connection.pipeline_url,
        bearer_headers(connection.token),
        build_pipeline_request(statements),
    )
    return decode_pipeline_response(
        response.body, [statement.decoder for statement in statements]
    )


async def execute(connection: DatabaseConnection, statement: Statement) -> ExecuteResult:
    """Run one statement and report how many rows it changed."""
    result = await batch(connection, [statement])
    return execute_result(result.outcomes[0])


async def query(
    connection: DatabaseConnection, query: Query[T], cardinality: Cardinality
) -> QueryResult[Any]:
    result = await batch(connection, [query])
    return reduce_outcome(result.outcomes[0], cardinality)


async def query_one(connection: DatabaseConnection, query: Query[T]) -> QueryResult[T]:
    """Run a query that must return exactly one row.

    Raises:
        CardinalityError: If the query returned no row or several rows
        SqlError: If the engine rejected the statement
    """
    result = await batch(connection, [query])
    return exactly_one(result.outcomes[0])


async def query_maybe_one(
    connection: DatabaseConnection, query: Query[T]
) -> QueryResult[T | None]:
    """Run a query returning at most one row.

    The value is None when there is no row, and also when there is more than
    one; see tursokit.sql.cardinality.
    """
    result = await batch(connection, [query])
    return zero_or_one(result.outcomes[0])


async def query_all(connection: DatabaseConnection, query: Query[T]) -> QueryResult[list[T]]:
    result = await batch(connection, [query])
    return all_rows(result.outcomes[0])


async def transaction(
    connection: DatabaseConnection,
    queries: Sequence[Query[Any]],
    cardinality: Cardinality = Cardinality.ALL,
) -> list[QueryResult[Any]]:
    """Run queries in one pipeline and reduce each outcome with ``cardinality``.

    The statements run in order on one stream. The engine does not undo
    earlier statements when a later one fails unless the SQL itself opens a
    transaction (BEGIN ... COMMIT).

    Raises:
        SqlError: The first failing statement, in request order
    """
    result = await batch(connection, queries)
    for outcome in result.outcomes:
        if isinstance(outcome, SqlError):
            raise outcome
    return [reduce_outcome(outcome, cardinality) for outcome in result.outcomes]
