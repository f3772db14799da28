"""SQL pipeline client.

Modules:
    values: Encoding of statement parameters
    decoders: Row decoders and combinators
    statement: Statement and Query
    pipeline: Pipeline request framing and response decoding
    cardinality: Exactly-one / zero-or-one / all reductions
    client: Operations against a database's pipeline endpoint
"""

from . import decoders, values
from .cardinality import Cardinality, ExecuteResult, QueryResult
from .client import (
    batch,
    execute,
    query,
    query_all,
    query_maybe_one,
    query_one,
    transaction,
)
from .decoders import FieldDecoder, RowDecoder, WholeRowDecoder
from .pipeline import BatchResult, Cell, Column, StatementOutcome, StatementSuccess
from .statement import Query, Statement
from .values import Value, WireType

__all__ = [
    # Submodules
    "decoders",
    "values",
    # Operations
    "batch",
    "execute",
    "query",
    "query_all",
    "query_maybe_one",
    "query_one",
    "transaction",
    # Statements
    "Query",
    "Statement",
    "Value",
    "WireType",
    # Decoders
    "FieldDecoder",
    "RowDecoder",
    "WholeRowDecoder",
    # Results
    "BatchResult",
    "Cardinality",
    "Cell",
    "Column",
    "ExecuteResult",
    "QueryResult",
    "StatementOutcome",
    "StatementSuccess",
]
