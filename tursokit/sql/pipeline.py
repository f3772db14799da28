"""Pipeline request framing and response decoding.

A pipeline request carries one ``execute`` request per statement:

    {"requests": [{"type": "execute", "stmt": {"sql": ..., "named_args": [...]}}, ...]}

and the response carries one result per request, in the same order:

    {
        "baton": ...,
        "base_url": ...,
        "results": [
            {"type": "ok", "response": {"type": "execute", "result": {
                "cols": [{"name": ..., "decltype": ...}],
                "rows": [[{"type": ..., "value": ...}, ...]],
                "affected_row_count": ...,
                "last_insert_rowid": ...,
            }}},
            {"type": "error", "error": {"code": ..., "message": ...}},
        ],
    }

Decoding is all or nothing: a result that does not have this shape, a result
count that differs from the statement count, or a row the caller's decoder
rejects fails the whole batch with ResponseDecodeError. SQL errors reported by
the engine are not failures of the batch; they are classified and returned in
place of that statement's rows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Sequence, TypeVar, Union

from ..errors import ResponseDecodeError, RowDecodeError, SqlError, classify_sql_error
from .decoders import RowDecoder, decode_row
from .statement import Query, Statement

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Column:
    """A result column. ``declared_type`` is informational only."""

    name: str
    declared_type: str | None = None


@dataclass(frozen=True)
class Cell:
    """One value of a result row with the type tag it was sent with."""

    wire_type: str
    value: Any = None


@dataclass(frozen=True)
class StatementSuccess(Generic[T]):
    affected_row_count: int
    last_insert_rowid: str | None
    rows: list[T] = field(default_factory=list)
    columns: list[Column] = field(default_factory=list)


StatementOutcome = Union[StatementSuccess[Any], SqlError]


@dataclass(frozen=True)
class BatchResult:
    """Outcomes of a pipeline, one per statement in request order.

    The baton is parsed for completeness but is never sent back: every
    pipeline runs on a fresh stream.
    """

    outcomes: list[StatementOutcome]
    continuation_token: str | None = None
    base_url: str | None = None


def build_pipeline_request(statements: Sequence[Statement | Query[Any]]) -> dict[str, Any]:
    return {"requests": [statement.to_request() for statement in statements]}


def decode_pipeline_response(body: Any, decoders: Sequence[RowDecoder[Any]]) -> BatchResult:
    """Decode a pipeline response body.

    Args:
        body: Parsed JSON body of the response
        decoders: Row decoder of each submitted statement, in request order

    Returns:
        BatchResult with exactly ``len(decoders)`` outcomes

    Raises:
        ResponseDecodeError: If the body is malformed, the number of results
            differs from the number of statements, or a row cannot be decoded
    """
    if not isinstance(body, dict):
        raise ResponseDecodeError("pipeline response is not a JSON object", body)

    results = body.get("results")
    if not isinstance(results, list):
        raise ResponseDecodeError("pipeline response has no results array", body)
    if len(results) != len(decoders):
        raise ResponseDecodeError(
            f"pipeline response has {len(results)} results for {len(decoders)} statements",
            body,
        )

    outcomes = [
        _decode_outcome(index, item, decoder)
        for index, (item, decoder) in enumerate(zip(results, decoders))
    ]
    logger.debug(
        "Decoded pipeline response: %d outcome(s), %d error(s)",
        len(outcomes),
        sum(isinstance(outcome, SqlError) for outcome in outcomes),
    )

    return BatchResult(
        outcomes=outcomes,
        continuation_token=_optional_str(body, "baton", "pipeline response"),
        base_url=_optional_str(body, "base_url", "pipeline response"),
    )


def _decode_outcome(index: int, item: Any, decoder: RowDecoder[Any]) -> StatementOutcome:
    where = f"result {index}"
    if not isinstance(item, dict):
        raise ResponseDecodeError(f"{where} is not a JSON object", item)

    # Older servers leave out the discriminant; fall back to which key is present
    kind = item.get("type")
    if kind is None:
        kind = "error" if "error" in item else "ok"

    if kind == "error":
        error = _require(item, "error", dict, where)
        return classify_sql_error(
            _optional_str(error, "code", where),
            _optional_str(error, "message", where),
            index=index,
        )
    if kind != "ok":
        raise ResponseDecodeError(f"{where} has unknown type {kind!r}", item)

    response = _require(item, "response", dict, where)
    result = _require(response, "result", dict, where)
    return _decode_success(index, result, decoder)


def _decode_success(index: int, result: dict[str, Any], decoder: RowDecoder[Any]) -> StatementSuccess[Any]:
    where = f"result {index}"
    columns = [_decode_column(raw, where) for raw in _require(result, "cols", list, where)]
    names = [column.name for column in columns]

    affected_row_count = result.get("affected_row_count")
    if not isinstance(affected_row_count, int) or isinstance(affected_row_count, bool):
        raise ResponseDecodeError(f"{where} has no integer affected_row_count", result)

    last_insert_rowid = result.get("last_insert_rowid")
    if isinstance(last_insert_rowid, int) and not isinstance(last_insert_rowid, bool):
        last_insert_rowid = str(last_insert_rowid)
    elif last_insert_rowid is not None and not isinstance(last_insert_rowid, str):
        raise ResponseDecodeError(f"{where} has a malformed last_insert_rowid", result)

    rows = []
    for raw_row in _require(result, "rows", list, where):
        if not isinstance(raw_row, list):
            raise ResponseDecodeError(f"{where} has a row that is not an array", raw_row)
        cells = [_decode_cell(raw, where) for raw in raw_row]
        try:
            rows.append(decode_row(decoder, names, [cell.value for cell in cells]))
        except RowDecodeError as e:
            raise ResponseDecodeError(
                f"could not decode rows of statement {index} with passed decoder: {e}",
                result,
            ) from e

    return StatementSuccess(
        affected_row_count=affected_row_count,
        last_insert_rowid=last_insert_rowid,
        rows=rows,
        columns=columns,
    )


def _decode_column(raw: Any, where: str) -> Column:
    if not isinstance(raw, dict):
        raise ResponseDecodeError(f"{where} has a column that is not an object", raw)
    return Column(
        name=_optional_str(raw, "name", where) or "",
        declared_type=_optional_str(raw, "decltype", where),
    )


def _decode_cell(raw: Any, where: str) -> Cell:
    if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
        raise ResponseDecodeError(f"{where} has a malformed cell", raw)

    wire_type = raw["type"]
    if wire_type == "null":
        return Cell(wire_type)
    if wire_type == "blob":
        return Cell(wire_type, raw.get("base64", raw.get("value")))
    return Cell(wire_type, raw.get("value"))


def _require(mapping: dict[str, Any], key: str, kind: type, where: str) -> Any:
    value = mapping.get(key)
    if not isinstance(value, kind):
        raise ResponseDecodeError(f"{where} is missing {key!r}", mapping)
    return value


def _optional_str(mapping: dict[str, Any], key: str, where: str) -> str | None:
    value = mapping.get(key)
    if value is not None and not isinstance(value, str):
        raise ResponseDecodeError(f"{where} has a non-string {key!r}", mapping)
    return value
