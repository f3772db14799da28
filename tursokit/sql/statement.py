"""Statements and queries sent through the SQL pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, TypeVar

from .decoders import RowDecoder, row
from .values import Value

T = TypeVar("T")


def _execute_request(sql: str, params: Iterable[Value]) -> dict[str, Any]:
    return {
        "type": "execute",
        "stmt": {
            "sql": sql,
            "named_args": [param.to_named_arg() for param in params],
        },
    }


@dataclass(frozen=True)
class Statement:
    """SQL text and parameters; any rows it returns are kept undecoded."""

    sql: str
    params: tuple[Value, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))

    @property
    def decoder(self) -> RowDecoder[dict[str, Any]]:
        return row()

    def to_request(self) -> dict[str, Any]:
        return _execute_request(self.sql, self.params)


@dataclass(frozen=True)
class Query(Generic[T]):
    """SQL text, parameters and the decoder its rows go through.

    Example::

        Query(
            "SELECT id, name FROM users WHERE id = :id",
            combine(User, decoders.integer("id"), decoders.text("name")),
            [values.integer("id", 42)],
        )
    """

    sql: str
    decoder: RowDecoder[T]
    params: tuple[Value, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))

    def to_request(self) -> dict[str, Any]:
        return _execute_request(self.sql, self.params)
