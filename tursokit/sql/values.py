"""Encoding of statement parameters into pipeline wire values.

The pipeline protocol wants every non-null scalar as a JSON string; the type
tag tells the engine how to read the string back. Booleans have no wire type
of their own and travel as "1"/"0" text, timestamps as integer milliseconds
since the epoch.
"""

from __future__ import annotations

import base64
import enum
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, TypeVar

V = TypeVar("V")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


class WireType(str, enum.Enum):
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    NULL = "null"
    BLOB = "blob"


@dataclass(frozen=True)
class Value:
    """A named parameter ready to be bound to a statement."""

    key: str
    wire_value: str | None
    wire_type: WireType

    def to_named_arg(self) -> dict[str, Any]:
        """Render as an entry of a statement's ``named_args``."""
        if self.wire_type is WireType.NULL:
            value: dict[str, Any] = {"type": "null"}
        elif self.wire_type is WireType.BLOB:
            value = {"type": "blob", "base64": self.wire_value}
        else:
            value = {"type": self.wire_type.value, "value": self.wire_value}
        return {"name": self.key, "value": value}


def to_millis(value: datetime) -> int:
    """Milliseconds since the epoch. Naive datetimes are read as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // _MILLISECOND


def from_millis(millis: int) -> datetime:
    """Inverse of to_millis, always UTC-aware."""
    return EPOCH + timedelta(milliseconds=millis)


def text(name: str, value: str) -> Value:
    return Value(name, value, WireType.TEXT)


def integer(name: str, value: int) -> Value:
    return Value(name, str(value), WireType.INTEGER)


def real(name: str, value: float) -> Value:
    if not math.isfinite(value):
        raise ValueError(f"{name}: cannot encode non-finite float {value!r}")
    # repr() gives the shortest string that reads back as the same float
    return Value(name, repr(float(value)), WireType.FLOAT)


def boolean(name: str, value: bool) -> Value:
    return Value(name, "1" if value else "0", WireType.TEXT)


def posix(name: str, value: datetime) -> Value:
    return Value(name, str(to_millis(value)), WireType.INTEGER)


def null(name: str) -> Value:
    return Value(name, None, WireType.NULL)


def blob(name: str, value: bytes) -> Value:
    return Value(name, base64.b64encode(value).decode("ascii"), WireType.BLOB)


def nullable(encoder: Callable[[str, V], Value], name: str, value: V | None) -> Value:
    """Encode ``value`` with ``encoder``, or as null when it is None.

    Example::

        nullable(integer, "parent_id", row.parent_id)
    """
    if value is None:
        return null(name)
    return encoder(name, value)
