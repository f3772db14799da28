"""Row decoders.

A row decoder turns one result row, given as a ``column name -> wire value``
mapping, into a Python value. There are two kinds:

- FieldDecoder reads a single named column and parses its value
- WholeRowDecoder looks at the row as a whole; combinators build these

Building decoders does no work. Nothing runs until ``decode`` is called with a
row, so decoders can be defined once at module level and reused.

Field decoders are lenient about numbers: the engine sends integers as
strings most of the time but not always, so ``integer``, ``real`` and
``posix`` accept both a JSON number and a numeric string.

Example::

    user = combine(
        User,
        integer("id"),
        text("name"),
        maybe(posix, "deleted_at"),
    )
"""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from ..errors import RowDecodeError
from .values import from_millis

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")

Row = Mapping[str, Any]

_INTEGER_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

_BOOLEANS = {"1": True, "0": False, "TRUE": True, "FALSE": False}


class RowDecoder(Generic[T]):
    """Base class of the two decoder kinds."""

    def decode(self, row: Row) -> T:
        raise NotImplementedError

    def map(self, fn: Callable[[T], U]) -> RowDecoder[U]:
        """Transform the decoded value."""
        return WholeRowDecoder(lambda row: fn(self.decode(row)))

    def and_then(self, fn: Callable[[T], RowDecoder[U]]) -> RowDecoder[U]:
        """Pick the next decoder based on this decoder's result.

        Both decoders run against the same row, which allows checking one
        column against another.
        """
        return WholeRowDecoder(lambda row: fn(self.decode(row)).decode(row))


@dataclass(frozen=True)
class WholeRowDecoder(RowDecoder[T]):
    run: Callable[[Row], T]

    def decode(self, row: Row) -> T:
        return self.run(row)


@dataclass(frozen=True)
class FieldDecoder(RowDecoder[T]):
    """Decoder bound to one column.

    ``parse`` receives the raw wire value and signals failure by raising
    ValueError or TypeError. OverflowError from values outside the range of
    the target type is reported the same way.
    """

    name: str
    parse: Callable[[Any], T]

    def decode(self, row: Row) -> T:
        try:
            raw = row[self.name]
        except KeyError:
            raise RowDecodeError(
                f"column {self.name!r} is missing from the row", column=self.name
            ) from None

        try:
            return self.parse(raw)
        except RowDecodeError as e:
            raise RowDecodeError(f"column {self.name!r}: {e}", column=self.name) from e
        except (TypeError, ValueError, OverflowError) as e:
            raise RowDecodeError(f"column {self.name!r}: {e}", column=self.name) from e


# =============================================================================
# Value parsers
# =============================================================================


def _is_number(raw: Any) -> bool:
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def parse_text(raw: Any) -> str:
    if isinstance(raw, str):
        return raw
    raise TypeError(f"expected text, got {raw!r}")


def parse_integer(raw: Any) -> int:
    if _is_number(raw):
        if isinstance(raw, int):
            return raw
        if raw.is_integer():
            return int(raw)
    elif isinstance(raw, str) and _INTEGER_RE.fullmatch(raw):
        return int(raw)
    raise ValueError(f"expected an integer, got {raw!r}")


def parse_real(raw: Any) -> float:
    if _is_number(raw):
        return float(raw)
    if isinstance(raw, str) and _FLOAT_RE.fullmatch(raw):
        return float(raw)
    raise ValueError(f"expected a number, got {raw!r}")


def parse_boolean(raw: Any) -> bool:
    if _is_number(raw) and isinstance(raw, int) and raw in (0, 1):
        return raw == 1
    if isinstance(raw, str) and raw in _BOOLEANS:
        return _BOOLEANS[raw]
    raise ValueError(f"expected one of 1, 0, '1', '0', 'TRUE', 'FALSE', got {raw!r}")


def parse_posix(raw: Any) -> datetime:
    try:
        millis = parse_integer(raw)
    except ValueError:
        raise ValueError(f"expected milliseconds since the epoch, got {raw!r}") from None
    return from_millis(millis)


def parse_blob(raw: Any) -> bytes:
    if not isinstance(raw, str):
        raise TypeError(f"expected base64 text, got {raw!r}")
    return base64.b64decode(raw, validate=True)


# =============================================================================
# Field decoders
# =============================================================================


def field(name: str, parse: Callable[[Any], T]) -> FieldDecoder[T]:
    """Decode column ``name`` with a custom parser."""
    return FieldDecoder(name, parse)


def text(name: str) -> FieldDecoder[str]:
    return FieldDecoder(name, parse_text)


def integer(name: str) -> FieldDecoder[int]:
    return FieldDecoder(name, parse_integer)


def real(name: str) -> FieldDecoder[float]:
    return FieldDecoder(name, parse_real)


def boolean(name: str) -> FieldDecoder[bool]:
    return FieldDecoder(name, parse_boolean)


def posix(name: str) -> FieldDecoder[datetime]:
    return FieldDecoder(name, parse_posix)


def blob(name: str) -> FieldDecoder[bytes]:
    return FieldDecoder(name, parse_blob)


def maybe(builder: Callable[[str], FieldDecoder[T]], name: str) -> FieldDecoder[T | None]:
    """Let column ``name`` be NULL.

    NULL decodes to None; any other value must satisfy the decoder that
    ``builder`` returns for the column.
    """
    inner = builder(name)

    def parse(raw: Any) -> T | None:
        if raw is None:
            return None
        return inner.parse(raw)

    return FieldDecoder(name, parse)


# =============================================================================
# Combinators
# =============================================================================


def succeed(value: T) -> RowDecoder[T]:
    """Decoder that ignores the row and returns ``value``."""
    return WholeRowDecoder(lambda row: value)


def fail(message: str) -> RowDecoder[Any]:
    """Decoder that always fails with ``message``."""

    def run(row: Row) -> Any:
        raise RowDecodeError(message)

    return WholeRowDecoder(run)


def and_then(fn: Callable[[T], RowDecoder[U]], decoder: RowDecoder[T]) -> RowDecoder[U]:
    return decoder.and_then(fn)


def combine(fn: Callable[..., R], *decoders: RowDecoder[Any]) -> RowDecoder[R]:
    """Run every decoder on the same row and pass the results to ``fn``.

    Decoders run left to right; the first failure stops the others and is
    raised unchanged.
    """

    def run(row: Row) -> R:
        return fn(*[decoder.decode(row) for decoder in decoders])

    return WholeRowDecoder(run)


def record(cls: Callable[..., R], **fields: RowDecoder[Any]) -> RowDecoder[R]:
    """Like combine, but results are passed to ``cls`` as keyword arguments."""

    def run(row: Row) -> R:
        return cls(**{key: decoder.decode(row) for key, decoder in fields.items()})

    return WholeRowDecoder(run)


def row() -> RowDecoder[dict[str, Any]]:
    """Decoder returning the row itself as a dict of raw wire values."""
    return WholeRowDecoder(dict)


def decode_row(decoder: RowDecoder[T], columns: Sequence[str], values: Sequence[Any]) -> T:
    """Key ``values`` by column name and run ``decoder`` on the result.

    Raises:
        RowDecodeError: If the row does not line up with the columns or the
            decoder fails
    """
    if len(columns) != len(values):
        raise RowDecodeError(
            f"row has {len(values)} values but the result has {len(columns)} columns"
        )
    return decoder.decode(dict(zip(columns, values)))
