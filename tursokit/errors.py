"""Error taxonomy for tursokit.

This module contains:
- TransportError: failures of the HTTP exchange itself (status, URL, headers,
  body, timeout, network)
- SqlError and its subclasses: per-statement failures reported by the remote
  SQL engine, produced by classify_sql_error
- CardinalityError: a query result that does not fit the requested shape
- PlatformError and its subclasses: named failures of the platform REST API,
  derived from the HTTP status code only
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, ClassVar

logger = logging.getLogger(__name__)


class TursoError(Exception):
    """Base class for every error raised by tursokit."""


class ConfigurationError(TursoError):
    """Raised when connection settings are missing or malformed."""


class TransportErrorKind(str, enum.Enum):
    BAD_STATUS = "bad_status"
    BAD_URL = "bad_url"
    BAD_HEADERS = "bad_headers"
    BAD_BODY = "bad_body"
    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"


@dataclass
class TransportError(TursoError):
    """Raised when an HTTP exchange fails before a usable body is obtained.

    For BAD_STATUS errors, status_code and body hold the response as received
    so callers can inspect what the service returned.
    """

    kind: TransportErrorKind
    message: str
    status_code: int | None = None
    body: Any = None

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.kind.value} ({self.status_code}): {self.message}"
        return f"{self.kind.value}: {self.message}"


class ResponseDecodeError(TransportError):
    """Raised when a response body does not have the expected shape."""

    def __init__(self, message: str, body: Any = None) -> None:
        super().__init__(TransportErrorKind.BAD_BODY, message, body=body)


@dataclass
class RowDecodeError(TursoError):
    """Raised by a row decoder that cannot turn a row into a value."""

    message: str
    column: str | None = None

    def __str__(self) -> str:
        return self.message


@dataclass
class CardinalityError(TursoError):
    """Raised when a statement returned a number of rows the caller ruled out."""

    message: str
    row_count: int

    def __str__(self) -> str:
        return self.message


# =============================================================================
# SQL execution errors
# =============================================================================


@dataclass
class SqlError(TursoError):
    """A statement failed on the remote engine.

    Attributes:
        code: Error code as reported by the engine
        message: Human readable message
        index: Position of the failing statement in its pipeline
    """

    code: str
    message: str
    index: int | None = None

    def __str__(self) -> str:
        if self.index is None:
            return f"{self.code}: {self.message}"
        return f"statement {self.index}: {self.code}: {self.message}"


class SqlParseError(SqlError):
    """The SQL text could not be parsed."""


class SqlInputError(SqlError):
    """The SQL text was parsed but refers to invalid input."""


class SqlManyStatements(SqlError):
    """More than one statement was sent where a single one is expected."""


class SqliteUnknownError(SqlError):
    """The engine failed with an error it did not classify further."""


class ArgsInvalid(SqlError):
    """The bound arguments do not match the statement."""


@dataclass
class UnknownSqlError(SqlError):
    """The engine reported a code this library does not know.

    ``message`` is ``"Unknown error: <code>"``; the engine's own message, if
    any, is kept in ``detail``.
    """

    detail: str | None = None


SQL_ERROR_CODES: dict[str, type[SqlError]] = {
    "SQL_PARSE_ERROR": SqlParseError,
    "SQL_INPUT_ERROR": SqlInputError,
    "SQL_MANY_STATEMENTS": SqlManyStatements,
    "SQLITE_UNKNOWN_ERROR": SqliteUnknownError,
    "SQLITE_UNKNOWN": SqliteUnknownError,
    "ARGS_INVALID": ArgsInvalid,
}


def classify_sql_error(
    code: str | None, message: str | None = None, index: int | None = None
) -> SqlError:
    """Map a remote error code to its SqlError class.

    Never fails: codes outside SQL_ERROR_CODES become UnknownSqlError.

    Args:
        code: Error code from the statement result
        message: Error message from the statement result
        index: Position of the statement in its pipeline

    Returns:
        SqlError instance (not raised)
    """
    error_class = SQL_ERROR_CODES.get(code or "")
    if error_class is None:
        logger.warning("Unrecognised SQL error code %r: %s", code, message)
        return UnknownSqlError(
            code=code or "",
            message=f"Unknown error: {code or message}",
            index=index,
            detail=message,
        )
    return error_class(code=code, message=message or code, index=index)


# =============================================================================
# Platform API errors
# =============================================================================


@dataclass
class PlatformError(TursoError):
    """A platform API call failed with a status code that has a meaning."""

    template: ClassVar[str] = "{resource}: platform request failed"

    resource: str
    message: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = self.template.format(resource=self.resource)

    def __str__(self) -> str:
        return self.message


class DatabaseNotFoundError(PlatformError):
    template = "database {resource!r} not found"


class DatabaseAlreadyExistsError(PlatformError):
    template = "database {resource!r} already exists"


class InvalidDatabaseError(PlatformError):
    template = "database {resource!r} was rejected as invalid"


class GroupNotFoundError(PlatformError):
    template = "group {resource!r} not found"


class GroupAlreadyExistsError(PlatformError):
    template = "group {resource!r} already exists"


class ApiTokenNotFoundError(PlatformError):
    template = "API token {resource!r} not found"


class ApiTokenAlreadyExistsError(PlatformError):
    template = "API token {resource!r} already exists"


class InvalidApiTokenError(PlatformError):
    template = "API token for {resource!r} is invalid or expired"
