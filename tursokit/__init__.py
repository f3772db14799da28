from .config import DatabaseConnection, PlatformConnection
from .errors import (
    ApiTokenAlreadyExistsError,
    ApiTokenNotFoundError,
    ArgsInvalid,
    CardinalityError,
    ConfigurationError,
    DatabaseAlreadyExistsError,
    DatabaseNotFoundError,
    GroupAlreadyExistsError,
    GroupNotFoundError,
    InvalidApiTokenError,
    InvalidDatabaseError,
    PlatformError,
    ResponseDecodeError,
    RowDecodeError,
    SqlError,
    SqlInputError,
    SqliteUnknownError,
    SqlManyStatements,
    SqlParseError,
    TransportError,
    TransportErrorKind,
    TursoError,
    UnknownSqlError,
    classify_sql_error,
)
from .transport import HttpResponse, HttpTransport, Transport

__all__ = [
    # Connections
    "DatabaseConnection",
    "PlatformConnection",
    # Transport
    "HttpResponse",
    "HttpTransport",
    "Transport",
    # Errors
    "TursoError",
    "ConfigurationError",
    "TransportError",
    "TransportErrorKind",
    "ResponseDecodeError",
    "RowDecodeError",
    "CardinalityError",
    "SqlError",
    "SqlParseError",
    "SqlInputError",
    "SqlManyStatements",
    "SqliteUnknownError",
    "ArgsInvalid",
    "UnknownSqlError",
    "classify_sql_error",
    "PlatformError",
    "DatabaseNotFoundError",
    "DatabaseAlreadyExistsError",
    "InvalidDatabaseError",
    "GroupNotFoundError",
    "GroupAlreadyExistsError",
    "ApiTokenNotFoundError",
    "ApiTokenAlreadyExistsError",
    "InvalidApiTokenError",
]
