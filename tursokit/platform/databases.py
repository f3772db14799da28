"""Database operations of the platform API.

Endpoints (under /v1/organizations/{org}):
    GET    /databases                      - list_databases
    POST   /databases                      - create_database
    GET    /databases/{name}               - retrieve_database
    DELETE /databases/{name}               - delete_database
    GET    /databases/{name}/usage         - retrieve_database_usage
    GET    /databases/{name}/stats         - retrieve_database_stats
    POST   /databases/{name}/auth/tokens   - create_database_token
    POST   /databases/{name}/auth/rotate   - invalidate_database_tokens
"""

from __future__ import annotations

import enum
from typing import Any

from ..config import PlatformConnection
from ..errors import (
    DatabaseAlreadyExistsError,
    DatabaseNotFoundError,
    InvalidDatabaseError,
)
from .client import organization_path, request
from .models import CreatedDatabase, Database, DatabaseStats, DatabaseUsage, unwrap


class TokenAuthorization(str, enum.Enum):
    FULL_ACCESS = "full-access"
    READ_ONLY = "read-only"


def _not_found(name: str) -> dict[int, Any]:
    return {404: lambda: DatabaseNotFoundError(name)}


async def list_databases(connection: PlatformConnection) -> list[Database]:
    body = await request(connection, "GET", organization_path(connection, "databases"))
    return [Database.from_dict(item) for item in unwrap(body, "databases", list)]


async def create_database(
    connection: PlatformConnection,
    name: str,
    group: str,
    *,
    size_limit: str | None = None,
    is_schema: bool = False,
    schema: str | None = None,
) -> CreatedDatabase:
    """Create a database in ``group``.

    Raises:
        DatabaseAlreadyExistsError: HTTP 409
        InvalidDatabaseError: HTTP 400 (bad name, unknown group, ...)
    """
    payload: dict[str, Any] = {"name": name, "group": group}
    if size_limit is not None:
        payload["size_limit"] = size_limit
    if is_schema:
        payload["is_schema"] = True
    if schema is not None:
        payload["schema"] = schema

    body = await request(
        connection,
        "POST",
        organization_path(connection, "databases"),
        body=payload,
        errors={
            400: lambda: InvalidDatabaseError(name),
            409: lambda: DatabaseAlreadyExistsError(name),
        },
    )
    return CreatedDatabase.from_dict(unwrap(body, "database"))


async def retrieve_database(connection: PlatformConnection, name: str) -> Database:
    body = await request(
        connection,
        "GET",
        organization_path(connection, "databases", name),
        errors=_not_found(name),
    )
    return Database.from_dict(unwrap(body, "database"))


async def delete_database(connection: PlatformConnection, name: str) -> str:
    """Delete a database and return the name the API reports as deleted."""
    body = await request(
        connection,
        "DELETE",
        organization_path(connection, "databases", name),
        errors=_not_found(name),
    )
    return unwrap(body, "database", str)


async def retrieve_database_usage(connection: PlatformConnection, name: str) -> DatabaseUsage:
    body = await request(
        connection,
        "GET",
        organization_path(connection, "databases", name, "usage"),
        errors=_not_found(name),
    )
    return DatabaseUsage.from_dict(unwrap(body, "database"))


async def retrieve_database_stats(connection: PlatformConnection, name: str) -> DatabaseStats:
    body = await request(
        connection,
        "GET",
        organization_path(connection, "databases", name, "stats"),
        errors=_not_found(name),
    )
    return DatabaseStats.from_dict(body)


async def create_database_token(
    connection: PlatformConnection,
    name: str,
    *,
    expiration: str = "never",
    authorization: TokenAuthorization = TokenAuthorization.FULL_ACCESS,
) -> str:
    """Mint a token for the database's SQL endpoint and return the JWT.

    Args:
        expiration: Lifetime such as ``2w1d30m``, or ``never``
        authorization: Access level of the token
    """
    body = await request(
        connection,
        "POST",
        organization_path(connection, "databases", name, "auth", "tokens"),
        params={"expiration": expiration, "authorization": TokenAuthorization(authorization).value},
        errors=_not_found(name),
    )
    return unwrap(body, "jwt", str)


async def invalidate_database_tokens(connection: PlatformConnection, name: str) -> None:
    """Rotate the database's signing keys, invalidating every token minted so far."""
    await request(
        connection,
        "POST",
        organization_path(connection, "databases", name, "auth", "rotate"),
        errors=_not_found(name),
    )
