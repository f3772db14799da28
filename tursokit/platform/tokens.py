"""User API token operations of the platform API.

Endpoints:
    POST   /v1/auth/api-tokens/{name}  - create_api_token
    GET    /v1/auth/api-tokens         - list_api_tokens
    GET    /v1/auth/validate           - validate_api_token
    DELETE /v1/auth/api-tokens/{name}  - revoke_api_token

These endpoints are not scoped to an organization.
"""

from __future__ import annotations

from urllib.parse import quote

from ..config import PlatformConnection
from ..errors import ApiTokenAlreadyExistsError, ApiTokenNotFoundError, InvalidApiTokenError
from .client import request
from .models import ApiToken, CreatedApiToken, TokenValidation, unwrap

_API_TOKENS = "/v1/auth/api-tokens"


async def create_api_token(connection: PlatformConnection, name: str) -> CreatedApiToken:
    """Create a user API token. The token value is only returned here.

    Raises:
        ApiTokenAlreadyExistsError: HTTP 409
    """
    body = await request(
        connection,
        "POST",
        f"{_API_TOKENS}/{quote(name, safe='')}",
        errors={409: lambda: ApiTokenAlreadyExistsError(name)},
    )
    return CreatedApiToken.from_dict(body)


async def list_api_tokens(connection: PlatformConnection) -> list[ApiToken]:
    body = await request(connection, "GET", _API_TOKENS)
    return [ApiToken.from_dict(item) for item in unwrap(body, "tokens", list)]


async def validate_api_token(connection: PlatformConnection) -> TokenValidation:
    """Check the connection's own token.

    Raises:
        InvalidApiTokenError: HTTP 401
    """
    body = await request(
        connection,
        "GET",
        "/v1/auth/validate",
        errors={401: lambda: InvalidApiTokenError(connection.organization)},
    )
    return TokenValidation.from_dict(body)


async def revoke_api_token(connection: PlatformConnection, name: str) -> str:
    """Revoke a user API token and return its name."""
    body = await request(
        connection,
        "DELETE",
        f"{_API_TOKENS}/{quote(name, safe='')}",
        errors={404: lambda: ApiTokenNotFoundError(name)},
    )
    return unwrap(body, "token", str)
