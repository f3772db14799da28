"""Handlers for the fake platform API.

Handlers:
    Databases: list, create, retrieve, delete, usage, stats, tokens, rotate
    Groups: list, create, retrieve, delete, configuration
    API tokens: create, list, validate, revoke
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import JSONResponse, Response

from .shared import FakeGroup, FakeTurso

if TYPE_CHECKING:
    from starlette.requests import Request

_AUTHORIZATIONS = ("full-access", "read-only")


def _state(request: Request) -> FakeTurso:
    return request.app.state.turso


def _not_found(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=404)


def _unknown_organization(request: Request) -> JSONResponse | None:
    organization = request.path_params["organization"]
    if organization != _state(request).organization:
        return _not_found(f"organization {organization} not found")
    return None


# =============================================================================
# Databases
# =============================================================================


async def list_databases(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    databases = _state(request).databases.values()
    return JSONResponse({"databases": [db.to_dict() for db in databases]})


async def create_database(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    state = _state(request)
    body = await request.json()
    name = body.get("name")
    group = body.get("group")

    if not name or group not in state.groups:
        return JSONResponse({"error": "invalid database name or group"}, status_code=400)
    if name in state.databases:
        return JSONResponse({"error": f"database {name} already exists"}, status_code=409)

    database = state.add_database(name, group)
    return JSONResponse(
        {
            "database": {
                "DbId": database.db_id,
                "Hostname": database.hostname,
                "Name": database.name,
            }
        }
    )


async def retrieve_database(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    name = request.path_params["name"]
    database = _state(request).databases.get(name)
    if database is None:
        return _not_found(f"database {name} not found")
    return JSONResponse({"database": database.to_dict()})


async def delete_database(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    name = request.path_params["name"]
    state = _state(request)
    if state.databases.pop(name, None) is None:
        return _not_found(f"database {name} not found")
    state.rotate_database_tokens(name)
    return JSONResponse({"database": name})


async def database_usage(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    name = request.path_params["name"]
    database = _state(request).databases.get(name)
    if database is None:
        return _not_found(f"database {name} not found")

    usage = {
        "rows_read": database.rows_read,
        "rows_written": database.rows_written,
        "storage_bytes": 4096,
        "bytes_synced": 0,
    }
    return JSONResponse(
        {
            "database": {
                "uuid": database.db_id,
                "instances": [{"uuid": database.db_id, "usage": usage}],
                "usage": usage,
            }
        }
    )


async def database_stats(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    name = request.path_params["name"]
    state = _state(request)
    if name not in state.databases:
        return _not_found(f"database {name} not found")

    return JSONResponse(
        {
            "top_queries": [
                {"query": sql, **stats} for sql, stats in state.executed.items()
            ]
        }
    )


async def create_database_token(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    name = request.path_params["name"]
    state = _state(request)
    if name not in state.databases:
        return _not_found(f"database {name} not found")

    if request.query_params.get("authorization", "full-access") not in _AUTHORIZATIONS:
        return JSONResponse({"error": "invalid authorization"}, status_code=400)

    return JSONResponse({"jwt": state.issue_database_token(name)})


async def rotate_database_tokens(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    name = request.path_params["name"]
    state = _state(request)
    if name not in state.databases:
        return _not_found(f"database {name} not found")

    state.rotate_database_tokens(name)
    return Response(status_code=200)


# =============================================================================
# Groups
# =============================================================================


async def list_groups(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    groups = _state(request).groups.values()
    return JSONResponse({"groups": [group.to_dict() for group in groups]})


async def create_group(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    state = _state(request)
    body = await request.json()
    name = body.get("name")
    location = body.get("location")

    if not name or not location:
        return JSONResponse({"error": "name and location are required"}, status_code=400)
    if name in state.groups:
        return JSONResponse({"error": f"group {name} already exists"}, status_code=409)

    group = FakeGroup(name, location)
    state.groups[name] = group
    return JSONResponse({"group": group.to_dict()})


async def retrieve_group(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    name = request.path_params["name"]
    group = _state(request).groups.get(name)
    if group is None:
        return _not_found(f"group {name} not found")
    return JSONResponse({"group": group.to_dict()})


async def delete_group(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    name = request.path_params["name"]
    group = _state(request).groups.pop(name, None)
    if group is None:
        return _not_found(f"group {name} not found")
    return JSONResponse({"group": group.to_dict()})


async def group_configuration(request: Request) -> Response:
    if (error := _unknown_organization(request)) is not None:
        return error
    name = request.path_params["name"]
    group = _state(request).groups.get(name)
    if group is None:
        return _not_found(f"group {name} not found")
    return JSONResponse({"delete_protection": group.delete_protection})


# =============================================================================
# API tokens
# =============================================================================


async def create_api_token(request: Request) -> Response:
    name = request.path_params["name"]
    state = _state(request)
    if name in state.api_tokens:
        return JSONResponse({"error": f"token {name} already exists"}, status_code=409)

    token_id, token = state.issue_api_token(name)
    return JSONResponse({"name": name, "id": token_id, "token": token})


async def list_api_tokens(request: Request) -> Response:
    tokens = _state(request).api_tokens
    return JSONResponse(
        {"tokens": [{"name": name, "id": token_id} for name, (token_id, _) in tokens.items()]}
    )


async def validate_api_token(request: Request) -> Response:
    # The middleware already rejected unknown tokens
    return JSONResponse({"exp": -1})


async def revoke_api_token(request: Request) -> Response:
    name = request.path_params["name"]
    state = _state(request)
    if name not in state.api_tokens:
        return _not_found(f"token {name} not found")

    state.revoke_api_token(name)
    return JSONResponse({"token": name})
