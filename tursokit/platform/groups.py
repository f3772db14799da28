"""Group operations of the platform API.

Endpoints (under /v1/organizations/{org}):
    GET    /groups                       - list_groups
    POST   /groups                       - create_group
    GET    /groups/{name}                - retrieve_group
    DELETE /groups/{name}                - delete_group
    GET    /groups/{name}/configuration  - retrieve_group_configuration
"""

from __future__ import annotations

from typing import Any

from ..config import PlatformConnection
from ..errors import GroupAlreadyExistsError, GroupNotFoundError
from .client import organization_path, request
from .models import Group, GroupConfiguration, unwrap


async def list_groups(connection: PlatformConnection) -> list[Group]:
    body = await request(connection, "GET", organization_path(connection, "groups"))
    return [Group.from_dict(item) for item in unwrap(body, "groups", list)]


async def create_group(
    connection: PlatformConnection,
    name: str,
    location: str,
    *,
    extensions: str | list[str] | None = None,
) -> Group:
    """Create a group with its primary in ``location``.

    Raises:
        GroupAlreadyExistsError: HTTP 409
    """
    payload: dict[str, Any] = {"name": name, "location": location}
    if extensions is not None:
        payload["extensions"] = extensions

    body = await request(
        connection,
        "POST",
        organization_path(connection, "groups"),
        body=payload,
        errors={409: lambda: GroupAlreadyExistsError(name)},
    )
    return Group.from_dict(unwrap(body, "group"))


async def retrieve_group(connection: PlatformConnection, name: str) -> Group:
    body = await request(
        connection,
        "GET",
        organization_path(connection, "groups", name),
        errors={404: lambda: GroupNotFoundError(name)},
    )
    return Group.from_dict(unwrap(body, "group"))


async def delete_group(connection: PlatformConnection, name: str) -> Group:
    body = await request(
        connection,
        "DELETE",
        organization_path(connection, "groups", name),
        errors={404: lambda: GroupNotFoundError(name)},
    )
    return Group.from_dict(unwrap(body, "group"))


async def retrieve_group_configuration(
    connection: PlatformConnection, name: str
) -> GroupConfiguration:
    body = await request(
        connection,
        "GET",
        organization_path(connection, "groups", name, "configuration"),
        errors={404: lambda: GroupNotFoundError(name)},
    )
    return GroupConfiguration.from_dict(body)
