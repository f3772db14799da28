"""Resources returned by the platform API.

Each model has a ``from_dict`` constructor reading the JSON shape the API
returns. A shape that does not match raises ResponseDecodeError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ResponseDecodeError

_MISSING = object()


def _get(data: Any, key: str, kind: type | tuple[type, ...], default: Any = _MISSING) -> Any:
    if not isinstance(data, dict):
        raise ResponseDecodeError(f"expected a JSON object, got {type(data).__name__}", data)
    value = data.get(key, _MISSING)
    if value is _MISSING or value is None:
        if default is _MISSING:
            raise ResponseDecodeError(f"missing field {key!r}", data)
        return default
    if not isinstance(value, kind) or (isinstance(value, bool) and kind in (int, float)):
        raise ResponseDecodeError(f"field {key!r} has an unexpected type", data)
    return value


def unwrap(data: Any, key: str, kind: type | tuple[type, ...] = dict) -> Any:
    """Return ``data[key]``, checking the envelope the API wraps results in."""
    return _get(data, key, kind)


# =============================================================================
# Databases
# =============================================================================


@dataclass(frozen=True)
class Database:
    name: str
    db_id: str
    hostname: str
    group: str | None = None
    regions: list[str] = field(default_factory=list)
    primary_region: str | None = None
    type: str | None = None
    version: str | None = None
    block_reads: bool = False
    block_writes: bool = False
    allow_attach: bool = False
    is_schema: bool = False
    schema: str | None = None
    sleeping: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Database:
        return cls(
            name=_get(data, "Name", str),
            db_id=_get(data, "DbId", str),
            hostname=_get(data, "Hostname", str),
            group=_get(data, "group", str, None),
            regions=list(_get(data, "regions", list, [])),
            primary_region=_get(data, "primaryRegion", str, None),
            type=_get(data, "type", str, None),
            version=_get(data, "version", str, None),
            block_reads=_get(data, "block_reads", bool, False),
            block_writes=_get(data, "block_writes", bool, False),
            allow_attach=_get(data, "allow_attach", bool, False),
            is_schema=_get(data, "is_schema", bool, False),
            schema=_get(data, "schema", str, None) or None,
            sleeping=_get(data, "sleeping", bool, False),
        )


@dataclass(frozen=True)
class CreatedDatabase:
    name: str
    db_id: str
    hostname: str

    @classmethod
    def from_dict(cls, data: Any) -> CreatedDatabase:
        return cls(
            name=_get(data, "Name", str),
            db_id=_get(data, "DbId", str),
            hostname=_get(data, "Hostname", str),
        )


@dataclass(frozen=True)
class Usage:
    rows_read: int = 0
    rows_written: int = 0
    storage_bytes: int = 0
    bytes_synced: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Usage:
        return cls(
            rows_read=_get(data, "rows_read", int, 0),
            rows_written=_get(data, "rows_written", int, 0),
            storage_bytes=_get(data, "storage_bytes", int, 0),
            bytes_synced=_get(data, "bytes_synced", int, 0),
        )


@dataclass(frozen=True)
class InstanceUsage:
    uuid: str
    usage: Usage

    @classmethod
    def from_dict(cls, data: Any) -> InstanceUsage:
        return cls(
            uuid=_get(data, "uuid", str),
            usage=Usage.from_dict(_get(data, "usage", dict, {})),
        )


@dataclass(frozen=True)
class DatabaseUsage:
    uuid: str
    usage: Usage
    instances: list[InstanceUsage] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> DatabaseUsage:
        return cls(
            uuid=_get(data, "uuid", str),
            usage=Usage.from_dict(_get(data, "usage", dict, {})),
            instances=[
                InstanceUsage.from_dict(item) for item in _get(data, "instances", list, [])
            ],
        )


@dataclass(frozen=True)
class TopQuery:
    query: str
    rows_read: int
    rows_written: int

    @classmethod
    def from_dict(cls, data: Any) -> TopQuery:
        return cls(
            query=_get(data, "query", str),
            rows_read=_get(data, "rows_read", int, 0),
            rows_written=_get(data, "rows_written", int, 0),
        )


@dataclass(frozen=True)
class DatabaseStats:
    top_queries: list[TopQuery] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> DatabaseStats:
        return cls(
            top_queries=[
                TopQuery.from_dict(item) for item in _get(data, "top_queries", list, [])
            ]
        )


# =============================================================================
# Groups
# =============================================================================


@dataclass(frozen=True)
class Group:
    name: str
    uuid: str | None = None
    version: str | None = None
    locations: list[str] = field(default_factory=list)
    primary: str | None = None
    delete_protection: bool = False
    archived: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Group:
        return cls(
            name=_get(data, "name", str),
            uuid=_get(data, "uuid", str, None),
            version=_get(data, "version", str, None),
            locations=list(_get(data, "locations", list, [])),
            primary=_get(data, "primary", str, None),
            delete_protection=_get(data, "delete_protection", bool, False),
            archived=_get(data, "archived", bool, False),
        )


@dataclass(frozen=True)
class GroupConfiguration:
    delete_protection: bool

    @classmethod
    def from_dict(cls, data: Any) -> GroupConfiguration:
        return cls(delete_protection=_get(data, "delete_protection", bool, False))


# =============================================================================
# Tokens
# =============================================================================


@dataclass(frozen=True)
class ApiToken:
    name: str
    id: str

    @classmethod
    def from_dict(cls, data: Any) -> ApiToken:
        return cls(name=_get(data, "name", str), id=_get(data, "id", str))


@dataclass(frozen=True)
class CreatedApiToken:
    name: str
    id: str
    token: str = field(repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> CreatedApiToken:
        return cls(
            name=_get(data, "name", str),
            id=_get(data, "id", str),
            token=_get(data, "token", str),
        )


@dataclass(frozen=True)
class TokenValidation:
    """Result of validating an API token. ``exp`` is -1 for tokens that never expire."""

    exp: int

    @classmethod
    def from_dict(cls, data: Any) -> TokenValidation:
        return cls(exp=_get(data, "exp", int))
