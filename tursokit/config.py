"""Connection settings for the SQL pipeline and the platform API.

Settings are plain values passed explicitly to every client call; nothing is
stored process-wide. The ``from_env`` constructors read:

    TURSO_DATABASE_URL  - database URL, e.g. libsql://mydb-acme.aws-eu-west-1.turso.io
    TURSO_AUTH_TOKEN    - database token used for the SQL pipeline
    TURSO_ORGANIZATION  - organization slug for the platform API
    TURSO_API_TOKEN     - user API token for the platform API
    TURSO_PLATFORM_URL  - platform API base URL (default: https://api.turso.tech)
    TURSO_HTTP_TIMEOUT  - request timeout in seconds (default: 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from .errors import ConfigurationError
from .transport import HttpTransport, Transport

DEFAULT_PLATFORM_URL = "https://api.turso.tech"
DEFAULT_HOST = "turso.io"
PIPELINE_PATH = "/v2/pipeline"

# URL schemes accepted by DatabaseConnection.from_url and the scheme used on the wire
_URL_SCHEMES = {
    "libsql": "https",
    "https": "https",
    "http": "http",
}


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(f"environment variable {name} is not set")
    return value


@dataclass(frozen=True)
class DatabaseConnection:
    """Where and how to reach one database's SQL pipeline endpoint.

    Attributes:
        organization: Organization slug owning the database
        database: Database name
        location: Location label of the hostname (e.g. aws-us-east-1)
        token: Database token sent as a bearer token
        scheme: URL scheme used for requests
        host: Base host the database hostnames live under
        transport: Transport requests are sent through
    """

    organization: str
    database: str
    location: str
    token: str = field(repr=False)
    scheme: str = "https"
    host: str = DEFAULT_HOST
    transport: Transport = field(default_factory=HttpTransport, repr=False, compare=False)

    @property
    def hostname(self) -> str:
        return f"{self.database}-{self.organization}.{self.location}.{self.host}"

    @property
    def pipeline_url(self) -> str:
        return f"{self.scheme}://{self.hostname}{PIPELINE_PATH}"

    @classmethod
    def from_url(
        cls,
        url: str,
        token: str,
        organization: str | None = None,
        transport: Transport | None = None,
    ) -> DatabaseConnection:
        """Build a connection from a database URL.

        The hostname must have the form ``{database}-{organization}.{location}.{host}``.
        Database and organization names may both contain dashes, so pass
        ``organization`` to split the first label unambiguously; without it
        the split happens at the last dash.

        Raises:
            ConfigurationError: If the URL does not have that form
        """
        parts = urlsplit(url)
        scheme = _URL_SCHEMES.get(parts.scheme)
        if scheme is None:
            raise ConfigurationError(f"unsupported database URL scheme in {url!r}")

        labels = (parts.hostname or "").split(".")
        if len(labels) < 3:
            raise ConfigurationError(
                f"database URL {url!r} is not of the form <db>-<org>.<location>.<host>"
            )

        first, location, host = labels[0], labels[1], ".".join(labels[2:])
        try:
            port = parts.port
        except ValueError:
            raise ConfigurationError(f"database URL {url!r} has an invalid port") from None
        if port is not None:
            host = f"{host}:{port}"

        if organization is not None:
            suffix = f"-{organization}"
            if not first.endswith(suffix) or first == suffix:
                raise ConfigurationError(
                    f"database URL {url!r} does not belong to organization {organization!r}"
                )
            database = first[: -len(suffix)]
        else:
            database, sep, organization = first.rpartition("-")
            if not sep or not database or not organization:
                raise ConfigurationError(
                    f"cannot tell database and organization apart in {url!r}"
                )

        return cls(
            organization=organization,
            database=database,
            location=location,
            token=token,
            scheme=scheme,
            host=host,
            transport=transport or HttpTransport(),
        )

    @classmethod
    def from_env(
        cls, organization: str | None = None, transport: Transport | None = None
    ) -> DatabaseConnection:
        """Build a connection from TURSO_DATABASE_URL and TURSO_AUTH_TOKEN."""
        return cls.from_url(
            _require_env("TURSO_DATABASE_URL"),
            _require_env("TURSO_AUTH_TOKEN"),
            organization=organization or os.getenv("TURSO_ORGANIZATION"),
            transport=transport,
        )


@dataclass(frozen=True)
class PlatformConnection:
    """Credentials and endpoint for the platform REST API."""

    organization: str
    token: str = field(repr=False)
    base_url: str = DEFAULT_PLATFORM_URL
    transport: Transport = field(default_factory=HttpTransport, repr=False, compare=False)

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"

    @classmethod
    def from_env(cls, transport: Transport | None = None) -> PlatformConnection:
        """Build a connection from TURSO_ORGANIZATION, TURSO_API_TOKEN and TURSO_PLATFORM_URL."""
        return cls(
            organization=_require_env("TURSO_ORGANIZATION"),
            token=_require_env("TURSO_API_TOKEN"),
            base_url=os.getenv("TURSO_PLATFORM_URL", DEFAULT_PLATFORM_URL),
            transport=transport or HttpTransport(),
        )
