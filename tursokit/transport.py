"""HTTP transport used by the SQL and platform clients.

The clients only depend on the Transport protocol: send one request, get back
a decoded JSON body or a TransportError. HttpTransport implements it on top of
httpx. Unless a client is injected, every call opens its own AsyncClient and
closes it when the response has been read, so nothing is shared between calls.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

import httpx

from .errors import ConfigurationError, TransportError, TransportErrorKind

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class HttpResponse:
    """A successful (2xx) response with its JSON body decoded."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


class Transport(Protocol):
    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        json_body: Any = None,
    ) -> HttpResponse: ...


def bearer_headers(token: str) -> dict[str, str]:
    """Build the Authorization header for a bearer token."""
    if not token:
        raise TransportError(TransportErrorKind.BAD_HEADERS, "missing bearer token")
    return {"Authorization": f"Bearer {token}"}


def _timeout_from_env() -> float:
    raw = os.getenv("TURSO_HTTP_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(
            f"TURSO_HTTP_TIMEOUT must be a number of seconds, got {raw!r}"
        ) from None


def _check_headers(headers: Mapping[str, str]) -> None:
    for name, value in headers.items():
        if not isinstance(value, str) or not value:
            raise TransportError(
                TransportErrorKind.BAD_HEADERS, f"header {name!r} has no value"
            )
        if not value.isascii() or "\r" in value or "\n" in value:
            raise TransportError(
                TransportErrorKind.BAD_HEADERS,
                f"header {name!r} contains characters that cannot be sent",
            )


class HttpTransport:
    """Transport backed by httpx.AsyncClient.

    Args:
        client: Client to send requests with. The caller owns it and closes
            it. When omitted, a fresh client is opened for every request.
        timeout: Timeout in seconds. Defaults to TURSO_HTTP_TIMEOUT or 30.
    """

    def __init__(
        self, client: httpx.AsyncClient | None = None, timeout: float | None = None
    ) -> None:
        self._client = client
        self._timeout = timeout if timeout is not None else _timeout_from_env()

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        json_body: Any = None,
    ) -> HttpResponse:
        _check_headers(headers)
        logger.debug("%s %s", method, url)

        try:
            if self._client is not None:
                response = await self._client.request(
                    method, url, headers=headers, json=json_body, timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.request(
                        method, url, headers=headers, json=json_body
                    )
        except httpx.TimeoutException as e:
            raise TransportError(
                TransportErrorKind.TIMEOUT, f"{method} {url} timed out"
            ) from e
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise TransportError(TransportErrorKind.BAD_URL, f"{url}: {e}") from e
        except httpx.LocalProtocolError as e:
            raise TransportError(TransportErrorKind.BAD_HEADERS, str(e)) from e
        except httpx.TransportError as e:
            raise TransportError(
                TransportErrorKind.NETWORK_ERROR, f"{method} {url} failed: {e}"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(TransportErrorKind.UNKNOWN, str(e)) from e

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return _read_response(method, url, response)


def _read_response(method: str, url: str, response: httpx.Response) -> HttpResponse:
    body: Any = None
    if response.content:
        try:
            body = response.json()
        except ValueError:
            if response.is_success:
                raise TransportError(
                    TransportErrorKind.BAD_BODY,
                    f"{method} {url} returned a body that is not JSON",
                    status_code=response.status_code,
                    body=response.text,
                ) from None
            body = response.text

    if not response.is_success:
        raise TransportError(
            TransportErrorKind.BAD_STATUS,
            f"{method} {url} returned HTTP {response.status_code}",
            status_code=response.status_code,
            body=body,
        )

    return HttpResponse(
        status_code=response.status_code, headers=dict(response.headers), body=body
    )
