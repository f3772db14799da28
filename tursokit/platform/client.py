"""Request helper shared by the platform API modules.

Status codes with a meaning for an operation are turned into the matching
PlatformError by looking at the status code alone; the body is not read. Any
other failure propagates as the TransportError the transport raised.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping
from urllib.parse import quote, urlencode

from ..config import PlatformConnection
from ..errors import PlatformError, TransportError, TransportErrorKind
from ..transport import bearer_headers

logger = logging.getLogger(__name__)

StatusErrors = Mapping[int, Callable[[], PlatformError]]


def organization_path(connection: PlatformConnection, *parts: str) -> str:
    """Path under /v1/organizations/{org}, with every part URL-quoted."""
    segments = ["v1", "organizations", connection.organization, *parts]
    return "/" + "/".join(quote(segment, safe="") for segment in segments)


async def request(
    connection: PlatformConnection,
    method: str,
    path: str,
    *,
    body: Any = None,
    params: Mapping[str, str] | None = None,
    errors: StatusErrors | None = None,
) -> Any:
    """Send one request to the platform API and return the decoded body.

    Args:
        connection: Platform credentials and transport
        method: HTTP method
        path: Path below the base URL
        body: JSON body, if any
        params: Query string parameters
        errors: Status code to error factory for this operation

    Raises:
        PlatformError: If the status code is listed in ``errors``
        TransportError: For every other failure
    """
    url = connection.url(path)
    if params:
        url = f"{url}?{urlencode(params)}"

    try:
        response = await connection.transport.send(
            method, url, bearer_headers(connection.token), body
        )
    except TransportError as e:
        if e.kind is TransportErrorKind.BAD_STATUS and errors and e.status_code in errors:
            error = errors[e.status_code]()
            logger.debug("%s %s -> %s", method, path, type(error).__name__)
            raise error from e
        raise

    return response.body
