import httpx
import pytest

from tursokit import HttpTransport, TransportError, TransportErrorKind
from tursokit.transport import bearer_headers

URL = "http://db.turso.test/v2/pipeline"
HEADERS = {"Authorization": "Bearer tok"}


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_json_body_is_decoded():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = request.content
        return httpx.Response(200, json={"results": []})

    async with mock_client(handler) as client:
        response = await HttpTransport(client=client).send("POST", URL, HEADERS, {"requests": []})

    assert response.status_code == 200
    assert response.body == {"results": []}
    assert seen["auth"] == "Bearer tok"
    assert b'"requests"' in seen["body"]


@pytest.mark.asyncio
async def test_empty_body_is_none():
    async with mock_client(lambda request: httpx.Response(200)) as client:
        response = await HttpTransport(client=client).send("POST", URL, HEADERS)
    assert response.body is None


@pytest.mark.asyncio
async def test_bad_status_keeps_status_and_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "internal"})

    async with mock_client(handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await HttpTransport(client=client).send("POST", URL, HEADERS)

    assert exc_info.value.kind is TransportErrorKind.BAD_STATUS
    assert exc_info.value.status_code == 500
    assert exc_info.value.body == {"error": "internal"}


@pytest.mark.asyncio
async def test_bad_status_with_text_body():
    async with mock_client(lambda request: httpx.Response(502, text="Bad Gateway")) as client:
        with pytest.raises(TransportError) as exc_info:
            await HttpTransport(client=client).send("GET", URL, HEADERS)

    assert exc_info.value.kind is TransportErrorKind.BAD_STATUS
    assert exc_info.value.body == "Bad Gateway"


@pytest.mark.asyncio
async def test_success_without_json_is_bad_body():
    async with mock_client(lambda request: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(TransportError) as exc_info:
            await HttpTransport(client=client).send("POST", URL, HEADERS)

    assert exc_info.value.kind is TransportErrorKind.BAD_BODY
    assert exc_info.value.body == "<html>"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exception,kind",
    [
        (httpx.ReadTimeout("read timed out"), TransportErrorKind.TIMEOUT),
        (httpx.ConnectTimeout("connect timed out"), TransportErrorKind.TIMEOUT),
        (httpx.ConnectError("connection refused"), TransportErrorKind.NETWORK_ERROR),
        (httpx.RemoteProtocolError("peer closed"), TransportErrorKind.NETWORK_ERROR),
        (httpx.LocalProtocolError("illegal header"), TransportErrorKind.BAD_HEADERS),
        (httpx.UnsupportedProtocol("ftp"), TransportErrorKind.BAD_URL),
    ],
)
async def test_httpx_exceptions_are_mapped(exception, kind):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exception

    async with mock_client(handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await HttpTransport(client=client).send("POST", URL, HEADERS)

    assert exc_info.value.kind is kind
    assert exc_info.value.__cause__ is exception


@pytest.mark.asyncio
async def test_unsupported_scheme_without_injected_client():
    with pytest.raises(TransportError) as exc_info:
        await HttpTransport(timeout=1).send("POST", "ftp://db.turso.test/v2/pipeline", HEADERS)
    assert exc_info.value.kind is TransportErrorKind.BAD_URL


@pytest.mark.asyncio
@pytest.mark.parametrize("value", ["", "Bearer tok\r\nX-Evil: 1", "Bearer tökén"])
async def test_unsendable_headers(value):
    calls = []

    async with mock_client(lambda request: calls.append(request)) as client:
        with pytest.raises(TransportError) as exc_info:
            await HttpTransport(client=client).send("POST", URL, {"Authorization": value})

    assert exc_info.value.kind is TransportErrorKind.BAD_HEADERS
    assert calls == []


def test_bearer_headers():
    assert bearer_headers("tok") == {"Authorization": "Bearer tok"}
    with pytest.raises(TransportError) as exc_info:
        bearer_headers("")
    assert exc_info.value.kind is TransportErrorKind.BAD_HEADERS


def test_timeout_from_env(monkeypatch):
    monkeypatch.setenv("TURSO_HTTP_TIMEOUT", "2.5")
    assert HttpTransport()._timeout == 2.5
