from typing import AsyncIterator, Iterator

import httpx
import pytest
import pytest_asyncio
from fake_turso import LOCATION, FakeTurso, create_app
from starlette.applications import Starlette

from tursokit import DatabaseConnection, HttpTransport, PlatformConnection

ORGANIZATION = "acme"
TOKEN = "test-token"
PLATFORM_URL = "http://api.turso.test"


@pytest.fixture
def native_integers() -> bool:
    """Override in a module to make the fake send integers as JSON numbers."""
    return False


@pytest.fixture
def fake_app(native_integers: bool) -> Iterator[Starlette]:
    app = create_app(ORGANIZATION, TOKEN, native_integers=native_integers)
    yield app
    app.state.turso.close()


@pytest.fixture
def fake_turso(fake_app: Starlette) -> FakeTurso:
    return fake_app.state.turso


@pytest_asyncio.fixture
async def http_client(fake_app: Starlette) -> AsyncIterator[httpx.AsyncClient]:
    """AsyncClient that talks to the fake service in-process."""
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=fake_app)) as client:
        yield client


@pytest.fixture
def transport(http_client: httpx.AsyncClient) -> HttpTransport:
    return HttpTransport(client=http_client, timeout=5)


@pytest.fixture
def db(transport: HttpTransport) -> DatabaseConnection:
    return DatabaseConnection(
        organization=ORGANIZATION,
        database="app",
        location=LOCATION,
        token=TOKEN,
        scheme="http",
        host="turso.test",
        transport=transport,
    )


@pytest.fixture
def platform(transport: HttpTransport) -> PlatformConnection:
    return PlatformConnection(
        organization=ORGANIZATION,
        token=TOKEN,
        base_url=PLATFORM_URL,
        transport=transport,
    )
