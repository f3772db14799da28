"""Fake Turso service used by the test suite.

Modules:
    shared: In-memory state (databases, groups, tokens, SQLite connection)
    middleware: Bearer token validation
    platform: Platform API handlers
    pipeline: /v2/pipeline handler
    routes: Route table
"""

from starlette.applications import Starlette

from .middleware import TokenValidationMiddleware
from .routes import get_routes
from .shared import LOCATION, FakeTurso


def create_app(organization: str, token: str, native_integers: bool = False) -> Starlette:
    """Build the fake service for one organization and one accepted token."""
    app = Starlette(debug=False, routes=get_routes())
    app.add_middleware(TokenValidationMiddleware)
    app.state.turso = FakeTurso(organization, token, native_integers=native_integers)
    return app


__all__ = ["LOCATION", "FakeTurso", "create_app"]
