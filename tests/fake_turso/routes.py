"""Route definitions for the fake Turso service.

Implements the endpoints the client talks to:
    /v1/organizations/{organization}/databases - Database management
    /v1/organizations/{organization}/groups - Group management
    /v1/auth - API token management
    /v2/pipeline - SQL over HTTP
"""

from starlette.routing import Route

from . import pipeline, platform

_ORG = "/v1/organizations/{organization}"


def get_routes() -> list[Route]:
    """Get all routes of the fake service.

    Returns:
        List of Starlette Route objects
    """
    return [
        # Databases
        Route(f"{_ORG}/databases", platform.list_databases, methods=["GET"]),
        Route(f"{_ORG}/databases", platform.create_database, methods=["POST"]),
        Route(f"{_ORG}/databases/{{name}}", platform.retrieve_database, methods=["GET"]),
        Route(f"{_ORG}/databases/{{name}}", platform.delete_database, methods=["DELETE"]),
        Route(f"{_ORG}/databases/{{name}}/usage", platform.database_usage, methods=["GET"]),
        Route(f"{_ORG}/databases/{{name}}/stats", platform.database_stats, methods=["GET"]),
        Route(
            f"{_ORG}/databases/{{name}}/auth/tokens",
            platform.create_database_token,
            methods=["POST"],
        ),
        Route(
            f"{_ORG}/databases/{{name}}/auth/rotate",
            platform.rotate_database_tokens,
            methods=["POST"],
        ),
        # Groups
        Route(f"{_ORG}/groups", platform.list_groups, methods=["GET"]),
        Route(f"{_ORG}/groups", platform.create_group, methods=["POST"]),
        Route(f"{_ORG}/groups/{{name}}", platform.retrieve_group, methods=["GET"]),
        Route(f"{_ORG}/groups/{{name}}", platform.delete_group, methods=["DELETE"]),
        Route(
            f"{_ORG}/groups/{{name}}/configuration",
            platform.group_configuration,
            methods=["GET"],
        ),
        # API tokens
        Route("/v1/auth/api-tokens", platform.list_api_tokens, methods=["GET"]),
        Route("/v1/auth/api-tokens/{name}", platform.create_api_token, methods=["POST"]),
        Route("/v1/auth/api-tokens/{name}", platform.revoke_api_token, methods=["DELETE"]),
        Route("/v1/auth/validate", platform.validate_api_token, methods=["GET"]),
        # SQL over HTTP
        Route("/v2/pipeline", pipeline.execute_pipeline, methods=["POST"]),
    ]
