"""Platform API client (resource management).

Modules:
    client: Request helper and status code mapping
    models: Resources returned by the API
    databases: Database operations
    groups: Group operations
    tokens: User API token operations
"""

from .databases import (
    TokenAuthorization,
    create_database,
    create_database_token,
    delete_database,
    invalidate_database_tokens,
    list_databases,
    retrieve_database,
    retrieve_database_stats,
    retrieve_database_usage,
)
from .groups import (
    create_group,
    delete_group,
    list_groups,
    retrieve_group,
    retrieve_group_configuration,
)
from .models import (
    ApiToken,
    CreatedApiToken,
    CreatedDatabase,
    Database,
    DatabaseStats,
    DatabaseUsage,
    Group,
    GroupConfiguration,
    InstanceUsage,
    TokenValidation,
    TopQuery,
    Usage,
)
from .tokens import create_api_token, list_api_tokens, revoke_api_token, validate_api_token

__all__ = [
    # Databases
    "TokenAuthorization",
    "create_database",
    "create_database_token",
    "delete_database",
    "invalidate_database_tokens",
    "list_databases",
    "retrieve_database",
    "retrieve_database_stats",
    "retrieve_database_usage",
    # Groups
    "create_group",
    "delete_group",
    "list_groups",
    "retrieve_group",
    "retrieve_group_configuration",
    # Tokens
    "create_api_token",
    "list_api_tokens",
    "revoke_api_token",
    "validate_api_token",
    # Models
    "ApiToken",
    "CreatedApiToken",
    "CreatedDatabase",
    "Database",
    "DatabaseStats",
    "DatabaseUsage",
    "Group",
    "GroupConfiguration",
    "InstanceUsage",
    "TokenValidation",
    "TopQuery",
    "Usage",
]
