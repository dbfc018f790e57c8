"""
Core Components
===============

- :class:`CloudflareClient` - Reads from the Cloudflare v4 API
- :class:`CompositeIDResolver` - Builds ``terraform import`` commands
- :class:`Scope` / :class:`ImportConfig` - Settings of a run
- Exception hierarchy for error handling

Exceptions
----------
CFTerraformingError
    Base exception for all cf-terraforming errors.
CloudflareClientError
    Base exception for API client errors.
CredentialsError
    Raised when no credentials are configured.
CloudflareAPIError
    Raised when an API request fails.
ConfigurationError
    Raised for invalid option combinations.
ImporterError
    Base exception for import generation errors.
UnknownResourceTypeError
    Raised for resource types without an import definition.
ResourceFetchError
    Raised when resources cannot be fetched.
MalformedRecordError
    Raised when a fetched record has no usable id.
"""

from cf_terraforming.core.cloudflare_client import CloudflareClient
from cf_terraforming.core.composite_id import CompositeIDResolver
from cf_terraforming.core.config import ImportConfig, Scope
from cf_terraforming.core.exceptions import (
    CFTerraformingError,
    CloudflareAPIError,
    CloudflareClientError,
    ConfigurationError,
    CredentialsError,
    ImporterError,
    MalformedRecordError,
    ResourceFetchError,
    UnknownResourceTypeError,
)

__all__ = [
    # Client
    "CloudflareClient",
    # Resolver
    "CompositeIDResolver",
    # Configuration
    "ImportConfig",
    "Scope",
    # Exceptions - Base
    "CFTerraformingError",
    # Exceptions - Client
    "CloudflareClientError",
    "CredentialsError",
    "CloudflareAPIError",
    # Exceptions - Configuration
    "ConfigurationError",
    # Exceptions - Importer
    "ImporterError",
    "UnknownResourceTypeError",
    "ResourceFetchError",
    "MalformedRecordError",
]
