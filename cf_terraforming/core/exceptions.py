"""
Custom Exceptions for cf-terraforming
=====================================

This module defines the hierarchy of exceptions raised while fetching
Cloudflare resources and turning them into ``terraform import`` commands.

Exception Hierarchy
-------------------
::

    CFTerraformingError (base)
    ├── CloudflareClientError
    │   ├── CredentialsError
    │   └── CloudflareAPIError
    ├── ConfigurationError
    └── ImporterError
        ├── UnknownResourceTypeError
        ├── ResourceFetchError
        └── MalformedRecordError

Every error aborts the current run; nothing in the package recovers from
one locally.

Example
-------
>>> from cf_terraforming.core.exceptions import UnknownResourceTypeError
>>>
>>> try:
...     resolver.resolve("cloudflare_unknown_thing", "abc", scope)
... except UnknownResourceTypeError as e:
...     print(f"Cannot import: {e}")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class CFTerraformingError(Exception):
    """
    Base exception for all cf-terraforming errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    details : dict, optional
        Additional context about the error.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Additional error details.

    Example
    -------
    >>> raise CFTerraformingError("Something went wrong", details={"code": 500})
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns
        -------
        dict
            Dictionary representation of the error.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# Cloudflare Client Exceptions
# =============================================================================


class CloudflareClientError(CFTerraformingError):
    """
    Base exception for Cloudflare API client errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    path : str, optional
        The API path that was being requested.
    status_code : int, optional
        HTTP status code of the response, when one was received.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.path = path
        self.status_code = status_code
        full_details = details or {}
        if path:
            full_details["path"] = path
        if status_code is not None:
            full_details["status_code"] = status_code
        super().__init__(message, full_details)


class CredentialsError(CloudflareClientError):
    """
    Raised when no usable Cloudflare credentials were configured.

    Example
    -------
    >>> raise CredentialsError(
    ...     "Cloudflare credentials not found",
    ...     details={"hint": "Set CLOUDFLARE_API_TOKEN"}
    ... )
    """

    pass


class CloudflareAPIError(CloudflareClientError):
    """
    Raised when a Cloudflare API request fails.

    Covers transport failures, non-2xx responses, undecodable bodies and
    envelopes that report ``"success": false``.

    Example
    -------
    >>> raise CloudflareAPIError(
    ...     "Authentication error",
    ...     path="zones/abc/dns_records",
    ...     status_code=403,
    ... )
    """

    pass


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(CFTerraformingError):
    """
    Raised when the supplied options cannot describe a valid run.

    Example
    -------
    >>> raise ConfigurationError(
    ...     "--account and --zone are mutually exclusive",
    ...     details={"account_id": "acc1", "zone_id": "zone1"}
    ... )
    """

    pass


# =============================================================================
# Importer Exceptions
# =============================================================================


class ImporterError(CFTerraformingError):
    """
    Base exception for errors while building import commands.

    Parameters
    ----------
    message : str
        Human-readable error message.
    resource_type : str, optional
        The Terraform resource type being imported.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.resource_type = resource_type
        full_details = details or {}
        if resource_type:
            full_details["resource_type"] = resource_type
        super().__init__(message, full_details)


class UnknownResourceTypeError(ImporterError):
    """
    Raised when a resource type has no import definition.

    Example
    -------
    >>> raise UnknownResourceTypeError(
    ...     "cloudflare_unknown_thing does not have an import format defined",
    ...     resource_type="cloudflare_unknown_thing"
    ... )
    """

    pass


class ResourceFetchError(ImporterError):
    """
    Raised when resources could not be fetched from Cloudflare.

    Example
    -------
    >>> raise ResourceFetchError(
    ...     "Failed to fetch cloudflare_record resources",
    ...     resource_type="cloudflare_record"
    ... )
    """

    pass


class MalformedRecordError(ImporterError):
    """
    Raised when a fetched record has no usable ``id`` field.

    Example
    -------
    >>> raise MalformedRecordError(
    ...     "Record at position 3 has no string 'id'",
    ...     resource_type="cloudflare_record",
    ...     details={"index": 3}
    ... )
    """

    pass
