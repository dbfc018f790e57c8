"""
Cloudflare Resource Types
=========================

Registry of the Terraform resource types that can be imported, each
pairing a Cloudflare fetch path with its composite ID template.

Example
-------
>>> from cf_terraforming.resources import REGISTRY, get_definition
>>> get_definition("cloudflare_zone").scope_level
'none'

Adding New Resource Types
-------------------------
1. Write a fetcher in ``fetchers.py`` (or reuse ``account_listing`` /
   ``zone_listing`` / ``scoped_listing``)
2. Add a ``ResourceDefinition`` to ``registry.py`` with the import format
   documented by the Terraform provider
"""

from cf_terraforming.resources.base import (
    ACCOUNT,
    EITHER,
    NONE,
    ZONE,
    ResourceDefinition,
)
from cf_terraforming.resources.registry import (
    FORMAT_TABLE,
    REGISTRY,
    get_definition,
    supported_resource_types,
)

__all__ = [
    "ACCOUNT",
    "EITHER",
    "NONE",
    "ZONE",
    "FORMAT_TABLE",
    "REGISTRY",
    "ResourceDefinition",
    "get_definition",
    "supported_resource_types",
]
