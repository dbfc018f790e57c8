"""
Resource Definitions
====================

A :class:`ResourceDefinition` pairs everything the importer needs to know
about one Terraform resource type: how to fetch live instances from
Cloudflare and which composite ID template Terraform expects for them.
Keeping both in one object means a type can never be fetchable without an
import format, or the other way round.

Scope Levels
------------
ACCOUNT
    Needs an account id.
ZONE
    Needs a zone id.
EITHER
    Works with an account id or a zone id.
NONE
    Needs neither; an account id narrows the listing when given. A zone id
    is refused.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from cf_terraforming.core.cloudflare_client import CloudflareClient
from cf_terraforming.core.config import Scope
from cf_terraforming.core.exceptions import CloudflareAPIError, ResourceFetchError

# Module logger
logger = logging.getLogger(__name__)

ACCOUNT = "account"
ZONE = "zone"
EITHER = "either"
NONE = "none"

SCOPE_LEVELS = (ACCOUNT, ZONE, EITHER, NONE)

Record = Dict[str, Any]
Fetcher = Callable[[CloudflareClient, Scope], List[Record]]


@dataclass(frozen=True)
class ResourceDefinition:
    """
    Fetch path and import format of one resource type.

    Parameters
    ----------
    resource_type : str
        Terraform resource type, e.g. ``cloudflare_record``.
    template : str
        Composite ID template, e.g. ``:zone_id/:id``.
    fetch : callable
        ``fetch(client, scope)`` returning the raw API records.
    scope_level : str
        Which scope the type can be listed under (see module docs).
    description : str, optional
        Short human-readable name shown by ``resource-types``.
    """

    resource_type: str
    template: str
    fetch: Fetcher
    scope_level: str
    description: str = ""

    def __post_init__(self) -> None:
        if self.scope_level not in SCOPE_LEVELS:
            raise ValueError(
                f"Invalid scope level '{self.scope_level}' for {self.resource_type}"
            )

    def accepts(self, scope: Scope) -> bool:
        """
        Check whether ``scope`` is enough to list this resource type.

        Example
        -------
        >>> definition.scope_level
        'zone'
        >>> definition.accepts(Scope(account_id="acc1"))
        False
        """
        if self.scope_level == ACCOUNT:
            return bool(scope.account_id)
        if self.scope_level == ZONE:
            return bool(scope.zone_id)
        if self.scope_level == EITHER:
            return not scope.is_empty
        return not scope.zone_id

    def fetch_records(self, client: CloudflareClient, scope: Scope) -> List[Record]:
        """
        Fetch live records of this type.

        Raises
        ------
        ResourceFetchError
            If the Cloudflare API call fails.
        """
        logger.info(f"Fetching {self.resource_type} resources for {scope}")
        try:
            records = self.fetch(client, scope)
        except CloudflareAPIError as e:
            logger.error(f"Error fetching {self.resource_type}: {e}")
            raise ResourceFetchError(
                f"Failed to fetch {self.resource_type} resources: {e.message}",
                resource_type=self.resource_type,
                details=dict(e.details),
            ) from e

        logger.debug(f"Found {len(records)} {self.resource_type} resource(s)")
        return records
