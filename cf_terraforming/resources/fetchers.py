"""
Resource Fetchers
=================

One fetch function per Cloudflare listing. Every fetcher has the signature
``fetch(client, scope) -> list of dict`` and returns the raw API records in
the order the API returned them.

Most listings are a single GET below an account or a zone; those are built
with :func:`account_listing` and :func:`zone_listing`. The remaining
functions cover listings that depend on which scope was given, filter the
API result, or need no API call at all.
"""

from __future__ import annotations

import functools
import hashlib
import logging
from datetime import datetime
from typing import List

from cf_terraforming.core.cloudflare_client import CloudflareClient
from cf_terraforming.core.config import Scope
from cf_terraforming.resources.base import Fetcher, Record

# Module logger
logger = logging.getLogger(__name__)


def account_listing(endpoint: str) -> Fetcher:
    """
    Build a fetcher for ``accounts/<account_id>/<endpoint>``.

    Example
    -------
    >>> fetch_members = account_listing("members")
    >>> fetch_members(client, Scope(account_id="acc1"))
    """

    def fetch(client: CloudflareClient, scope: Scope) -> List[Record]:
        return client.get(f"accounts/{scope.account_id}/{endpoint}")

    fetch.__name__ = f"fetch_account_{endpoint.replace('/', '_')}"
    return fetch


def zone_listing(endpoint: str) -> Fetcher:
    """Build a fetcher for ``zones/<zone_id>/<endpoint>``."""

    def fetch(client: CloudflareClient, scope: Scope) -> List[Record]:
        return client.get(f"zones/{scope.zone_id}/{endpoint}")

    fetch.__name__ = f"fetch_zone_{endpoint.replace('/', '_')}"
    return fetch


def scoped_listing(endpoint: str) -> Fetcher:
    """
    Build a fetcher that lists under the account when one is given,
    otherwise under the zone.
    """

    def fetch(client: CloudflareClient, scope: Scope) -> List[Record]:
        if scope.account_id:
            return client.get(f"accounts/{scope.account_id}/{endpoint}")
        return client.get(f"zones/{scope.zone_id}/{endpoint}")

    fetch.__name__ = f"fetch_scoped_{endpoint.replace('/', '_')}"
    return fetch


@functools.lru_cache(maxsize=None)
def argo_pseudo_id() -> str:
    """
    Identifier for the zone's Argo settings.

    Argo is a per-zone toggle with no identifier of its own, so one is
    synthesized from the current time. It is computed once per process.
    """
    return hashlib.md5(str(datetime.now()).encode("utf-8")).hexdigest()


def fetch_argo(client: CloudflareClient, scope: Scope) -> List[Record]:
    return [{"id": argo_pseudo_id()}]


def fetch_certificate_packs(client: CloudflareClient, scope: Scope) -> List[Record]:
    """List certificate packs, leaving out Cloudflare-managed universal ones."""
    packs = client.get(f"zones/{scope.zone_id}/ssl/certificate_packs")
    customer_managed = [
        pack
        for pack in packs
        if not isinstance(pack, dict) or pack.get("type") != "universal"
    ]
    skipped = len(packs) - len(customer_managed)
    if skipped:
        logger.debug(f"Skipped {skipped} universal certificate pack(s)")
    return customer_managed


def fetch_origin_ca_certificates(client: CloudflareClient, scope: Scope) -> List[Record]:
    return client.get("certificates", params={"zone_id": scope.zone_id})


def fetch_zones(client: CloudflareClient, scope: Scope) -> List[Record]:
    """List zones visible to the credentials, narrowed to one account if given."""
    params = {"account.id": scope.account_id} if scope.account_id else None
    return client.get("zones", params=params)
