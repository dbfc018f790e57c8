"""
Resource Registry
=================

The closed set of resource types cf-terraforming can import, and the
Format Table derived from it.

Both mappings are read-only and built once at import time.

Example
-------
>>> from cf_terraforming.resources.registry import get_definition
>>> definition = get_definition("cloudflare_record")
>>> definition.template
':zone_id/:id'
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from cf_terraforming.core.exceptions import UnknownResourceTypeError
from cf_terraforming.resources.base import (
    ACCOUNT,
    EITHER,
    NONE,
    ZONE,
    ResourceDefinition,
)
from cf_terraforming.resources.fetchers import (
    account_listing,
    fetch_argo,
    fetch_certificate_packs,
    fetch_origin_ca_certificates,
    fetch_zones,
    scoped_listing,
    zone_listing,
)

SCOPED_ID = ":identifier_type/:identifier_value/:id"
ZONE_ID = ":zone_id/:id"
ACCOUNT_ID = ":account_id/:id"
BARE_ID = ":id"

_DEFINITIONS = (
    ResourceDefinition(
        "cloudflare_access_rule", SCOPED_ID,
        scoped_listing("firewall/access_rules/rules"), EITHER, "IP access rule",
    ),
    ResourceDefinition(
        "cloudflare_account_member", ACCOUNT_ID,
        account_listing("members"), ACCOUNT, "Account member",
    ),
    ResourceDefinition(
        "cloudflare_argo", ":zone_id/argo",
        fetch_argo, ZONE, "Argo settings",
    ),
    ResourceDefinition(
        "cloudflare_argo_tunnel", ACCOUNT_ID,
        account_listing("tunnels"), ACCOUNT, "Argo tunnel",
    ),
    ResourceDefinition(
        "cloudflare_byo_ip_prefix", BARE_ID,
        account_listing("addressing/prefixes"), ACCOUNT, "BYOIP prefix",
    ),
    ResourceDefinition(
        "cloudflare_certificate_pack", ZONE_ID,
        fetch_certificate_packs, ZONE, "Certificate pack",
    ),
    ResourceDefinition(
        "cloudflare_custom_pages", SCOPED_ID,
        scoped_listing("custom_pages"), EITHER, "Custom page",
    ),
    ResourceDefinition(
        "cloudflare_filter", ZONE_ID,
        zone_listing("filters"), ZONE, "Firewall filter",
    ),
    ResourceDefinition(
        "cloudflare_firewall_rule", ZONE_ID,
        zone_listing("firewall/rules"), ZONE, "Firewall rule",
    ),
    ResourceDefinition(
        "cloudflare_healthcheck", ZONE_ID,
        zone_listing("healthchecks"), ZONE, "Health check",
    ),
    ResourceDefinition(
        "cloudflare_custom_hostname", ZONE_ID,
        zone_listing("custom_hostnames"), ZONE, "Custom hostname",
    ),
    ResourceDefinition(
        "cloudflare_custom_ssl", ZONE_ID,
        zone_listing("custom_certificates"), ZONE, "Custom SSL certificate",
    ),
    ResourceDefinition(
        "cloudflare_ip_list", ACCOUNT_ID,
        account_listing("rules/lists"), ACCOUNT, "IP list",
    ),
    ResourceDefinition(
        "cloudflare_logpush_job", SCOPED_ID,
        scoped_listing("logpush/jobs"), EITHER, "Logpush job",
    ),
    ResourceDefinition(
        "cloudflare_origin_ca_certificate", BARE_ID,
        fetch_origin_ca_certificates, ZONE, "Origin CA certificate",
    ),
    ResourceDefinition(
        "cloudflare_page_rule", ZONE_ID,
        zone_listing("pagerules"), ZONE, "Page rule",
    ),
    ResourceDefinition(
        "cloudflare_rate_limit", ZONE_ID,
        zone_listing("rate_limits"), ZONE, "Rate limit",
    ),
    ResourceDefinition(
        "cloudflare_record", ZONE_ID,
        zone_listing("dns_records"), ZONE, "DNS record",
    ),
    ResourceDefinition(
        "cloudflare_spectrum_application", ZONE_ID,
        zone_listing("spectrum/apps"), ZONE, "Spectrum application",
    ),
    ResourceDefinition(
        "cloudflare_waf_override", ZONE_ID,
        zone_listing("firewall/waf/overrides"), ZONE, "WAF override",
    ),
    ResourceDefinition(
        "cloudflare_waf_package", ZONE_ID,
        zone_listing("firewall/waf/packages"), ZONE, "WAF package",
    ),
    ResourceDefinition(
        "cloudflare_waiting_room", ZONE_ID,
        zone_listing("waiting_rooms"), ZONE, "Waiting room",
    ),
    ResourceDefinition(
        "cloudflare_workers_kv_namespace", BARE_ID,
        account_listing("storage/kv/namespaces"), ACCOUNT, "Workers KV namespace",
    ),
    ResourceDefinition(
        "cloudflare_worker_route", ZONE_ID,
        zone_listing("workers/routes"), ZONE, "Worker route",
    ),
    ResourceDefinition(
        "cloudflare_zone", BARE_ID,
        fetch_zones, NONE, "Zone",
    ),
    ResourceDefinition(
        "cloudflare_zone_lockdown", ZONE_ID,
        zone_listing("firewall/lockdowns"), ZONE, "Zone lockdown",
    ),
)


def build_registry(
    definitions: Iterable[ResourceDefinition],
) -> Mapping[str, ResourceDefinition]:
    """
    Index definitions by resource type into a read-only mapping.

    Raises
    ------
    ValueError
        If two definitions share a resource type.
    """
    registry = {}
    for definition in definitions:
        if definition.resource_type in registry:
            raise ValueError(f"Duplicate resource type: {definition.resource_type}")
        registry[definition.resource_type] = definition
    return MappingProxyType(registry)


def format_table(registry: Mapping[str, ResourceDefinition]) -> Mapping[str, str]:
    """Derive the resource type to template mapping from a registry."""
    return MappingProxyType(
        {resource_type: d.template for resource_type, d in registry.items()}
    )


REGISTRY: Mapping[str, ResourceDefinition] = build_registry(_DEFINITIONS)
FORMAT_TABLE: Mapping[str, str] = format_table(REGISTRY)


def get_definition(
    resource_type: str,
    registry: Mapping[str, ResourceDefinition] = REGISTRY,
) -> ResourceDefinition:
    """
    Look up the definition of a resource type.

    Raises
    ------
    UnknownResourceTypeError
        If the type is not supported.
    """
    try:
        return registry[resource_type]
    except KeyError:
        raise UnknownResourceTypeError(
            f"{resource_type} is not yet supported for state import",
            resource_type=resource_type,
        )


def supported_resource_types(
    registry: Mapping[str, ResourceDefinition] = REGISTRY,
) -> list:
    """Return the supported resource types in alphabetical order."""
    return sorted(registry)
