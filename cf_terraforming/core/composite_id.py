"""
Composite ID Resolver
=====================

Turns a fetched resource into the ``terraform import`` command that adopts
it into state.

Terraform locates an existing Cloudflare resource through a composite ID
whose shape depends on the resource type, e.g. ``<zone_id>/<record_id>``
for DNS records or ``account/<account_id>/<rule_id>`` for access rules.
Each shape is written as a template over a fixed placeholder vocabulary:

==================== =====================================================
Placeholder          Substitution
==================== =====================================================
``:identifier_type`` ``account`` when an account id is set, else ``zone``
``:identifier_value`` the account id when set, else the zone id
``:zone_id``         the zone id, verbatim
``:account_id``      the account id, verbatim
``:id``              the resource id
==================== =====================================================

Classes
-------
CompositeIDResolver
    Resolves templates from an injected Format Table.

Example
-------
>>> resolver = CompositeIDResolver({"cloudflare_record": ":zone_id/:id"})
>>> resolver.resolve("cloudflare_record", "rec1", Scope(zone_id="zone1"))
'terraform import cloudflare_record.terraform_managed_resource_rec1 zone1/rec1\\n'
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Dict, Mapping, Pattern

from cf_terraforming.core.config import (
    DEFAULT_IMPORT_COMMAND_PREFIX,
    DEFAULT_RESOURCE_NAME_PREFIX,
    Scope,
)
from cf_terraforming.core.exceptions import UnknownResourceTypeError

# Module logger
logger = logging.getLogger(__name__)

PLACEHOLDERS = (
    "identifier_type",
    "identifier_value",
    "zone_id",
    "account_id",
    "id",
)

# Longest first so ":id" never shadows ":identifier_type"
_PLACEHOLDER_PATTERN: Pattern[str] = re.compile(
    "|".join(
        re.escape(f":{name}")
        for name in sorted(PLACEHOLDERS, key=len, reverse=True)
    )
)


def placeholder_values(resource_id: str, scope: Scope) -> Dict[str, str]:
    """
    Map every placeholder token to its value for one resource.

    Parameters
    ----------
    resource_id : str
        Cloudflare identifier of the resource.
    scope : Scope
        Account or zone context of the run.

    Returns
    -------
    dict
        Token (including the leading colon) to substitution value.
    """
    return {
        ":identifier_type": scope.identifier_type,
        ":identifier_value": scope.identifier_value,
        ":zone_id": scope.zone_id,
        ":account_id": scope.account_id,
        ":id": resource_id,
    }


def resolve_template(template: str, resource_id: str, scope: Scope) -> str:
    """
    Substitute placeholders in ``template`` in a single pass.

    Substituted values are never re-scanned, so an identifier that happens
    to contain ``:id`` is emitted unchanged.

    Example
    -------
    >>> resolve_template(":identifier_type/:identifier_value/:id", "r1",
    ...                  Scope(account_id="acc1"))
    'account/acc1/r1'
    """
    values = placeholder_values(resource_id, scope)
    return _PLACEHOLDER_PATTERN.sub(lambda match: values[match.group(0)], template)


class CompositeIDResolver:
    """
    Builds ``terraform import`` command lines from a Format Table.

    The table is copied into a read-only mapping on construction, so one
    resolver can be shared freely.

    Parameters
    ----------
    formats : Mapping[str, str]
        Resource type to composite ID template.
    import_command_prefix : str, default="terraform import"
        Literal text that starts every line.
    resource_name_prefix : str, default="terraform_managed_resource"
        Prefix of the Terraform resource name; the resource id is appended
        after an underscore.

    Examples
    --------
    >>> resolver = CompositeIDResolver(
    ...     {"cloudflare_account_member": ":account_id/:id"}
    ... )
    >>> line = resolver.resolve(
    ...     "cloudflare_account_member", "abc", Scope(account_id="acc1")
    ... )
    >>> line.split()[-1]
    'acc1/abc'
    """

    def __init__(
        self,
        formats: Mapping[str, str],
        import_command_prefix: str = DEFAULT_IMPORT_COMMAND_PREFIX,
        resource_name_prefix: str = DEFAULT_RESOURCE_NAME_PREFIX,
    ) -> None:
        self.formats: Mapping[str, str] = MappingProxyType(dict(formats))
        self.import_command_prefix = import_command_prefix
        self.resource_name_prefix = resource_name_prefix

    def template_for(self, resource_type: str) -> str:
        """
        Look up the composite ID template of a resource type.

        Raises
        ------
        UnknownResourceTypeError
            If the type has no import format defined.
        """
        try:
            return self.formats[resource_type]
        except KeyError:
            raise UnknownResourceTypeError(
                f"{resource_type} does not have an import format defined",
                resource_type=resource_type,
            )

    def composite_id(self, resource_type: str, resource_id: str, scope: Scope) -> str:
        """Return only the resolved composite ID, without the command around it."""
        return resolve_template(self.template_for(resource_type), resource_id, scope)

    def resource_address(self, resource_type: str, resource_id: str) -> str:
        """Return the Terraform address, e.g. ``cloudflare_record.terraform_managed_resource_abc``."""
        return f"{resource_type}.{self.resource_name_prefix}_{resource_id}"

    def resolve(self, resource_type: str, resource_id: str, scope: Scope) -> str:
        """
        Build the full import command for one resource.

        Parameters
        ----------
        resource_type : str
            Terraform resource type, e.g. ``cloudflare_record``.
        resource_id : str
            Cloudflare identifier of the resource.
        scope : Scope
            Account or zone context of the run.

        Returns
        -------
        str
            ``<prefix> <type>.<name-prefix>_<id> <composite-id>`` followed by
            a newline.

        Raises
        ------
        UnknownResourceTypeError
            If the type has no import format defined.
        """
        composite = self.composite_id(resource_type, resource_id, scope)
        address = self.resource_address(resource_type, resource_id)
        return f"{self.import_command_prefix} {address} {composite}\n"

    def __repr__(self) -> str:
        return (
            f"CompositeIDResolver(types={len(self.formats)}, "
            f"import_command_prefix='{self.import_command_prefix}', "
            f"resource_name_prefix='{self.resource_name_prefix}')"
        )
