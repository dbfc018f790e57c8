"""
Import Configuration
====================

Value objects describing one import run: the scope the resources live in
and the literal text placed around every generated command.

Classes
-------
Scope
    Account or zone context of a run.
ImportConfig
    Scope plus the command and resource name prefixes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_IMPORT_COMMAND_PREFIX = "terraform import"
DEFAULT_RESOURCE_NAME_PREFIX = "terraform_managed_resource"

ACCOUNT = "account"
ZONE = "zone"


@dataclass(frozen=True)
class Scope:
    """
    Account or zone context of a run.

    Exactly one of ``account_id`` and ``zone_id`` is expected to be set.
    Nothing here enforces that; the CLI validates it before a run starts.

    Examples
    --------
    >>> Scope(account_id="acc1").identifier_type
    'account'
    >>> Scope(zone_id="zone1").identifier_value
    'zone1'
    """

    account_id: str = ""
    zone_id: str = ""

    @property
    def identifier_type(self) -> str:
        """``"account"`` when an account id is set, otherwise ``"zone"``."""
        return ACCOUNT if self.account_id else ZONE

    @property
    def identifier_value(self) -> str:
        """The account id when set, otherwise the zone id."""
        return self.account_id if self.account_id else self.zone_id

    @property
    def is_empty(self) -> bool:
        return not self.account_id and not self.zone_id

    def __str__(self) -> str:
        if self.is_empty:
            return "no scope"
        return f"{self.identifier_type} {self.identifier_value}"


@dataclass(frozen=True)
class ImportConfig:
    """Settings shared by every command generated in a run."""

    scope: Scope = field(default_factory=Scope)
    import_command_prefix: str = DEFAULT_IMPORT_COMMAND_PREFIX
    resource_name_prefix: str = DEFAULT_RESOURCE_NAME_PREFIX
