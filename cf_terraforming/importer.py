"""
Importer
========

Drives one import run: fetch the resources of a type, resolve each into a
``terraform import`` command and write the commands out in API order.

Classes
-------
ImportResult
    Summary of a finished run.
Importer
    Fetch, resolve and write loop.

Functions
---------
build_composite_id
    Resolve one resource against the built-in Format Table.

Example
-------
>>> import sys
>>> from cf_terraforming.core import CloudflareClient, ImportConfig, Scope
>>> from cf_terraforming.importer import Importer
>>>
>>> client = CloudflareClient(api_token="...")
>>> config = ImportConfig(scope=Scope(zone_id="023e105f4ecef8ad9ca31a8372d0c353"))
>>> result = Importer(client, config).run("cloudflare_record", sys.stdout)
>>> print(f"Generated {result.count} import commands")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, TextIO

from cf_terraforming.core.cloudflare_client import CloudflareClient
from cf_terraforming.core.composite_id import CompositeIDResolver
from cf_terraforming.core.config import (
    DEFAULT_IMPORT_COMMAND_PREFIX,
    DEFAULT_RESOURCE_NAME_PREFIX,
    ImportConfig,
    Scope,
)
from cf_terraforming.core.exceptions import MalformedRecordError
from cf_terraforming.resources.base import Record, ResourceDefinition
from cf_terraforming.resources.registry import FORMAT_TABLE, REGISTRY, get_definition

# Module logger
logger = logging.getLogger(__name__)


def build_composite_id(
    resource_type: str,
    resource_id: str,
    scope: Scope,
    import_command_prefix: str = DEFAULT_IMPORT_COMMAND_PREFIX,
    resource_name_prefix: str = DEFAULT_RESOURCE_NAME_PREFIX,
) -> str:
    """
    Resolve one resource into an import command using the built-in table.

    Raises
    ------
    UnknownResourceTypeError
        If the type has no import format defined.

    Example
    -------
    >>> build_composite_id("cloudflare_record", "rec1", Scope(zone_id="zone1"))
    'terraform import cloudflare_record.terraform_managed_resource_rec1 zone1/rec1\\n'
    """
    resolver = CompositeIDResolver(
        FORMAT_TABLE,
        import_command_prefix=import_command_prefix,
        resource_name_prefix=resource_name_prefix,
    )
    return resolver.resolve(resource_type, resource_id, scope)


def extract_id(record: Any, resource_type: str, index: int) -> str:
    """
    Return the ``id`` of a fetched record.

    Raises
    ------
    MalformedRecordError
        If the record is not a mapping or its ``id`` is missing or not a
        non-empty string.
    """
    resource_id = record.get("id") if isinstance(record, dict) else None
    if not isinstance(resource_id, str) or not resource_id:
        raise MalformedRecordError(
            f"Record at position {index} has no string 'id'",
            resource_type=resource_type,
            details={"index": index, "id": repr(resource_id)},
        )
    return resource_id


@dataclass
class ImportResult:
    """
    Summary of one import run.

    Parameters
    ----------
    resource_type : str
        Resource type that was imported.
    scope : Scope
        Scope of the run.
    lines : list of str
        Import commands in the order they were written.
    run_time : datetime, optional
        When the run started.
    """

    resource_type: str
    scope: Scope
    lines: List[str] = field(default_factory=list)
    run_time: datetime = field(default_factory=datetime.now)

    @property
    def count(self) -> int:
        return len(self.lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resource_type": self.resource_type,
            "identifier_type": self.scope.identifier_type,
            "identifier_value": self.scope.identifier_value,
            "count": self.count,
            "lines": [line.rstrip("\n") for line in self.lines],
            "run_time": self.run_time.isoformat(),
        }

    def __repr__(self) -> str:
        return (
            f"ImportResult(resource_type='{self.resource_type}', "
            f"scope='{self.scope}', count={self.count})"
        )


class Importer:
    """
    Generates ``terraform import`` commands for live Cloudflare resources.

    Parameters
    ----------
    client : CloudflareClient
        Client used for the fetch.
    config : ImportConfig
        Scope and command prefixes of the run.
    registry : Mapping[str, ResourceDefinition], optional
        Supported resource types. Defaults to the built-in registry.
    resolver : CompositeIDResolver, optional
        Defaults to a resolver over the registry's templates configured
        with the prefixes from ``config``.

    Examples
    --------
    >>> importer = Importer(client, ImportConfig(scope=Scope(account_id="acc1")))
    >>> result = importer.run("cloudflare_account_member", sys.stdout)
    """

    def __init__(
        self,
        client: CloudflareClient,
        config: ImportConfig,
        registry: Optional[Mapping[str, ResourceDefinition]] = None,
        resolver: Optional[CompositeIDResolver] = None,
    ) -> None:
        self.client = client
        self.config = config
        self.registry = registry if registry is not None else REGISTRY
        self.resolver = resolver or CompositeIDResolver(
            {name: d.template for name, d in self.registry.items()},
            import_command_prefix=config.import_command_prefix,
            resource_name_prefix=config.resource_name_prefix,
        )
        logger.debug(f"Initialized {self!r}")

    @property
    def scope(self) -> Scope:
        return self.config.scope

    def definition_for(self, resource_type: str) -> ResourceDefinition:
        """Look up a resource type, failing before any network call."""
        return get_definition(resource_type, self.registry)

    def fetch(self, resource_type: str) -> List[Record]:
        """
        Fetch the live records of a resource type.

        Raises
        ------
        UnknownResourceTypeError
            If the type is not supported.
        ResourceFetchError
            If the Cloudflare API call fails.
        """
        definition = self.definition_for(resource_type)
        return definition.fetch_records(self.client, self.scope)

    def generate(self, resource_type: str, records: List[Record]) -> List[str]:
        """
        Resolve already fetched records into import commands.

        Raises
        ------
        UnknownResourceTypeError
            If the type has no import format defined.
        MalformedRecordError
            If a record has no usable ``id``.
        """
        return [
            self.command_for(resource_type, record, index)
            for index, record in enumerate(records)
        ]

    def command_for(self, resource_type: str, record: Record, index: int = 0) -> str:
        """Resolve one fetched record into its import command."""
        resource_id = extract_id(record, resource_type, index)
        return self.resolver.resolve(resource_type, resource_id, self.scope)

    def run(self, resource_type: str, stream: TextIO) -> ImportResult:
        """
        Fetch, resolve and write the import commands of a resource type.

        Each command is written as soon as it is resolved, so commands for
        records before a malformed one have already reached ``stream`` when
        the error is raised.

        Parameters
        ----------
        resource_type : str
            Terraform resource type, e.g. ``cloudflare_record``.
        stream : TextIO
            Destination of the commands, usually stdout.

        Returns
        -------
        ImportResult
            Summary with every command written.

        Raises
        ------
        UnknownResourceTypeError
            If the type is not supported.
        ResourceFetchError
            If the Cloudflare API call fails.
        MalformedRecordError
            If a record has no usable ``id``.
        """
        result = ImportResult(resource_type=resource_type, scope=self.scope)
        records = self.fetch(resource_type)

        for index, record in enumerate(records):
            line = self.command_for(resource_type, record, index)
            stream.write(line)
            result.lines.append(line)

        logger.info(
            f"Generated {result.count} import command(s) for {resource_type} "
            f"({self.scope})"
        )
        return result

    def __repr__(self) -> str:
        return (
            f"Importer(scope='{self.scope}', "
            f"resource_types={len(self.registry)})"
        )
