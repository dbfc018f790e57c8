"""
cf-terraforming CLI

Main entry point for the command-line interface.
"""

import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .core.cloudflare_client import DEFAULT_HOSTNAME, CloudflareClient
from .core.config import (
    DEFAULT_IMPORT_COMMAND_PREFIX,
    DEFAULT_RESOURCE_NAME_PREFIX,
    ImportConfig,
    Scope,
)
from .core.exceptions import CFTerraformingError, ConfigurationError
from .core.logging import setup_logging
from .importer import Importer
from .resources import NONE, REGISTRY, get_definition, supported_resource_types


logger = logging.getLogger(__name__)

# Import commands go to stdout; everything else goes to stderr
console = Console(stderr=True, soft_wrap=True)


def build_import_config(
    resource_type: str,
    account_id: Optional[str],
    zone_id: Optional[str],
    import_command_prefix: str = DEFAULT_IMPORT_COMMAND_PREFIX,
    resource_name_prefix: str = DEFAULT_RESOURCE_NAME_PREFIX,
) -> ImportConfig:
    """
    Validate the scope options against the resource type.

    Raises
    ------
    UnknownResourceTypeError
        If the resource type is not supported.
    ConfigurationError
        If both an account and a zone were given, or the given scope cannot
        serve the resource type.
    """
    definition = get_definition(resource_type)
    scope = Scope(account_id=account_id or "", zone_id=zone_id or "")

    if scope.account_id and scope.zone_id:
        raise ConfigurationError(
            "--account and --zone are mutually exclusive",
            details={"account_id": scope.account_id, "zone_id": scope.zone_id},
        )

    if not definition.accepts(scope):
        if definition.scope_level == NONE:
            raise ConfigurationError(
                f"{resource_type} does not take --zone",
                details={"scope_level": definition.scope_level},
            )
        needed = {
            "account": "--account",
            "zone": "--zone",
            "either": "--account or --zone",
        }[definition.scope_level]
        raise ConfigurationError(
            f"{resource_type} requires {needed}",
            details={"scope_level": definition.scope_level},
        )

    return ImportConfig(
        scope=scope,
        import_command_prefix=import_command_prefix,
        resource_name_prefix=resource_name_prefix,
    )


def validate_credentials(
    api_token: Optional[str],
    api_email: Optional[str],
    api_key: Optional[str],
) -> None:
    """Require an API token, or both an email and a global API key."""
    if api_token:
        return
    if api_email and api_key:
        return
    if api_email or api_key:
        raise ConfigurationError("--email and --key must be used together")
    raise ConfigurationError(
        "Cloudflare credentials not found",
        details={
            "hint": (
                "Use --token (CLOUDFLARE_API_TOKEN), or --email and --key "
                "(CLOUDFLARE_EMAIL, CLOUDFLARE_API_KEY)"
            ),
        },
    )


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(version=__version__, prog_name="cf-terraforming")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show debug logging on stderr",
)
@click.option(
    "--log-file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Also write logs to this file",
)
def cli(verbose: bool, log_file: Optional[str]):
    """
    cf-terraforming: Terraform import commands for Cloudflare resources

    Lists existing Cloudflare resources and prints the `terraform import`
    command that adopts each one into Terraform state.
    """
    setup_logging(level="DEBUG" if verbose else "WARNING", log_file=log_file)


@cli.command("import")
@click.option(
    "--resource-type",
    required=True,
    help="Terraform resource type to import, e.g. cloudflare_record",
)
@click.option(
    "--account",
    "-a",
    "account_id",
    envvar="CLOUDFLARE_ACCOUNT_ID",
    default=None,
    help="Account ID to list resources from (env: CLOUDFLARE_ACCOUNT_ID)",
)
@click.option(
    "--zone",
    "-z",
    "zone_id",
    envvar="CLOUDFLARE_ZONE_ID",
    default=None,
    help="Zone ID to list resources from (env: CLOUDFLARE_ZONE_ID)",
)
@click.option(
    "--token",
    "-t",
    "api_token",
    envvar="CLOUDFLARE_API_TOKEN",
    default=None,
    help="API token (env: CLOUDFLARE_API_TOKEN)",
)
@click.option(
    "--email",
    "-e",
    "api_email",
    envvar="CLOUDFLARE_EMAIL",
    default=None,
    help="Account email for global API key auth (env: CLOUDFLARE_EMAIL)",
)
@click.option(
    "--key",
    "-k",
    "api_key",
    envvar="CLOUDFLARE_API_KEY",
    default=None,
    help="Global API key (env: CLOUDFLARE_API_KEY)",
)
@click.option(
    "--hostname",
    envvar="CLOUDFLARE_API_HOSTNAME",
    default=DEFAULT_HOSTNAME,
    show_default=True,
    help="Cloudflare API hostname (env: CLOUDFLARE_API_HOSTNAME)",
)
@click.option(
    "--import-command-prefix",
    default=DEFAULT_IMPORT_COMMAND_PREFIX,
    show_default=True,
    help="Command placed at the start of every line",
)
@click.option(
    "--resource-name-prefix",
    default=DEFAULT_RESOURCE_NAME_PREFIX,
    show_default=True,
    help="Prefix of the generated Terraform resource names",
)
def import_resources(
    resource_type: str,
    account_id: Optional[str],
    zone_id: Optional[str],
    api_token: Optional[str],
    api_email: Optional[str],
    api_key: Optional[str],
    hostname: str,
    import_command_prefix: str,
    resource_name_prefix: str,
):
    """
    Output `terraform import` commands for existing resources.

    Examples:

        # DNS records of a zone
        cf-terraforming import --resource-type cloudflare_record --zone $ZONE_ID

        # Account members, run straight into terraform
        cf-terraforming import --resource-type cloudflare_account_member \\
            --account $ACCOUNT_ID | sh

        # All zones visible to the token
        cf-terraforming import --resource-type cloudflare_zone
    """
    try:
        config = build_import_config(
            resource_type,
            account_id,
            zone_id,
            import_command_prefix=import_command_prefix,
            resource_name_prefix=resource_name_prefix,
        )
        validate_credentials(api_token, api_email, api_key)

        with CloudflareClient(
            api_token=api_token,
            api_email=api_email,
            api_key=api_key,
            hostname=hostname,
        ) as client:
            result = Importer(client, config).run(resource_type, sys.stdout)

        logger.info(f"Wrote {result.count} import command(s)")

    except CFTerraformingError as e:
        console.print(f"[red bold]Error:[/red bold] {escape(str(e))}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Import cancelled by user.[/yellow]")
        sys.exit(130)


@cli.command("resource-types")
def list_resource_types():
    """List the resource types that can be imported."""
    table = Table(title="Supported resource types", show_lines=False)
    table.add_column("Resource type", style="cyan", no_wrap=True)
    table.add_column("Scope", style="yellow")
    table.add_column("Import format", style="white")
    table.add_column("Description", style="dim")

    for resource_type in supported_resource_types():
        definition = REGISTRY[resource_type]
        scope = "-" if definition.scope_level == NONE else definition.scope_level
        table.add_row(
            resource_type,
            scope,
            escape(definition.template),
            definition.description,
        )

    Console().print(table)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
