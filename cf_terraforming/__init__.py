"""
cf-terraforming: Terraform import commands for live Cloudflare resources
========================================================================

Fetches existing Cloudflare resources of one type within an account or a
zone and prints the ``terraform import`` command that adopts each of them
into Terraform state.

Modules
-------
core
    Cloudflare client, composite ID resolver, configuration, errors
resources
    Registry of importable resource types
importer
    Fetch, resolve and write loop
main
    Command-line interface

Example
-------
>>> import sys
>>> from cf_terraforming import CloudflareClient, ImportConfig, Importer, Scope
>>>
>>> client = CloudflareClient(api_token="...")
>>> config = ImportConfig(scope=Scope(zone_id="023e105f4ecef8ad9ca31a8372d0c353"))
>>> Importer(client, config).run("cloudflare_record", sys.stdout)

Notes
-----
Credentials are read from the CLI options or environment:
- CLOUDFLARE_API_TOKEN
- CLOUDFLARE_EMAIL and CLOUDFLARE_API_KEY

See Also
--------
requests : HTTP library used to talk to the Cloudflare API
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Public API
from cf_terraforming.core.cloudflare_client import CloudflareClient
from cf_terraforming.core.composite_id import CompositeIDResolver
from cf_terraforming.core.config import ImportConfig, Scope
from cf_terraforming.core.exceptions import CFTerraformingError
from cf_terraforming.importer import ImportResult, Importer, build_composite_id

__all__ = [
    "__version__",
    "__license__",
    "CloudflareClient",
    "CompositeIDResolver",
    "ImportConfig",
    "Scope",
    "CFTerraformingError",
    "ImportResult",
    "Importer",
    "build_composite_id",
]
