"""
Tests for the command-line interface.
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cf_terraforming import __version__
from cf_terraforming.core.cloudflare_client import CloudflareClient
from cf_terraforming.core.exceptions import CloudflareAPIError, ConfigurationError
from cf_terraforming.main import build_import_config, cli, validate_credentials


@pytest.fixture
def runner():
    return CliRunner()


class TestImportCommand:
    """Tests for `cf-terraforming import`."""

    def test_dns_records(self, runner):
        with patch.object(
            CloudflareClient, "get", return_value=[{"id": "rec1"}, {"id": "rec2"}]
        ) as mock_get:
            result = runner.invoke(
                cli,
                ["import", "--resource-type", "cloudflare_record", "--zone", "zone1", "--token", "t"],
            )

        assert result.exit_code == 0, result.output
        assert result.output == (
            "terraform import cloudflare_record.terraform_managed_resource_rec1 zone1/rec1\n"
            "terraform import cloudflare_record.terraform_managed_resource_rec2 zone1/rec2\n"
        )
        mock_get.assert_called_once_with("zones/zone1/dns_records")

    def test_environment_variables(self, runner):
        with patch.object(CloudflareClient, "get", return_value=[{"id": "abc"}]):
            result = runner.invoke(
                cli,
                ["import", "--resource-type", "cloudflare_account_member"],
                env={"CLOUDFLARE_API_TOKEN": "t", "CLOUDFLARE_ACCOUNT_ID": "acc1"},
            )

        assert result.exit_code == 0, result.output
        assert result.output.endswith(" acc1/abc\n")

    def test_email_and_key(self, runner):
        with patch.object(CloudflareClient, "get", return_value=[{"id": "z1"}]):
            result = runner.invoke(
                cli,
                [
                    "import", "--resource-type", "cloudflare_zone",
                    "--email", "me@example.com", "--key", "xyz",
                ],
            )

        assert result.exit_code == 0, result.output
        assert result.output == (
            "terraform import cloudflare_zone.terraform_managed_resource_z1 z1\n"
        )

    def test_custom_prefixes(self, runner):
        with patch.object(CloudflareClient, "get", return_value=[{"id": "rec1"}]):
            result = runner.invoke(
                cli,
                [
                    "import", "--resource-type", "cloudflare_record", "--zone", "zone1",
                    "--token", "t", "--import-command-prefix", "tofu import",
                    "--resource-name-prefix", "imported",
                ],
            )

        assert result.output == "tofu import cloudflare_record.imported_rec1 zone1/rec1\n"

    def test_unknown_resource_type(self, runner):
        with patch.object(CloudflareClient, "get") as mock_get:
            result = runner.invoke(
                cli,
                ["import", "--resource-type", "cloudflare_unknown_thing", "--zone", "zone1", "--token", "t"],
            )

        assert result.exit_code == 1
        assert "not yet supported" in result.output
        mock_get.assert_not_called()

    def test_account_and_zone_exclusive(self, runner):
        result = runner.invoke(
            cli,
            [
                "import", "--resource-type", "cloudflare_access_rule",
                "--account", "acc1", "--zone", "zone1", "--token", "t",
            ],
        )
        assert result.exit_code == 1
        assert "mutually exclusive" in result.output

    def test_scope_mismatch(self, runner):
        result = runner.invoke(
            cli,
            ["import", "--resource-type", "cloudflare_record", "--account", "acc1", "--token", "t"],
        )
        assert result.exit_code == 1
        assert "requires --zone" in result.output

    def test_zone_listing_refuses_zone(self, runner):
        with patch.object(CloudflareClient, "get") as mock_get:
            result = runner.invoke(
                cli,
                ["import", "--resource-type", "cloudflare_zone", "--zone", "z1", "--token", "t"],
            )

        assert result.exit_code == 1
        assert "does not take --zone" in result.output
        mock_get.assert_not_called()

    def test_missing_credentials(self, runner):
        result = runner.invoke(
            cli, ["import", "--resource-type", "cloudflare_record", "--zone", "zone1"]
        )
        assert result.exit_code == 1
        assert "credentials not found" in result.output

    def test_fetch_failure(self, runner):
        with patch.object(
            CloudflareClient,
            "get",
            side_effect=CloudflareAPIError("Cloudflare API error: 10000: Authentication error"),
        ):
            result = runner.invoke(
                cli,
                ["import", "--resource-type", "cloudflare_record", "--zone", "zone1", "--token", "t"],
            )

        assert result.exit_code == 1
        assert "Authentication error" in result.output

    def test_resource_type_required(self, runner):
        result = runner.invoke(cli, ["import", "--zone", "zone1", "--token", "t"])
        assert result.exit_code == 2


class TestResourceTypesCommand:
    """Tests for `cf-terraforming resource-types`."""

    def test_lists_types(self, runner):
        result = runner.invoke(cli, ["resource-types"], env={"COLUMNS": "200"})
        assert result.exit_code == 0, result.output
        assert "cloudflare_record" in result.output
        assert "cloudflare_zone_lockdown" in result.output


class TestGroup:
    """Tests for the command group."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_verbose_flag(self, runner):
        with patch.object(CloudflareClient, "get", return_value=[]):
            result = runner.invoke(
                cli,
                ["-v", "import", "--resource-type", "cloudflare_record", "--zone", "zone1", "--token", "t"],
            )
        assert result.exit_code == 0, result.output

    def test_logs_stay_off_stdout(self, runner):
        """Debug logging goes to stderr; stdout carries only the commands."""
        with patch.object(CloudflareClient, "get", return_value=[{"id": "rec1"}]):
            result = runner.invoke(
                cli,
                ["-v", "import", "--resource-type", "cloudflare_record", "--zone", "zone1", "--token", "t"],
                env={"COLUMNS": "200"},
            )

        assert result.exit_code == 0, result.output
        assert result.stdout == (
            "terraform import cloudflare_record.terraform_managed_resource_rec1 zone1/rec1\n"
        )
        assert "DEBUG" in result.stderr
        assert "Logging configured" in result.stderr
        assert "Fetching cloudflare_record resources" in result.stderr


class TestValidation:
    """Tests for option validation helpers."""

    def test_build_import_config(self):
        config = build_import_config("cloudflare_record", None, "zone1")
        assert config.scope.zone_id == "zone1"
        assert config.scope.account_id == ""
        assert config.import_command_prefix == "terraform import"

    def test_zone_needs_no_scope(self):
        config = build_import_config("cloudflare_zone", None, None)
        assert config.scope.is_empty

    def test_either_needs_some_scope(self):
        with pytest.raises(ConfigurationError, match="--account or --zone"):
            build_import_config("cloudflare_custom_pages", None, None)

    def test_email_without_key(self):
        with pytest.raises(ConfigurationError, match="used together"):
            validate_credentials(None, "me@example.com", None)

    def test_token_is_enough(self):
        validate_credentials("t", None, None)
