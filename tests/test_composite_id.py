"""
Tests for the Composite ID Resolver.
"""

import re

import pytest

from cf_terraforming.core.composite_id import (
    CompositeIDResolver,
    resolve_template,
)
from cf_terraforming.core.config import Scope
from cf_terraforming.core.exceptions import UnknownResourceTypeError
from cf_terraforming.resources import FORMAT_TABLE

UNRESOLVED = re.compile(r":(identifier_type|identifier_value|zone_id|account_id|id)")


@pytest.fixture
def resolver():
    return CompositeIDResolver(FORMAT_TABLE)


class TestResolve:
    """Tests for CompositeIDResolver.resolve."""

    def test_account_member(self, resolver, account_scope):
        """Account-scoped template resolves to account id and resource id."""
        line = resolver.resolve("cloudflare_account_member", "abc", account_scope)
        assert line == (
            "terraform import "
            "cloudflare_account_member.terraform_managed_resource_abc acc1/abc\n"
        )

    def test_dns_record(self, resolver, zone_scope):
        """Zone-scoped template resolves to zone id and resource id."""
        line = resolver.resolve("cloudflare_record", "rec1", zone_scope)
        assert line == (
            "terraform import "
            "cloudflare_record.terraform_managed_resource_rec1 zone1/rec1\n"
        )

    def test_access_rule_with_account(self, resolver, account_scope):
        """identifier_type/identifier_value come from the account."""
        line = resolver.resolve("cloudflare_access_rule", "r1", account_scope)
        assert line.endswith(" account/acc1/r1\n")

    def test_access_rule_with_zone(self, resolver, zone_scope):
        """identifier_type/identifier_value fall back to the zone."""
        line = resolver.resolve("cloudflare_access_rule", "r1", zone_scope)
        assert line.endswith(" zone/zone1/r1\n")

    def test_argo_fixed_suffix(self, resolver, zone_scope):
        """Argo keeps its literal suffix whatever the synthesized id is."""
        line = resolver.resolve("cloudflare_argo", "0123abcd", zone_scope)
        assert line.rstrip("\n").endswith(" zone1/argo")
        assert "cloudflare_argo.terraform_managed_resource_0123abcd" in line

    def test_bare_id(self, resolver, zone_scope):
        """Templates made of :id only ignore the scope."""
        line = resolver.resolve("cloudflare_zone", "z9", zone_scope)
        assert line.endswith(" z9\n")

    def test_unknown_type(self, resolver, zone_scope):
        """An unregistered type is an error, never partial output."""
        with pytest.raises(UnknownResourceTypeError) as exc_info:
            resolver.resolve("cloudflare_unknown_thing", "x", zone_scope)
        assert exc_info.value.resource_type == "cloudflare_unknown_thing"

    def test_idempotent(self, resolver, account_scope):
        """Identical inputs give byte-identical output."""
        first = resolver.resolve("cloudflare_custom_pages", "p1", account_scope)
        second = resolver.resolve("cloudflare_custom_pages", "p1", account_scope)
        assert first == second

    @pytest.mark.parametrize("resource_type", sorted(FORMAT_TABLE))
    def test_no_placeholders_survive(self, resolver, resource_type):
        """Every registered template resolves fully."""
        for scope in (Scope(account_id="acc1"), Scope(zone_id="zone1")):
            composite = resolver.composite_id(resource_type, "abc123", scope)
            assert not UNRESOLVED.search(composite)

    def test_custom_prefixes(self, zone_scope):
        """Command and resource name prefixes are configurable."""
        resolver = CompositeIDResolver(
            {"cloudflare_record": ":zone_id/:id"},
            import_command_prefix="tofu import",
            resource_name_prefix="imported",
        )
        line = resolver.resolve("cloudflare_record", "rec1", zone_scope)
        assert line == "tofu import cloudflare_record.imported_rec1 zone1/rec1\n"


class TestResolveTemplate:
    """Tests for the single-pass substitution."""

    def test_values_are_not_rescanned(self):
        """A substituted value containing a token is left as is."""
        assert resolve_template(":zone_id/:id", ":account_id", Scope(zone_id="z")) == (
            "z/:account_id"
        )

    def test_longest_token_wins(self):
        """:identifier_type is not read as :id followed by text."""
        result = resolve_template(
            ":identifier_type/:identifier_value/:id", "r1", Scope(zone_id="z")
        )
        assert result == "zone/z/r1"

    def test_empty_scope_is_not_validated(self):
        """With no scope the line is still produced, with empty values."""
        assert resolve_template(":identifier_type/:identifier_value/:id", "r1", Scope()) == (
            "zone//r1"
        )

    def test_verbatim_empty_ids(self):
        """:zone_id and :account_id are substituted even when empty."""
        assert resolve_template(":account_id/:id", "r1", Scope(zone_id="z")) == "/r1"


class TestResolverTable:
    """Tests for the injected Format Table."""

    def test_table_is_read_only(self):
        """The resolver's table cannot be modified after construction."""
        resolver = CompositeIDResolver({"cloudflare_zone": ":id"})
        with pytest.raises(TypeError):
            resolver.formats["cloudflare_record"] = ":zone_id/:id"

    def test_table_is_copied(self):
        """Later changes to the source dict do not leak into the resolver."""
        formats = {"cloudflare_zone": ":id"}
        resolver = CompositeIDResolver(formats)
        formats["cloudflare_record"] = ":zone_id/:id"
        assert "cloudflare_record" not in resolver.formats
        assert resolver.formats["cloudflare_zone"] == ":id"
