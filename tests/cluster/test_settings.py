# Copyright 2026 Firefly Software Solutions Inc
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for cluster node settings and their builders."""

from datetime import timedelta

import pytest

from esclient.cluster.gossip_seed import Endpoint, GossipSeed
from esclient.cluster.settings import (
    DEFAULT_EXTERNAL_GOSSIP_PORT,
    ClusterNodeSettings,
    DiscoveryMethod,
    DnsDiscovererBuilder,
    GossipSeedDiscovererBuilder,
    SettingsOptions,
    new_dns_settings,
    new_gossip_seed_settings,
)
from esclient.exceptions import InvalidConfigurationError


def seed(host: str = "10.0.0.1", port: int = 2113, host_header: str = "") -> GossipSeed:
    return GossipSeed(Endpoint(host, port), host_header)


class TestGossipSeedDiscovererBuilder:
    """Tests for the gossip seed builder."""

    def test_defaults(self):
        """Test omitted optional fields get their defaults."""
        settings = (
            ClusterNodeSettings.for_gossip_seed_discoverer()
            .gossip_seed_endpoints([Endpoint.parse("10.0.0.1:2113")])
            .build()
        )

        assert settings.dns == ""
        assert settings.max_discover_attempts == 10
        assert settings.discover_attempt_interval == timedelta(milliseconds=500)
        assert settings.gossip_timeout == timedelta(seconds=1)
        assert settings.external_gossip_port == 0
        assert settings.gossip_seeds == (seed(),)
        assert settings.discovery_method == DiscoveryMethod.GOSSIP_SEED

    def test_seed_order_preserved(self):
        """Test seeds keep the order they were given in."""
        seeds = [seed("10.0.0.3"), seed("10.0.0.1"), seed("10.0.0.2", host_header="node2")]

        settings = GossipSeedDiscovererBuilder().gossip_seeds(seeds).build()

        assert list(settings.gossip_seeds) == seeds

    def test_endpoints_wrapped_without_host_header(self):
        """Test raw endpoints and (host, port) pairs become seeds."""
        settings = (
            GossipSeedDiscovererBuilder()
            .gossip_seed_endpoints([Endpoint("a", 1), ("b", 2)])
            .build()
        )

        assert settings.gossip_seeds == (seed("a", 1), seed("b", 2))
        assert all(s.host_header == "" for s in settings.gossip_seeds)

    def test_seeds_defensively_copied(self):
        """Test mutating the caller's list does not change built settings."""
        seeds = [seed()]
        settings = GossipSeedDiscovererBuilder().gossip_seeds(seeds).build()

        seeds.append(seed("10.0.0.9"))
        seeds[0] = seed("10.0.0.8")

        assert settings.gossip_seeds == (seed(),)
        assert isinstance(settings.gossip_seeds, tuple)

    def test_all_fields(self):
        """Test explicitly set fields are kept."""
        settings = (
            GossipSeedDiscovererBuilder()
            .gossip_seeds([seed()])
            .max_discover_attempts(3)
            .discover_attempt_interval(timedelta(seconds=2))
            .gossip_timeout(timedelta(milliseconds=250))
            .build()
        )

        assert settings.max_discover_attempts == 3
        assert settings.discover_attempt_interval == timedelta(seconds=2)
        assert settings.gossip_timeout == timedelta(milliseconds=250)

    @pytest.mark.parametrize("seeds", [None, []])
    def test_missing_seeds_rejected(self, seeds):
        """Test an absent or empty seed list fails the build."""
        builder = GossipSeedDiscovererBuilder().gossip_seeds(seeds).max_discover_attempts(5)

        with pytest.raises(InvalidConfigurationError, match="gossip seeds are not specified") as exc_info:
            builder.build()

        assert exc_info.value.field == "gossip_seeds"

    def test_no_seeds_set_rejected(self):
        """Test building without ever setting seeds fails."""
        with pytest.raises(InvalidConfigurationError):
            GossipSeedDiscovererBuilder().build()

    def test_missing_seeds_checked_before_attempts(self):
        """Test the seed check runs before the shared range checks."""
        builder = GossipSeedDiscovererBuilder().max_discover_attempts(0)

        with pytest.raises(InvalidConfigurationError, match="gossip seeds"):
            builder.build()

    def test_none_endpoints(self):
        """Test passing None endpoints leaves seeds unset."""
        builder = GossipSeedDiscovererBuilder().gossip_seed_endpoints(None)

        assert builder._options.gossip_seeds is None

    def test_setters_do_not_raise(self):
        """Test invalid values are only reported by build()."""
        builder = (
            GossipSeedDiscovererBuilder()
            .gossip_seeds([seed()])
            .max_discover_attempts(-5)
            .gossip_timeout(timedelta(seconds=-1))
        )

        with pytest.raises(InvalidConfigurationError):
            builder.build()

    def test_failed_build_leaves_options_untouched(self):
        """Test a failed build does not default or modify builder state."""
        builder = GossipSeedDiscovererBuilder().gossip_seeds([seed()]).max_discover_attempts(0)

        with pytest.raises(InvalidConfigurationError):
            builder.build()

        assert builder._options == SettingsOptions(gossip_seeds=[seed()], max_discover_attempts=0)

    def test_rebuild_after_correction(self):
        """Test the builder can be corrected and built again."""
        builder = GossipSeedDiscovererBuilder().max_discover_attempts(0)
        with pytest.raises(InvalidConfigurationError):
            builder.build()

        settings = builder.gossip_seeds([seed()]).max_discover_attempts(1).build()

        assert settings.max_discover_attempts == 1

    def test_endpoints_validated_at_build(self):
        """Test invalid endpoint pairs are reported by build(), not the setter."""
        builder = GossipSeedDiscovererBuilder().gossip_seed_endpoints([("", 2113)])

        with pytest.raises(InvalidConfigurationError) as exc_info:
            builder.build()

        assert exc_info.value.field == "endpoint"

    def test_malformed_pair_reported_at_build(self):
        """Test a pair that is not (host, port) fails the build."""
        builder = GossipSeedDiscovererBuilder().gossip_seed_endpoints([("10.0.0.1",)])

        with pytest.raises(InvalidConfigurationError, match="expected an Endpoint"):
            builder.build()

    def test_last_seed_setter_wins(self):
        """Test gossip_seeds replaces earlier endpoints and vice versa."""
        builder = GossipSeedDiscovererBuilder().gossip_seed_endpoints([("a", 1)]).gossip_seeds([seed()])
        assert builder.build().gossip_seeds == (seed(),)

        builder.gossip_seed_endpoints([("b", 2)])
        assert builder.build().gossip_seeds == (seed("b", 2),)


class TestDnsDiscovererBuilder:
    """Tests for the DNS builder."""

    def test_defaults(self):
        """Test omitted optional fields get their defaults."""
        settings = ClusterNodeSettings.for_dns_discoverer().dns("cluster.internal").build()

        assert settings.dns == "cluster.internal"
        assert settings.external_gossip_port == 30778
        assert settings.gossip_seeds == ()
        assert settings.max_discover_attempts == 10
        assert settings.discover_attempt_interval == timedelta(milliseconds=500)
        assert settings.gossip_timeout == timedelta(seconds=1)
        assert settings.discovery_method == DiscoveryMethod.DNS

    def test_explicit_port(self):
        """Test an explicit positive port is kept."""
        settings = DnsDiscovererBuilder().dns("cluster.internal").external_gossip_port(2113).build()

        assert settings.external_gossip_port == 2113

    @pytest.mark.parametrize("dns", [None, ""])
    def test_missing_dns_rejected(self, dns):
        """Test an absent or empty DNS name fails the build."""
        builder = DnsDiscovererBuilder().external_gossip_port(2113).max_discover_attempts(5)
        if dns is not None:
            builder.dns(dns)

        with pytest.raises(InvalidConfigurationError, match="dns is null or empty") as exc_info:
            builder.build()

        assert exc_info.value.field == "dns"

    @pytest.mark.parametrize("port", [0, -1, -30778])
    def test_non_positive_port_rejected(self, port):
        """Test an explicit port of zero or less fails the build."""
        builder = DnsDiscovererBuilder().dns("cluster.internal").external_gossip_port(port)

        with pytest.raises(InvalidConfigurationError, match="external_gossip_port should be positive"):
            builder.build()

    @pytest.mark.parametrize("port", [2113.5, 2113.0, True])
    def test_non_integer_port_rejected(self, port):
        """Test a port that is not an int fails the build."""
        builder = DnsDiscovererBuilder().dns("cluster.internal").external_gossip_port(port)

        with pytest.raises(InvalidConfigurationError, match="external_gossip_port should be an integer"):
            builder.build()

    def test_port_default_not_written_to_builder(self):
        """Test the DNS port default does not leak into builder state."""
        builder = DnsDiscovererBuilder().dns("cluster.internal")

        builder.build()

        assert builder._options.external_gossip_port is None


class TestMaxDiscoverAttempts:
    """Tests for the attempts range check shared by both strategies."""

    @pytest.mark.parametrize("attempts", [-1, 1, 10, 2**31 - 1])
    def test_accepted(self, attempts):
        """Test -1 and in-range values are accepted."""
        settings = DnsDiscovererBuilder().dns("cluster.internal").max_discover_attempts(attempts).build()

        assert settings.max_discover_attempts == attempts

    @pytest.mark.parametrize("attempts", [0, -2, -100, 2**31])
    def test_rejected(self, attempts):
        """Test values outside the range fail and name the range."""
        builder = GossipSeedDiscovererBuilder().gossip_seeds([seed()]).max_discover_attempts(attempts)

        with pytest.raises(InvalidConfigurationError, match=r"Allowed range: \[1\.\.2147483647\]") as exc_info:
            builder.build()

        assert exc_info.value.field == "max_discover_attempts"

    @pytest.mark.parametrize("attempts", [2.5, True, "10"])
    def test_non_integer_rejected(self, attempts):
        """Test floats, bools and strings are not accepted as attempt counts."""
        builder = DnsDiscovererBuilder().dns("cluster.internal").max_discover_attempts(attempts)

        with pytest.raises(InvalidConfigurationError, match="max_discover_attempts should be an integer"):
            builder.build()

    def test_unlimited(self):
        """Test the unlimited sentinel is reported."""
        settings = GossipSeedDiscovererBuilder().gossip_seeds([seed()]).max_discover_attempts(-1).build()

        assert settings.has_unlimited_attempts is True


class TestDurations:
    """Tests for duration validation."""

    def test_zero_allowed(self):
        """Test zero durations are valid."""
        settings = (
            DnsDiscovererBuilder()
            .dns("cluster.internal")
            .discover_attempt_interval(timedelta(0))
            .gossip_timeout(timedelta(0))
            .build()
        )

        assert settings.discover_attempt_interval == timedelta(0)
        assert settings.gossip_timeout == timedelta(0)

    @pytest.mark.parametrize("field", ["discover_attempt_interval", "gossip_timeout"])
    def test_negative_rejected(self, field):
        """Test negative durations fail the build."""
        builder = DnsDiscovererBuilder().dns("cluster.internal")
        getattr(builder, field)(timedelta(milliseconds=-1))

        with pytest.raises(InvalidConfigurationError, match=f"{field} should not be negative"):
            builder.build()

    @pytest.mark.parametrize("field", ["discover_attempt_interval", "gossip_timeout"])
    def test_sub_millisecond_rejected(self, field):
        """Test durations must be whole milliseconds."""
        builder = DnsDiscovererBuilder().dns("cluster.internal")
        getattr(builder, field)(timedelta(microseconds=1500))

        with pytest.raises(InvalidConfigurationError, match=f"{field} should be a whole number of milliseconds"):
            builder.build()

    def test_non_timedelta_rejected(self):
        """Test a plain number is not accepted as a duration."""
        builder = DnsDiscovererBuilder().dns("cluster.internal").gossip_timeout(5)

        with pytest.raises(InvalidConfigurationError, match="gossip_timeout should be a timedelta"):
            builder.build()


class TestStrategyConstructors:
    """Tests for the option-based constructors."""

    def test_gossip_seed_path_accepts_positive_port(self):
        """Test a positive port is kept on the gossip seed path."""
        settings = new_gossip_seed_settings(SettingsOptions(gossip_seeds=[seed()], external_gossip_port=2113))

        assert settings.external_gossip_port == 2113

    def test_gossip_seed_path_rejects_zero_port(self):
        """Test an explicit zero port fails on the gossip seed path too."""
        with pytest.raises(InvalidConfigurationError):
            new_gossip_seed_settings(SettingsOptions(gossip_seeds=[seed()], external_gossip_port=0))

    def test_dns_path_keeps_seeds_empty(self):
        """Test DNS settings default to no seeds."""
        settings = new_dns_settings(SettingsOptions(dns="cluster.internal"))

        assert settings.gossip_seeds == ()
        assert settings.external_gossip_port == DEFAULT_EXTERNAL_GOSSIP_PORT


class TestClusterNodeSettings:
    """Tests for the settings value object."""

    def test_immutable(self):
        """Test built settings cannot be modified."""
        settings = DnsDiscovererBuilder().dns("cluster.internal").build()

        with pytest.raises(AttributeError):
            settings.dns = "other.internal"

    def test_equality_and_hash(self):
        """Test equal settings compare and hash equal."""
        first = DnsDiscovererBuilder().dns("cluster.internal").build()
        second = DnsDiscovererBuilder().dns("cluster.internal").build()

        assert first == second
        assert hash(first) == hash(second)

    def test_repr(self):
        """Test repr lists the fields."""
        settings = DnsDiscovererBuilder().dns("cluster.internal").build()

        assert "dns='cluster.internal'" in repr(settings)
        assert "external_gossip_port=30778" in repr(settings)

    def test_to_dict_gossip_seeds(self):
        """Test gossip seed settings serialize without DNS keys."""
        settings = (
            GossipSeedDiscovererBuilder()
            .gossip_seeds([seed(), seed("10.0.0.2", host_header="node2.internal")])
            .build()
        )

        assert settings.to_dict() == {
            "max_discover_attempts": 10,
            "discover_attempt_interval_ms": 500,
            "gossip_timeout_ms": 1000,
            "gossip_seeds": ["10.0.0.1:2113", "10.0.0.2:2113@node2.internal"],
        }

    def test_to_dict_dns(self):
        """Test DNS settings serialize without seeds."""
        settings = DnsDiscovererBuilder().dns("cluster.internal").build()

        assert settings.to_dict() == {
            "max_discover_attempts": 10,
            "discover_attempt_interval_ms": 500,
            "gossip_timeout_ms": 1000,
            "dns": "cluster.internal",
            "external_gossip_port": 30778,
        }

    @pytest.mark.parametrize(
        "builder",
        [
            DnsDiscovererBuilder().dns("cluster.internal").max_discover_attempts(-1),
            GossipSeedDiscovererBuilder()
            .gossip_seeds([seed("::1", 2113, "node1"), seed()])
            .gossip_timeout(timedelta(milliseconds=1500)),
            DnsDiscovererBuilder()
            .dns("cluster.internal")
            .discover_attempt_interval(timedelta(days=3, milliseconds=7))
            .gossip_timeout(timedelta(0)),
        ],
    )
    def test_dict_round_trip(self, builder):
        """Test to_dict output loads back into equal settings."""
        settings = builder.build()

        assert ClusterNodeSettings.from_dict(settings.to_dict()) == settings
