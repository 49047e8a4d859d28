# Copyright 2026 Firefly Software Solutions Inc
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Cluster node settings for esclient.

This module builds the settings a client uses to locate the nodes of a
cluster before it connects. Two discovery strategies are supported:

1. Gossip seeds: an explicit list of node endpoints to ask for topology
2. DNS: a DNS name listing the nodes, plus the well-known gossip port

Both strategies produce the same immutable ``ClusterNodeSettings`` value.
Nothing here performs I/O; the retry counts, intervals and timeouts are
data for the discovery component that consumes the settings.

Example (gossip seeds):
    >>> from esclient.cluster import ClusterNodeSettings, Endpoint
    >>> settings = (
    ...     ClusterNodeSettings.for_gossip_seed_discoverer()
    ...     .gossip_seed_endpoints([Endpoint("10.0.0.1", 2113)])
    ...     .build()
    ... )
    >>> settings.max_discover_attempts
    10

Example (DNS):
    >>> settings = ClusterNodeSettings.for_dns_discoverer().dns("cluster.internal").build()
    >>> settings.external_gossip_port
    30778
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from esclient.cluster.gossip_seed import EndpointLike, GossipSeed
from esclient.utils.logger import logger
from esclient.validators import (
    ATTEMPTS_RANGE,
    check_argument,
    is_integer,
    is_null_or_empty,
    is_positive,
)

UNLIMITED_ATTEMPTS = -1

DEFAULT_MAX_DISCOVER_ATTEMPTS = 10
DEFAULT_DISCOVER_ATTEMPT_INTERVAL = timedelta(milliseconds=500)
DEFAULT_GOSSIP_TIMEOUT = timedelta(seconds=1)

# Gossip port used by the DNS strategy when none is given
DEFAULT_EXTERNAL_GOSSIP_PORT = 30778

# "Not used" marker for the gossip seed strategy
UNUSED_GOSSIP_PORT = 0


class DiscoveryMethod(str, Enum):
    """Strategy the settings were built for."""
    GOSSIP_SEED = "gossip_seed"
    DNS = "dns"


@dataclass
class SettingsOptions:
    """Mutable scratch state collected by the builders.

    Every field starts as ``None`` meaning "not provided", which is
    distinct from a provided zero.
    """
    dns: Optional[str] = None
    max_discover_attempts: Optional[int] = None
    discover_attempt_interval: Optional[timedelta] = None
    external_gossip_port: Optional[int] = None
    gossip_seeds: Optional[Sequence[GossipSeed]] = None
    gossip_timeout: Optional[timedelta] = None


@dataclass(frozen=True)
class ClusterNodeSettings:
    """Validated settings for discovering the nodes of a cluster.

    Instances are only created by a builder's ``build()`` (or the
    ``from_dict`` / ``from_env`` loaders) and never change afterwards,
    so they can be shared freely between threads.

    Attributes:
        dns: DNS name under which cluster nodes are listed ("" when seeds are used)
        max_discover_attempts: Maximum number of discovery attempts (-1 for unlimited)
        discover_attempt_interval: Interval between discovery attempts
        external_gossip_port: Well-known gossip port (0 when seeds are used)
        gossip_seeds: Endpoints for seeding gossip if not using DNS
        gossip_timeout: Period after which gossip times out if none is received
    """

    dns: str
    max_discover_attempts: int
    discover_attempt_interval: timedelta
    external_gossip_port: int
    gossip_seeds: Tuple[GossipSeed, ...]
    gossip_timeout: timedelta

    @property
    def discovery_method(self) -> DiscoveryMethod:
        """Get the discovery strategy these settings describe."""
        return DiscoveryMethod.DNS if self.dns else DiscoveryMethod.GOSSIP_SEED

    @property
    def has_unlimited_attempts(self) -> bool:
        """Check if discovery should be retried indefinitely."""
        return self.max_discover_attempts == UNLIMITED_ATTEMPTS

    @staticmethod
    def for_gossip_seed_discoverer() -> "GossipSeedDiscovererBuilder":
        """Create a new builder for the gossip seed discoverer."""
        return GossipSeedDiscovererBuilder()

    @staticmethod
    def for_dns_discoverer() -> "DnsDiscovererBuilder":
        """Create a new builder for the DNS discoverer."""
        return DnsDiscovererBuilder()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the document form accepted by ``from_dict``.

        Durations are written as whole milliseconds and the key of the
        unused strategy is left out.
        """
        data: Dict[str, Any] = {
            "max_discover_attempts": self.max_discover_attempts,
            "discover_attempt_interval_ms": _to_millis(self.discover_attempt_interval),
            "gossip_timeout_ms": _to_millis(self.gossip_timeout),
        }
        if self.dns:
            data["dns"] = self.dns
        if self.gossip_seeds:
            data["gossip_seeds"] = [str(seed) for seed in self.gossip_seeds]
        if self.external_gossip_port != UNUSED_GOSSIP_PORT:
            data["external_gossip_port"] = self.external_gossip_port
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClusterNodeSettings":
        """Build settings from a mapping (e.g. a parsed YAML or JSON document).

        Raises:
            InvalidConfigurationError: If the document or any setting is invalid
        """
        from esclient.cluster.models import load_settings

        return load_settings(data)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = "ESCLIENT_",
    ) -> "ClusterNodeSettings":
        """Build settings from environment variables.

        Environment variables:
            ESCLIENT_CLUSTER_DNS: DNS name of the cluster
            ESCLIENT_GOSSIP_SEEDS: Comma-separated seeds (host:port[@host-header])
            ESCLIENT_MAX_DISCOVER_ATTEMPTS: Maximum discovery attempts (-1 for unlimited)
            ESCLIENT_DISCOVER_ATTEMPT_INTERVAL_MS: Interval between attempts (ms)
            ESCLIENT_EXTERNAL_GOSSIP_PORT: Well-known gossip port
            ESCLIENT_GOSSIP_TIMEOUT_MS: Gossip timeout (ms)

        Exactly one of CLUSTER_DNS and GOSSIP_SEEDS must be set.

        Returns:
            ClusterNodeSettings with values from environment
        """
        from esclient.cluster.models import settings_from_env

        return settings_from_env(environ=environ, prefix=prefix)


_MILLISECOND = timedelta(milliseconds=1)


def _to_millis(value: timedelta) -> int:
    return value // _MILLISECOND


def _duration(value: Optional[timedelta], default: timedelta, field: str) -> timedelta:
    if value is None:
        return default
    check_argument(isinstance(value, timedelta), f"{field} should be a timedelta", field=field)
    check_argument(value >= timedelta(0), f"{field} should not be negative", field=field)
    check_argument(
        value % _MILLISECOND == timedelta(0),
        f"{field} should be a whole number of milliseconds",
        field=field,
    )
    return value


def _finalize(options: SettingsOptions) -> ClusterNodeSettings:
    """Apply defaults and range checks shared by both strategies.

    ``options`` is left untouched; a failed check raises before any
    settings object exists.
    """
    dns = options.dns if options.dns is not None else ""

    if options.max_discover_attempts is None:
        max_discover_attempts = DEFAULT_MAX_DISCOVER_ATTEMPTS
    else:
        max_discover_attempts = options.max_discover_attempts
        check_argument(
            is_integer(max_discover_attempts),
            "max_discover_attempts should be an integer",
            field="max_discover_attempts",
        )
        check_argument(
            max_discover_attempts == UNLIMITED_ATTEMPTS
            or ATTEMPTS_RANGE.contains(max_discover_attempts),
            f"max_discover_attempts value is out of range. Allowed range: {ATTEMPTS_RANGE}.",
            field="max_discover_attempts",
        )

    discover_attempt_interval = _duration(
        options.discover_attempt_interval,
        DEFAULT_DISCOVER_ATTEMPT_INTERVAL,
        "discover_attempt_interval",
    )

    if options.external_gossip_port is None:
        external_gossip_port = UNUSED_GOSSIP_PORT
    else:
        external_gossip_port = options.external_gossip_port
        check_argument(
            is_integer(external_gossip_port),
            "external_gossip_port should be an integer",
            field="external_gossip_port",
        )
        check_argument(
            is_positive(external_gossip_port),
            "external_gossip_port should be positive",
            field="external_gossip_port",
        )

    gossip_seeds = tuple(options.gossip_seeds) if options.gossip_seeds is not None else ()

    gossip_timeout = _duration(options.gossip_timeout, DEFAULT_GOSSIP_TIMEOUT, "gossip_timeout")

    settings = ClusterNodeSettings(
        dns=dns,
        max_discover_attempts=max_discover_attempts,
        discover_attempt_interval=discover_attempt_interval,
        external_gossip_port=external_gossip_port,
        gossip_seeds=gossip_seeds,
        gossip_timeout=gossip_timeout,
    )
    logger.debug(f"Built cluster node settings ({settings.discovery_method.value}): {settings}")
    return settings


def new_gossip_seed_settings(options: SettingsOptions) -> ClusterNodeSettings:
    """Build settings for the gossip seed strategy.

    Raises:
        InvalidConfigurationError: If no gossip seeds are given, or a shared check fails
    """
    check_argument(
        options.gossip_seeds is not None and len(options.gossip_seeds) > 0,
        "gossip seeds are not specified",
        field="gossip_seeds",
    )
    return _finalize(options)


def new_dns_settings(options: SettingsOptions) -> ClusterNodeSettings:
    """Build settings for the DNS strategy.

    An unset ``external_gossip_port`` becomes ``DEFAULT_EXTERNAL_GOSSIP_PORT``.

    Raises:
        InvalidConfigurationError: If the DNS name is missing, or a shared check fails
    """
    check_argument(not is_null_or_empty(options.dns), "dns is null or empty", field="dns")

    if options.external_gossip_port is None:
        options = replace(options, external_gossip_port=DEFAULT_EXTERNAL_GOSSIP_PORT)

    return _finalize(options)


class GossipSeedDiscovererBuilder:
    """Builder for gossip seed discoverer settings.

    Example:
        >>> settings = (
        ...     GossipSeedDiscovererBuilder()
        ...     .gossip_seed_endpoints([("10.0.0.1", 2113), ("10.0.0.2", 2113)])
        ...     .max_discover_attempts(-1)
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._options = SettingsOptions()
        self._endpoints: Optional[List[EndpointLike]] = None

    def max_discover_attempts(self, max_discover_attempts: int) -> "GossipSeedDiscovererBuilder":
        """Set the maximum number of discovery attempts (default 10, -1 for unlimited)."""
        self._options.max_discover_attempts = max_discover_attempts
        return self

    def discover_attempt_interval(self, discover_attempt_interval: timedelta) -> "GossipSeedDiscovererBuilder":
        """Set the interval between discovery attempts (default 500 milliseconds)."""
        self._options.discover_attempt_interval = discover_attempt_interval
        return self

    def gossip_seed_endpoints(
        self, endpoints: Optional[Iterable[EndpointLike]]
    ) -> "GossipSeedDiscovererBuilder":
        """Set gossip seed endpoints, each without a host header.

        These should be the external HTTP endpoints of the nodes (standard
        port 2113). Use ``gossip_seeds`` when a node requires a specific
        Host header on the gossip request. Endpoints are wrapped into
        seeds by ``build()``.

        Args:
            endpoints: Endpoints or ``(host, port)`` pairs of nodes to seed gossip from
        """
        self._options.gossip_seeds = None
        self._endpoints = list(endpoints) if endpoints is not None else None
        return self

    def gossip_seeds(self, gossip_seeds: Optional[Sequence[GossipSeed]]) -> "GossipSeedDiscovererBuilder":
        """Set gossip seeds for the client."""
        self._endpoints = None
        self._options.gossip_seeds = gossip_seeds
        return self

    def gossip_timeout(self, gossip_timeout: timedelta) -> "GossipSeedDiscovererBuilder":
        """Set the period after which gossip times out if none is received (default 1 second)."""
        self._options.gossip_timeout = gossip_timeout
        return self

    def build(self) -> ClusterNodeSettings:
        """Build the cluster node settings.

        Raises:
            InvalidConfigurationError: If the configured values are invalid
        """
        options = self._options
        if self._endpoints is not None:
            options = replace(
                options, gossip_seeds=[GossipSeed.of(endpoint) for endpoint in self._endpoints]
            )
        return new_gossip_seed_settings(options)


class DnsDiscovererBuilder:
    """Builder for DNS discoverer settings."""

    def __init__(self) -> None:
        self._options = SettingsOptions()

    def dns(self, dns: str) -> "DnsDiscovererBuilder":
        """Set the DNS name under which cluster nodes are listed."""
        self._options.dns = dns
        return self

    def max_discover_attempts(self, max_discover_attempts: int) -> "DnsDiscovererBuilder":
        """Set the maximum number of discovery attempts (default 10, -1 for unlimited)."""
        self._options.max_discover_attempts = max_discover_attempts
        return self

    def discover_attempt_interval(self, discover_attempt_interval: timedelta) -> "DnsDiscovererBuilder":
        """Set the interval between discovery attempts (default 500 milliseconds)."""
        self._options.discover_attempt_interval = discover_attempt_interval
        return self

    def external_gossip_port(self, external_gossip_port: int) -> "DnsDiscovererBuilder":
        """Set the well-known port on which cluster gossip takes place (default 30778).

        This should be the external HTTP port the nodes (or their managers)
        listen on. If no single well-known port exists across the nodes,
        use gossip seed discovery instead.
        """
        self._options.external_gossip_port = external_gossip_port
        return self

    def gossip_timeout(self, gossip_timeout: timedelta) -> "DnsDiscovererBuilder":
        """Set the period after which gossip times out if none is received (default 1 second)."""
        self._options.gossip_timeout = gossip_timeout
        return self

    def build(self) -> ClusterNodeSettings:
        """Build the cluster node settings.

        Raises:
            InvalidConfigurationError: If the configured values are invalid
        """
        return new_dns_settings(self._options)
