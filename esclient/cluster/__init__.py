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
Cluster discovery settings for esclient.

This module provides the settings a client needs to locate the nodes of
a cluster before connecting, using either gossip seeds or DNS.

Example (gossip seeds):
    >>> from esclient.cluster import ClusterNodeSettings, Endpoint
    >>> settings = (
    ...     ClusterNodeSettings.for_gossip_seed_discoverer()
    ...     .gossip_seed_endpoints([Endpoint("10.0.0.1", 2113)])
    ...     .build()
    ... )

Example (DNS):
    >>> settings = ClusterNodeSettings.for_dns_discoverer().dns("cluster.internal").build()

Example (environment):
    >>> settings = ClusterNodeSettings.from_env()
"""

from esclient.cluster.gossip_seed import Endpoint, GossipSeed
from esclient.cluster.models import ClusterSettingsModel, GossipSeedModel, load_settings
from esclient.cluster.settings import (
    DEFAULT_DISCOVER_ATTEMPT_INTERVAL,
    DEFAULT_EXTERNAL_GOSSIP_PORT,
    DEFAULT_GOSSIP_TIMEOUT,
    DEFAULT_MAX_DISCOVER_ATTEMPTS,
    UNLIMITED_ATTEMPTS,
    ClusterNodeSettings,
    DiscoveryMethod,
    DnsDiscovererBuilder,
    GossipSeedDiscovererBuilder,
    SettingsOptions,
    new_dns_settings,
    new_gossip_seed_settings,
)

__all__ = [
    # Settings
    "ClusterNodeSettings",
    "DiscoveryMethod",
    "SettingsOptions",
    "new_dns_settings",
    "new_gossip_seed_settings",
    # Builders
    "DnsDiscovererBuilder",
    "GossipSeedDiscovererBuilder",
    # Seeds
    "Endpoint",
    "GossipSeed",
    # Documents
    "ClusterSettingsModel",
    "GossipSeedModel",
    "load_settings",
    # Defaults
    "DEFAULT_DISCOVER_ATTEMPT_INTERVAL",
    "DEFAULT_EXTERNAL_GOSSIP_PORT",
    "DEFAULT_GOSSIP_TIMEOUT",
    "DEFAULT_MAX_DISCOVER_ATTEMPTS",
    "UNLIMITED_ATTEMPTS",
]
