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
esclient - Cluster discovery settings for an event store client.

This package provides the validated, immutable settings a client uses to
locate the nodes of a cluster, by gossip seeds or by DNS, before it
establishes a connection.
"""

__version__ = "0.4.0"
__license__ = "Apache-2.0"

from esclient.cluster import (
    ClusterNodeSettings,
    DiscoveryMethod,
    DnsDiscovererBuilder,
    Endpoint,
    GossipSeed,
    GossipSeedDiscovererBuilder,
)
from esclient.exceptions import ConfigurationError, ESClientError, InvalidConfigurationError
from esclient.validators import ATTEMPTS_RANGE, Range

__all__ = [
    # Cluster
    "ClusterNodeSettings",
    "DiscoveryMethod",
    "DnsDiscovererBuilder",
    "Endpoint",
    "GossipSeed",
    "GossipSeedDiscovererBuilder",
    # Validation
    "ATTEMPTS_RANGE",
    "Range",
    # Exceptions
    "ConfigurationError",
    "ESClientError",
    "InvalidConfigurationError",
]
