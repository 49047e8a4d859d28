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
Pydantic models for cluster settings documents.

Settings can be loaded from a mapping (a parsed YAML or JSON document)
or from environment variables instead of being assembled through a
builder. The document is validated here, then built through the same
strategy constructors the builders use, so the same defaults and checks
apply.

Example:
    >>> from esclient.cluster.models import load_settings
    >>> settings = load_settings({
    ...     "gossip_seeds": ["10.0.0.1:2113", "10.0.0.2:2113@node2.internal"],
    ...     "gossip_timeout_ms": 2500,
    ... })
"""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from esclient.cluster.gossip_seed import Endpoint, GossipSeed
from esclient.cluster.settings import (
    ClusterNodeSettings,
    SettingsOptions,
    new_dns_settings,
    new_gossip_seed_settings,
)
from esclient.exceptions import InvalidConfigurationError
from esclient.utils.logger import logger

# Environment variable suffix -> document key
ENV_KEYS: Dict[str, str] = {
    "CLUSTER_DNS": "dns",
    "GOSSIP_SEEDS": "gossip_seeds",
    "MAX_DISCOVER_ATTEMPTS": "max_discover_attempts",
    "DISCOVER_ATTEMPT_INTERVAL_MS": "discover_attempt_interval_ms",
    "EXTERNAL_GOSSIP_PORT": "external_gossip_port",
    "GOSSIP_TIMEOUT_MS": "gossip_timeout_ms",
}


class GossipSeedModel(BaseModel):
    """A gossip seed as written in a settings document."""

    host: str = Field(..., min_length=1, description="Host name or IP address of the seed node")
    port: int = Field(..., ge=0, le=65535, description="External HTTP port of the seed node")
    host_header: str = Field("", description="Host header to present on gossip requests")

    def to_gossip_seed(self) -> GossipSeed:
        return GossipSeed(endpoint=Endpoint(host=self.host, port=self.port), host_header=self.host_header)


class ClusterSettingsModel(BaseModel):
    """
    Document model for cluster node settings.

    Exactly one of ``dns`` and ``gossip_seeds`` selects the discovery
    strategy. Every other field is optional and defaults the same way
    the builders do.

    Attributes:
        dns: DNS name under which cluster nodes are listed
        gossip_seeds: Seeds as ``host:port[@host-header]`` strings or objects
        max_discover_attempts: Maximum discovery attempts (-1 for unlimited)
        discover_attempt_interval_ms: Interval between attempts in milliseconds
        external_gossip_port: Well-known gossip port
        gossip_timeout_ms: Gossip timeout in milliseconds
    """

    model_config = ConfigDict(extra="forbid")

    dns: Optional[str] = Field(None, description="DNS name of the cluster")
    gossip_seeds: Optional[List[GossipSeedModel]] = Field(None, description="Gossip seed endpoints")
    max_discover_attempts: Optional[int] = Field(None, description="Maximum discovery attempts")
    discover_attempt_interval_ms: Optional[int] = Field(None, description="Interval between attempts (ms)")
    external_gossip_port: Optional[int] = Field(None, description="Well-known gossip port")
    gossip_timeout_ms: Optional[int] = Field(None, description="Gossip timeout (ms)")

    @field_validator("gossip_seeds", mode="before")
    @classmethod
    def _parse_seed_strings(cls, value: Any) -> Any:
        """Accept a comma-separated string and ``host:port[@header]`` items."""
        if value is None:
            return value
        if isinstance(value, str):
            value = [part for part in value.split(",") if part.strip()]
        if not isinstance(value, (list, tuple)):
            return value

        parsed = []
        for item in value:
            if isinstance(item, str):
                seed = GossipSeed.parse(item)
                parsed.append({
                    "host": seed.endpoint.host,
                    "port": seed.endpoint.port,
                    "host_header": seed.host_header,
                })
            else:
                parsed.append(item)
        return parsed

    def to_options(self) -> SettingsOptions:
        """Convert to builder options; absent fields stay unset."""
        return SettingsOptions(
            dns=self.dns,
            max_discover_attempts=self.max_discover_attempts,
            discover_attempt_interval=_millis(self.discover_attempt_interval_ms, "discover_attempt_interval_ms"),
            external_gossip_port=self.external_gossip_port,
            gossip_seeds=(
                [seed.to_gossip_seed() for seed in self.gossip_seeds]
                if self.gossip_seeds is not None
                else None
            ),
            gossip_timeout=_millis(self.gossip_timeout_ms, "gossip_timeout_ms"),
        )

    def to_settings(self) -> ClusterNodeSettings:
        """Build settings through the strategy the document selects.

        Raises:
            InvalidConfigurationError: If both or neither strategy is given,
                or if any setting is invalid
        """
        options = self.to_options()

        if self.gossip_seeds is not None:
            if self.dns:
                raise InvalidConfigurationError(
                    "dns and gossip_seeds are mutually exclusive", field="dns"
                )
            return new_gossip_seed_settings(options)

        if self.dns is not None:
            return new_dns_settings(options)

        raise InvalidConfigurationError("either dns or gossip_seeds must be specified")


def _millis(value: Optional[int], field: str) -> Optional[timedelta]:
    if value is None:
        return None
    try:
        return timedelta(milliseconds=value)
    except OverflowError as e:
        raise InvalidConfigurationError(
            f"{field} value {value} is too large for a duration", field=field
        ) from e


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'settings'}: {err['msg']}"
        for err in error.errors()
    )


def load_settings(data: Mapping[str, Any]) -> ClusterNodeSettings:
    """Validate a settings document and build it.

    Args:
        data: Mapping with the keys of ``ClusterSettingsModel``

    Raises:
        InvalidConfigurationError: If the document or any setting is invalid
    """
    try:
        model = ClusterSettingsModel.model_validate(dict(data))
    except ValidationError as e:
        errors = e.errors()
        field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else None
        raise InvalidConfigurationError(f"Invalid cluster settings: {_describe(e)}", field=field) from e

    return model.to_settings()


def settings_from_env(
    environ: Optional[Mapping[str, str]] = None,
    prefix: str = "ESCLIENT_",
) -> ClusterNodeSettings:
    """Build settings from ``<prefix><NAME>`` environment variables.

    Blank variables are treated as unset. See ``ENV_KEYS`` for the names.
    """
    environ = os.environ if environ is None else environ

    data: Dict[str, Any] = {}
    for suffix, key in ENV_KEYS.items():
        value = environ.get(f"{prefix}{suffix}")
        if value is not None and value.strip():
            data[key] = value.strip()

    logger.debug(f"Loading cluster settings from environment (prefix={prefix}): {sorted(data)}")
    return load_settings(data)
