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
Gossip seed endpoints for cluster discovery.

A gossip seed is a known node endpoint the client asks for cluster
topology. It should be the external HTTP endpoint of the node; the
standard port for it is 2113. When the node requires a specific Host
header on the gossip request, the seed carries it as ``host_header``.

Textual form (used by settings documents and the environment):

    host:port
    host:port@host-header
    [ipv6-address]:port
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from esclient.exceptions import InvalidConfigurationError
from esclient.validators import check_argument, is_integer

MAX_PORT = 65535


@dataclass(frozen=True)
class Endpoint:
    """A network endpoint: host name or IP address plus port."""

    host: str
    port: int

    def __post_init__(self) -> None:
        check_argument(
            isinstance(self.host, str) and len(self.host) > 0,
            "endpoint host should be a non-empty string",
            field="endpoint",
        )
        check_argument(
            is_integer(self.port) and 0 <= self.port <= MAX_PORT,
            f"endpoint port should be an integer between 0 and {MAX_PORT}",
            field="endpoint",
        )

    @classmethod
    def parse(cls, value: str) -> "Endpoint":
        """Parse ``host:port`` (or ``[v6]:port``) into an Endpoint.

        Raises:
            InvalidConfigurationError: If the host or port is missing or malformed
        """
        text = value.strip()
        if text.startswith("["):
            host, closed, rest = text[1:].partition("]")
            if not closed or not rest.startswith(":"):
                raise InvalidConfigurationError(
                    f"Invalid endpoint '{value}': expected '[host]:port'", field="endpoint"
                )
            port_text = rest[1:]
        else:
            host, sep, port_text = text.rpartition(":")
            if not sep:
                raise InvalidConfigurationError(
                    f"Invalid endpoint '{value}': expected 'host:port'", field="endpoint"
                )

        if not host:
            raise InvalidConfigurationError(f"Invalid endpoint '{value}': host is empty", field="endpoint")

        try:
            port = int(port_text)
        except ValueError as e:
            raise InvalidConfigurationError(
                f"Invalid endpoint '{value}': port '{port_text}' is not a number", field="endpoint"
            ) from e

        if not 0 <= port <= MAX_PORT:
            raise InvalidConfigurationError(
                f"Invalid endpoint '{value}': port must be between 0 and {MAX_PORT}", field="endpoint"
            )

        return cls(host=host, port=port)

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


EndpointLike = Union[Endpoint, Tuple[str, int]]


@dataclass(frozen=True)
class GossipSeed:
    """Endpoint of a node to seed gossip from.

    Attributes:
        endpoint: External HTTP endpoint of the node
        host_header: Host header to present on the gossip request ("" for none)
    """

    endpoint: Endpoint
    host_header: str = ""

    @classmethod
    def of(cls, endpoint: EndpointLike) -> "GossipSeed":
        """Wrap an Endpoint or a ``(host, port)`` pair with no host header."""
        if not isinstance(endpoint, Endpoint):
            try:
                host, port = endpoint
            except (TypeError, ValueError) as e:
                raise InvalidConfigurationError(
                    f"Invalid endpoint {endpoint!r}: expected an Endpoint or a (host, port) pair",
                    field="endpoint",
                ) from e
            endpoint = Endpoint(host=host, port=port)
        return cls(endpoint=endpoint)

    @classmethod
    def parse(cls, value: str) -> "GossipSeed":
        """Parse ``host:port`` or ``host:port@host-header``."""
        address, _, host_header = value.strip().partition("@")
        return cls(endpoint=Endpoint.parse(address), host_header=host_header.strip())

    def __str__(self) -> str:
        if self.host_header:
            return f"{self.endpoint}@{self.host_header}"
        return str(self.endpoint)
