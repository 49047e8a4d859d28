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

"""Custom exceptions for esclient.

This module defines the exception hierarchy used throughout esclient.
All exceptions inherit from ESClientError for easy catching and handling.

Exception Hierarchy:
    ESClientError (base)
    └── ConfigurationError - Configuration errors
        └── InvalidConfigurationError - A setting failed validation

Example:
    try:
        settings = ClusterNodeSettings.for_dns_discoverer().build()
    except InvalidConfigurationError as e:
        logger.error(f"Invalid cluster settings: {e}")
"""

from __future__ import annotations

from typing import Optional


class ESClientError(Exception):
    """Base exception for all esclient errors.

    All custom exceptions in esclient inherit from this class,
    allowing users to catch all esclient-specific errors with
    a single except clause.
    """
    pass


class ConfigurationError(ESClientError):
    """Exception raised for configuration errors.

    Raised when the client is configured incorrectly or when
    required configuration is missing.

    Examples:
        - Missing discovery strategy
        - Invalid configuration values
        - Incompatible configuration combinations
    """
    pass


class InvalidConfigurationError(ConfigurationError, ValueError):
    """Raised when a setting fails validation while settings are built.

    Builders never raise this from their setters; it surfaces only from
    a terminal ``build()`` call or from the document/environment loaders.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        """Initialize the invalid configuration error.

        Args:
            message: Error message
            field: Name of the offending setting, if known
        """
        super().__init__(message)
        self.message = message
        self.field = field

    def __str__(self) -> str:
        return self.message
