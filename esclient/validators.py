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
Built-in validators for client settings.

This module provides the predicates and named ranges esclient checks
settings against when they are built.

Usage:
    >>> from esclient.validators import ATTEMPTS_RANGE, check_argument
    >>>
    >>> check_argument(
    ...     ATTEMPTS_RANGE.contains(attempts),
    ...     f"attempts out of range. Allowed range: {ATTEMPTS_RANGE}.",
    ... )
"""

from dataclasses import dataclass
from typing import Any, Optional

from esclient.exceptions import InvalidConfigurationError

INT_MAX = 2**31 - 1


@dataclass(frozen=True)
class Range:
    """
    Closed integer range ``[start..end]``.

    Attributes:
        start: Lowest allowed value (inclusive)
        end: Highest allowed value (inclusive)

    Example:
        >>> r = Range(1, 5)
        >>> r.contains(5)
        True
        >>> str(r)
        '[1..5]'
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Invalid range: start {self.start} is greater than end {self.end}")

    def contains(self, value: int) -> bool:
        """Check whether value lies inside the range, bounds included."""
        return self.start <= value <= self.end

    def __contains__(self, value: object) -> bool:
        return is_integer(value) and self.contains(value)

    def __str__(self) -> str:
        return f"[{self.start}..{self.end}]"


# Allowed values for a bounded number of discovery attempts.
# -1 (unlimited) is accepted separately by callers.
ATTEMPTS_RANGE = Range(1, INT_MAX)


def is_integer(value: Any) -> bool:
    """
    Validate that a value is an int, excluding bools.

    Example:
        >>> is_integer(10)
        True
        >>> is_integer(2.5)
        False
        >>> is_integer(True)
        False
    """
    return isinstance(value, int) and not isinstance(value, bool)


def is_positive(value: Optional[int]) -> bool:
    """
    Validate that a number is strictly positive.

    Args:
        value: The number to validate

    Returns:
        True if value is greater than zero, False otherwise

    Example:
        >>> is_positive(30778)
        True
        >>> is_positive(0)
        False
    """
    return value is not None and value > 0


def is_null_or_empty(value: Optional[str]) -> bool:
    """
    Validate that a string is missing or empty.

    Example:
        >>> is_null_or_empty("")
        True
        >>> is_null_or_empty("cluster.internal")
        False
    """
    return value is None or len(value) == 0


def check_argument(expression: Any, message: str, field: Optional[str] = None) -> None:
    """
    Raise InvalidConfigurationError unless expression is truthy.

    Args:
        expression: Condition that must hold
        message: Error message used when the condition fails
        field: Name of the setting being checked

    Raises:
        InvalidConfigurationError: If expression is falsy
    """
    if not expression:
        raise InvalidConfigurationError(message, field=field)
