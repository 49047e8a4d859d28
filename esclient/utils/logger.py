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
Logging configuration for esclient.

Library code logs through the module-level ``logger``. Importing esclient
only attaches a ``NullHandler``, so nothing is printed until the
application configures logging, either its own way or with
``setup_logger``.

Example:
    >>> import logging
    >>> from esclient.utils.logger import setup_logger
    >>> setup_logger(level=logging.DEBUG)  # show settings builds on stdout
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "esclient"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str = LOGGER_NAME,
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a console handler to an esclient logger.

    Args:
        name: Logger name
        level: Logging level
        format_string: Custom format string for log messages
        stream: Stream to write to (stdout by default)

    Returns:
        Configured logger instance
    """
    configured = logging.getLogger(name)
    configured.setLevel(level)

    # Drop handlers from a previous setup, keep the library's NullHandler
    for handler in list(configured.handlers):
        if isinstance(handler, logging.StreamHandler):
            configured.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    configured.addHandler(handler)

    return configured


logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())
