# Copyright 2026 TIER IV, inc.
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

"""Logging setup for the checker command line."""

import logging
import sys

PACKAGE_LOGGER = "type_validator"
DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"


def configure_package_logging(
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Route the package logger to the terminal and return it.

    Records below ``stderr_level`` are written to stdout next to the check
    report; the rest go to stderr. The root logger is left untouched and
    records do not propagate to it, so embedding applications keep their own
    configuration.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    threshold = max(stderr_level, logging.DEBUG)
    formatter = logging.Formatter(fmt)
    routes = (
        (sys.stdout, logging.DEBUG, lambda record: record.levelno < threshold),
        (sys.stderr, threshold, None),
    )
    for stream, handler_level, accept in routes:
        handler = logging.StreamHandler(stream)
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        if accept is not None:
            handler.addFilter(accept)
        logger.addHandler(handler)
    return logger
