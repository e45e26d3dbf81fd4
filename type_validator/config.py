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

"""Runtime configuration for the type validator."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import configure_package_logging


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ValidatorConfig:
    """Process-wide settings for descriptor loading and the checker CLI."""
    log_level: str = "INFO"
    print_level: str = "ERROR"
    cache_enabled: bool = True

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('TYPE_VALIDATOR_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('TYPE_VALIDATOR_PRINT_LEVEL', 'ERROR'),
            cache_enabled=_env_flag('TYPE_VALIDATOR_CACHE_ENABLED', 'true'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging for the ``type_validator`` logger hierarchy."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        return configure_package_logging(level=level, stderr_level=stderr_level)


# Global configuration instance
validator_config = ValidatorConfig.from_env()
