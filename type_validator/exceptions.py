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

"""Custom exceptions for the type validator."""


class TypeValidatorError(Exception):
    """Base exception for type validator errors."""
    pass


class ConfigurationError(TypeValidatorError):
    """Exception raised when a descriptor is built with inconsistent options.

    This signals a schema authoring defect and is never returned as a
    data validation result.
    """
    pass


class DescriptorFileError(ConfigurationError):
    """Exception raised when a descriptor document cannot be loaded."""

    def __init__(self, message: str, yaml_path: str = None, line: int = None, column: int = None):
        super().__init__(message)
        self.yaml_path = yaml_path
        self.line = line
        self.column = column


class DataFileError(TypeValidatorError):
    """Exception raised when a data file cannot be read or parsed."""
    pass
