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

"""Descriptor-driven structural validation of loosely typed data."""

from .exceptions import (
    ConfigurationError,
    DataFileError,
    DescriptorFileError,
    TypeValidatorError,
)
from .models.descriptor import (
    ArrayKind,
    CustomValidator,
    FieldSpec,
    ObjectDescriptor,
    ObjectKind,
    PrimitiveKind,
    field_spec,
)
from .models.primitive import check_primitive
from .validator import TypeValidator, ValidationIssue

__version__ = "0.1.0"

__all__ = [
    "ArrayKind",
    "ConfigurationError",
    "CustomValidator",
    "DataFileError",
    "DescriptorFileError",
    "FieldSpec",
    "ObjectDescriptor",
    "ObjectKind",
    "PrimitiveKind",
    "TypeValidator",
    "TypeValidatorError",
    "ValidationIssue",
    "check_primitive",
    "field_spec",
]
