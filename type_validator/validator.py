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

"""Recursive validation of values against an ObjectDescriptor."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .exceptions import ConfigurationError
from .models.descriptor import ArrayKind, Kind, ObjectDescriptor, ObjectKind, PrimitiveKind
from .models.primitive import ARRAY, check_primitive

logger = logging.getLogger(__name__)

JsonPointer = str

_MISSING = object()


@dataclass(frozen=True)
class ValidationIssue:
    """First violation found in a value.

    ``path`` is a JSON pointer to the offending value, relative to the
    validated root. For a missing field it points at the missing key.
    """

    message: str
    path: JsonPointer = ""

    def __str__(self) -> str:
        return self.message


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _join_path(base: JsonPointer, token: str) -> JsonPointer:
    return f"{base}/{_jp_escape(token)}"


def _lookup(value: Any, key: str) -> Any:
    # Only mappings have fields; anything else is treated as having none.
    if isinstance(value, Mapping) and key in value:
        return value[key]
    return _MISSING


class TypeValidator:
    """Validate values against a fixed descriptor.

    Example::

        validator = TypeValidator({
            "id": {"kind": "number"},
            "name": {"kind": "string"},
        })
        validator.test({"id": 12, "name": "dsqs"})  # -> None
        validator.test({"id": 12})  # -> 'Field "name" is required.'
    """

    def __init__(self, descriptor: Union[ObjectDescriptor, Mapping[str, Any]]):
        if isinstance(descriptor, ObjectDescriptor):
            self._descriptor = descriptor
        elif isinstance(descriptor, Mapping):
            self._descriptor = ObjectDescriptor.from_mapping(descriptor)
        else:
            raise ConfigurationError(
                f"TypeValidator requires an ObjectDescriptor or a mapping, got: {type(descriptor).__name__}"
            )

    @property
    def descriptor(self) -> ObjectDescriptor:
        return self._descriptor

    def test(self, value: Any) -> Optional[str]:
        """Return the first error message for ``value``, or None when it is valid."""
        issue = self.explain(value)
        return issue.message if issue is not None else None

    def explain(self, value: Any) -> Optional[ValidationIssue]:
        """Return the first ValidationIssue for ``value``, or None when it is valid."""
        issue = _validate_object(self._descriptor, value, path="")
        if issue is not None:
            logger.debug("Validation failed at '%s': %s", issue.path or "/", issue.message)
        return issue


def _validate_object(descriptor: ObjectDescriptor, value: Any, *, path: JsonPointer) -> Optional[ValidationIssue]:
    for key, spec in descriptor.items():
        field_path = _join_path(path, key)
        field_value = _lookup(value, key)

        if field_value is _MISSING:
            if spec.required is not False:
                return ValidationIssue(message=f'Field "{key}" is required.', path=field_path)
            continue

        issue = _validate_kind(spec.kind, key, field_value, path=field_path)
        if issue is not None:
            return issue

        if spec.custom_validator is not None:
            message = spec.custom_validator(key, field_value)
            if message:
                return ValidationIssue(message=message, path=field_path)

    return None


def _validate_kind(kind: Optional[Kind], key: str, value: Any, *, path: JsonPointer) -> Optional[ValidationIssue]:
    if kind is None:
        return None

    if isinstance(kind, PrimitiveKind):
        message = check_primitive(kind.tag, key, value)
        return ValidationIssue(message=message, path=path) if message else None

    if isinstance(kind, ObjectKind):
        # Nested errors surface exactly as the inner traversal reports them.
        return _validate_object(kind.nested, value, path=path)

    if isinstance(kind, ArrayKind):
        return _validate_array(kind, key, value, path=path)

    raise ConfigurationError(f"Internal error: unknown field kind {kind!r}")


def _validate_array(kind: ArrayKind, key: str, value: Any, *, path: JsonPointer) -> Optional[ValidationIssue]:
    message = check_primitive(ARRAY, key, value)
    if message:
        return ValidationIssue(message=message, path=path)

    element = kind.element
    for index, item in enumerate(value):
        item_path = _join_path(path, str(index))
        if isinstance(element, ObjectDescriptor):
            inner = _validate_object(element, item, path=item_path)
        else:
            # Elements are labelled with the array field's own name.
            inner_message = check_primitive(element, key, item)
            inner = ValidationIssue(message=inner_message, path=item_path) if inner_message else None

        if inner is not None:
            return ValidationIssue(message=f"[index {index}] of {inner.message}", path=inner.path)

    return None
