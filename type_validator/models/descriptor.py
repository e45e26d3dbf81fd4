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

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Optional, Tuple, Union

from ..exceptions import ConfigurationError
from .primitive import ALL_KINDS, ARRAY, OBJECT, PRIMITIVE_KINDS


CustomValidator = Callable[[str, Any], Optional[str]]

FIELD_OPTIONS = ("required", "kind", "nested", "element", "custom_validator")


@dataclass(frozen=True)
class PrimitiveKind:
    tag: str

    def __post_init__(self) -> None:
        if self.tag not in PRIMITIVE_KINDS:
            raise ConfigurationError(
                f"Invalid primitive kind '{self.tag}'. Valid kinds: {list(PRIMITIVE_KINDS)}"
            )


@dataclass(frozen=True)
class ObjectKind:
    nested: "ObjectDescriptor"

    def __post_init__(self) -> None:
        if not isinstance(self.nested, ObjectDescriptor):
            raise ConfigurationError("Kind 'object' requires a nested ObjectDescriptor")


@dataclass(frozen=True)
class ArrayKind:
    # Either a primitive kind tag applied to each element, or a descriptor
    # every element is validated against.
    element: Union[str, "ObjectDescriptor"]

    def __post_init__(self) -> None:
        if isinstance(self.element, ObjectDescriptor):
            return
        if isinstance(self.element, str) and self.element in PRIMITIVE_KINDS:
            return
        raise ConfigurationError(
            f"Invalid array element '{self.element}'. Expected one of {list(PRIMITIVE_KINDS)} "
            "or an ObjectDescriptor"
        )


Kind = Union[PrimitiveKind, ObjectKind, ArrayKind]


@dataclass(frozen=True)
class FieldSpec:
    kind: Optional[Kind] = None
    required: bool = True
    custom_validator: Optional[CustomValidator] = None

    def __post_init__(self) -> None:
        if self.kind is not None and not isinstance(self.kind, (PrimitiveKind, ObjectKind, ArrayKind)):
            raise ConfigurationError(f"Invalid field kind: {self.kind!r}")
        if not isinstance(self.required, bool):
            raise ConfigurationError(f"'required' must be a boolean, got: {self.required!r}")
        if self.custom_validator is not None and not callable(self.custom_validator):
            raise ConfigurationError("'custom_validator' must be callable")


@dataclass(frozen=True)
class ObjectDescriptor:
    """Ordered, read-only mapping from field name to FieldSpec.

    Field order is the order errors are searched in.
    """

    fields: Mapping[str, FieldSpec] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.fields, Mapping):
            raise ConfigurationError(f"Descriptor fields must be a mapping, got: {type(self.fields).__name__}")
        frozen = {}
        for name, spec in self.fields.items():
            if not isinstance(name, str) or not name:
                raise ConfigurationError(f"Field name must be a non-empty string, got: {name!r}")
            if not isinstance(spec, FieldSpec):
                raise ConfigurationError(f"Field '{name}' must be a FieldSpec, got: {type(spec).__name__}")
            frozen[name] = spec
        object.__setattr__(self, "fields", MappingProxyType(frozen))

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __getitem__(self, name: str) -> FieldSpec:
        return self.fields[name]

    def items(self) -> Iterator[Tuple[str, FieldSpec]]:
        return iter(self.fields.items())

    @classmethod
    def from_mapping(cls, options: Mapping[str, Mapping[str, Any]]) -> "ObjectDescriptor":
        """Build a descriptor from plain option dicts.

        Example::

            ObjectDescriptor.from_mapping({
                "id": {"kind": "number"},
                "tags": {"kind": "array", "element": "string", "required": False},
            })
        """
        if isinstance(options, ObjectDescriptor):
            return options
        if not isinstance(options, Mapping):
            raise ConfigurationError(f"Descriptor must be a mapping, got: {type(options).__name__}")

        fields = {}
        for name, field_options in options.items():
            if isinstance(field_options, FieldSpec):
                fields[name] = field_options
                continue
            if not isinstance(field_options, Mapping):
                raise ConfigurationError(
                    f"Options for field '{name}' must be a mapping, got: {type(field_options).__name__}"
                )
            unknown = [key for key in field_options if key not in FIELD_OPTIONS]
            if unknown:
                raise ConfigurationError(
                    f"Unknown options {unknown} for field '{name}'. Valid options: {list(FIELD_OPTIONS)}"
                )
            try:
                fields[name] = field_spec(**field_options)
            except ConfigurationError as exc:
                raise ConfigurationError(f"Field '{name}': {exc}") from exc
        return cls(fields)


def field_spec(
    *,
    required: bool = True,
    kind: Optional[str] = None,
    nested: Union["ObjectDescriptor", Mapping[str, Any], None] = None,
    element: Union[str, "ObjectDescriptor", Mapping[str, Any], None] = None,
    custom_validator: Optional[CustomValidator] = None,
) -> FieldSpec:
    """Build a FieldSpec from flat options.

    Raises ConfigurationError when a companion option is missing for its
    kind (``nested`` for object, ``element`` for array) or supplied for a
    kind that does not use it.
    """
    if kind is not None and kind not in ALL_KINDS:
        raise ConfigurationError(f"Invalid kind '{kind}'. Valid kinds: {list(ALL_KINDS)}")
    if nested is not None and kind != OBJECT:
        raise ConfigurationError("'nested' is only allowed with kind 'object'")
    if element is not None and kind != ARRAY:
        raise ConfigurationError("'element' is only allowed with kind 'array'")

    resolved: Optional[Kind] = None
    if kind == OBJECT:
        if nested is None:
            raise ConfigurationError("Kind 'object' requires 'nested'")
        resolved = ObjectKind(ObjectDescriptor.from_mapping(nested))
    elif kind == ARRAY:
        if element is None:
            raise ConfigurationError("Kind 'array' requires 'element'")
        if isinstance(element, Mapping):
            element = ObjectDescriptor.from_mapping(element)
        resolved = ArrayKind(element)
    elif kind is not None:
        resolved = PrimitiveKind(kind)

    return FieldSpec(kind=resolved, required=required, custom_validator=custom_validator)
