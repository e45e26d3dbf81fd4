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

"""Load ObjectDescriptors from YAML or JSON descriptor documents."""

import importlib
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

import jsonschema
from jsonschema.exceptions import best_match

from ..exceptions import ConfigurationError, DataFileError, DescriptorFileError
from ..file_io.source_location import SourceLocation, SourceMap, format_source, lookup_source
from ..models.descriptor import CustomValidator, ObjectDescriptor, field_spec
from ..schema import DESCRIPTOR_SCHEMA_PATH
from .yaml_parser import YamlParser

logger = logging.getLogger(__name__)

ValidatorRegistry = Mapping[str, Callable[..., Optional[str]]]

# Schema cache to avoid reloading the packaged file
_SCHEMA_CACHE: Dict[str, dict] = {}


def load_descriptor_schema() -> dict:
    """Load the JSON Schema describing descriptor documents.

    Raises:
        FileNotFoundError: If the packaged schema file is missing
        json.JSONDecodeError: If the schema file is invalid JSON
    """
    cache_key = str(DESCRIPTOR_SCHEMA_PATH)
    if cache_key in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[cache_key]

    with open(DESCRIPTOR_SCHEMA_PATH, "r", encoding="utf-8") as f:
        schema = json.load(f)

    _SCHEMA_CACHE[cache_key] = schema
    return schema


def _pointer(parts) -> str:
    return "".join(f"/{str(p).replace('~', '~0').replace('/', '~1')}" for p in parts)


def _error_at(
    message: str,
    yaml_path: str,
    source_map: Optional[SourceMap],
    file_path: Optional[Path] = None,
) -> DescriptorFileError:
    found = lookup_source(source_map, yaml_path or "")
    loc = SourceLocation(file_path=file_path, yaml_path=yaml_path or "/", line=found.line, column=found.column)
    return DescriptorFileError(
        f"{message}{format_source(loc)}",
        yaml_path=yaml_path,
        line=loc.line,
        column=loc.column,
    )


def check_descriptor_document(
    document: Any,
    source_map: Optional[SourceMap] = None,
    file_path: Optional[Path] = None,
) -> None:
    """Validate a descriptor document against the packaged JSON Schema.

    Raises:
        DescriptorFileError: For the most relevant schema violation
    """
    validator = jsonschema.Draft7Validator(load_descriptor_schema())
    error = best_match(validator.iter_errors(document))
    if error is None:
        return
    raise _error_at(
        f"Invalid descriptor document: {error.message}", _pointer(error.absolute_path), source_map, file_path
    )


def resolve_custom_validator(name: str, validators: Optional[ValidatorRegistry] = None) -> CustomValidator:
    """Resolve a custom validator by registry name or ``package.module:attribute`` path."""
    if validators and name in validators:
        target = validators[name]
    elif ":" in name:
        module_name, _, attribute = name.partition(":")
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise DescriptorFileError(f"Cannot import module '{module_name}' for custom validator '{name}': {exc}") from exc
        target = getattr(module, attribute, None)
        if target is None:
            raise DescriptorFileError(f"Module '{module_name}' has no attribute '{attribute}'")
    else:
        known = sorted(validators) if validators else []
        raise DescriptorFileError(f"Unknown custom validator '{name}'. Registered validators: {known}")

    if not callable(target):
        raise DescriptorFileError(f"Custom validator '{name}' is not callable")
    return target


def _build_fields(
    fields: Mapping[str, Any],
    validators: Optional[ValidatorRegistry],
    *,
    path: str,
    source_map: Optional[SourceMap],
    file_path: Optional[Path],
) -> ObjectDescriptor:
    specs = {}
    for name, options in fields.items():
        field_path = f"{path}/{_pointer([name])[1:]}"
        kwargs = dict(options)

        if "nested" in kwargs:
            kwargs["nested"] = _build_fields(
                kwargs["nested"], validators, path=f"{field_path}/nested", source_map=source_map, file_path=file_path
            )
        if isinstance(kwargs.get("element"), Mapping):
            kwargs["element"] = _build_fields(
                kwargs["element"], validators, path=f"{field_path}/element", source_map=source_map, file_path=file_path
            )
        if "custom_validator" in kwargs:
            try:
                kwargs["custom_validator"] = resolve_custom_validator(kwargs["custom_validator"], validators)
            except DescriptorFileError as exc:
                raise _error_at(str(exc), f"{field_path}/custom_validator", source_map, file_path) from exc

        try:
            specs[name] = field_spec(**kwargs)
        except ConfigurationError as exc:
            raise _error_at(f"Invalid field '{name}': {exc}", field_path, source_map, file_path) from exc
    return ObjectDescriptor(specs)


def descriptor_from_document(
    document: Any,
    validators: Optional[ValidatorRegistry] = None,
    source_map: Optional[SourceMap] = None,
    file_path: Optional[Path] = None,
) -> ObjectDescriptor:
    """Build an ObjectDescriptor from a parsed descriptor document.

    ``source_map`` and ``file_path`` only enrich error messages.
    """
    check_descriptor_document(document, source_map, file_path)
    return _build_fields(
        document["fields"], validators, path="/fields", source_map=source_map, file_path=file_path
    )


class DescriptorLoader:
    """Read descriptor documents from disk or strings."""

    def __init__(self, cache_enabled: Optional[bool] = None):
        self._parser = YamlParser(cache_enabled=cache_enabled)

    @property
    def cache_enabled(self) -> bool:
        return self._parser.cache_enabled

    def load(self, file_path: Union[str, Path], validators: Optional[ValidatorRegistry] = None) -> ObjectDescriptor:
        """Load a descriptor file.

        Args:
            file_path: Path to a YAML or JSON descriptor document
            validators: Registry of custom validators referenced by name

        Raises:
            DescriptorFileError: If the file cannot be read, parsed or built
        """
        try:
            document, source_map = self._parser.load_with_source(file_path)
        except DataFileError as exc:
            raise DescriptorFileError(f"Failed to load descriptor: {exc}") from exc

        logger.debug(f"Building descriptor from {file_path}")
        return descriptor_from_document(document, validators, source_map, Path(file_path))

    def load_from_string(self, content: str, validators: Optional[ValidatorRegistry] = None) -> ObjectDescriptor:
        """Build a descriptor from YAML or JSON text."""
        try:
            document, source_map = self._parser.load_from_string_with_source(content)
        except DataFileError as exc:
            raise DescriptorFileError(f"Failed to parse descriptor: {exc}") from exc
        return descriptor_from_document(document, validators, source_map)

    def clear_cache(self) -> None:
        self._parser.clear_cache()


# Global loader instance
descriptor_loader = DescriptorLoader()


def load_descriptor(file_path: Union[str, Path], validators: Optional[ValidatorRegistry] = None) -> ObjectDescriptor:
    return descriptor_loader.load(file_path, validators)


def load_descriptor_from_string(content: str, validators: Optional[ValidatorRegistry] = None) -> ObjectDescriptor:
    return descriptor_loader.load_from_string(content, validators)
