"""Tests for loading descriptors from YAML/JSON documents."""

import os.path
from pathlib import Path

import pytest

from type_validator import ArrayKind, DescriptorFileError, ObjectDescriptor, PrimitiveKind, TypeValidator
from type_validator.parsing import (
    DescriptorLoader,
    check_descriptor_document,
    descriptor_from_document,
    load_descriptor_from_string,
    resolve_custom_validator,
)


def min_length_5(key, value):
    if len(value) < 5:
        return f'"{key}" should be longer than 5 characters.'
    return None


USER_DESCRIPTOR = """\
name: user
fields:
  id:
    kind: number
  name:
    kind: string
    custom_validator: min_length_5
  properties:
    kind: array
    element: string
    required: false
  address:
    kind: object
    nested:
      city: {kind: string}
      zipcode: {kind: number}
  contacts:
    kind: array
    required: false
    element:
      email: {kind: string}
"""


def test_load_from_string_builds_descriptor() -> None:
    descriptor = load_descriptor_from_string(USER_DESCRIPTOR, validators={"min_length_5": min_length_5})

    assert list(descriptor) == ["id", "name", "properties", "address", "contacts"]
    assert descriptor["id"].kind == PrimitiveKind("number")
    assert descriptor["name"].custom_validator is min_length_5
    assert descriptor["properties"].kind == ArrayKind("string")
    assert descriptor["properties"].required is False
    assert list(descriptor["address"].kind.nested) == ["city", "zipcode"]
    assert isinstance(descriptor["contacts"].kind.element, ObjectDescriptor)


def test_loaded_descriptor_validates_values() -> None:
    validator = TypeValidator(load_descriptor_from_string(USER_DESCRIPTOR, validators={"min_length_5": min_length_5}))
    value = {"id": 1, "name": "dsqsJJ", "address": {"city": "Lyon", "zipcode": 69000}}
    assert validator.test(value) is None

    value["name"] = "dsq"
    assert validator.test(value) == '"name" should be longer than 5 characters.'

    value["name"] = "dsqsJJ"
    value["contacts"] = [{"email": "a@b.c"}, {}]
    assert validator.test(value) == '[index 1] of Field "email" is required.'


def test_json_document_is_accepted() -> None:
    descriptor = load_descriptor_from_string('{"fields": {"id": {"kind": "number", "required": true}}}')
    assert TypeValidator(descriptor).test({"id": "1"}) == '"id" should be of type number.'


def test_missing_fields_key() -> None:
    with pytest.raises(DescriptorFileError, match="'fields' is a required property"):
        load_descriptor_from_string("name: user\n")


def test_array_without_element_reports_location() -> None:
    content = "fields:\n  id:\n    kind: number\n  tags:\n    kind: array\n"
    with pytest.raises(DescriptorFileError, match="'element' is a required property") as excinfo:
        load_descriptor_from_string(content)
    assert excinfo.value.yaml_path == "/fields/tags"
    assert excinfo.value.line == 5
    assert excinfo.value.column == 5


def test_object_without_nested_is_rejected() -> None:
    with pytest.raises(DescriptorFileError, match="'nested' is a required property"):
        load_descriptor_from_string("fields:\n  address:\n    kind: object\n")


def test_companion_option_without_kind_is_rejected() -> None:
    with pytest.raises(DescriptorFileError):
        load_descriptor_from_string("fields:\n  tags:\n    element: string\n")


@pytest.mark.parametrize(
    "content",
    [
        "fields:\n  id:\n    kind: boolean\n",
        "fields:\n  id:\n    kind: number\n    type: number\n",
        "fields:\n  id:\n    required: 'yes'\n",
        "fields:\n  tags:\n    kind: array\n    element: object\n",
        "fields:\n  1:\n    kind: number\n",
        "fields: []\n",
        "- fields\n",
    ],
)
def test_malformed_documents_are_rejected(content: str) -> None:
    with pytest.raises(DescriptorFileError):
        load_descriptor_from_string(content)


def test_invalid_yaml_is_rejected() -> None:
    with pytest.raises(DescriptorFileError, match="Failed to parse descriptor"):
        load_descriptor_from_string("fields: {id: [\n")


def test_unknown_custom_validator() -> None:
    content = "fields:\n  name:\n    kind: string\n    custom_validator: missing\n"
    with pytest.raises(DescriptorFileError, match="Unknown custom validator 'missing'") as excinfo:
        load_descriptor_from_string(content, validators={"min_length_5": min_length_5})
    assert excinfo.value.yaml_path == "/fields/name/custom_validator"


def test_custom_validator_resolved_by_import_path() -> None:
    assert resolve_custom_validator("os.path:basename") is os.path.basename
    with pytest.raises(DescriptorFileError, match="Cannot import module"):
        resolve_custom_validator("no_such_module_xyz:check")
    with pytest.raises(DescriptorFileError, match="has no attribute"):
        resolve_custom_validator("os.path:no_such_function")
    with pytest.raises(DescriptorFileError, match="not callable"):
        resolve_custom_validator("os.path:sep")


def test_registry_takes_precedence_over_import_path() -> None:
    assert resolve_custom_validator("os.path:basename", {"os.path:basename": min_length_5}) is min_length_5


def test_check_descriptor_document_accepts_valid_document() -> None:
    check_descriptor_document({"fields": {"id": {"kind": "number"}}})
    descriptor = descriptor_from_document({"name": "empty", "fields": {}})
    assert len(descriptor) == 0


def test_load_from_file(tmp_path: Path) -> None:
    path = tmp_path / "user.yaml"
    path.write_text("fields:\n  id:\n    kind: number\n", encoding="utf-8")
    descriptor = DescriptorLoader(cache_enabled=False).load(path)
    assert list(descriptor) == ["id"]


def test_file_errors_name_the_file(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("fields:\n  id:\n    kind: array\n", encoding="utf-8")
    with pytest.raises(DescriptorFileError, match="broken.yaml") as excinfo:
        DescriptorLoader(cache_enabled=False).load(path)
    assert excinfo.value.line == 3


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DescriptorFileError, match="File not found"):
        DescriptorLoader(cache_enabled=False).load(tmp_path / "missing.yaml")


def test_cache(tmp_path: Path) -> None:
    path = tmp_path / "user.yaml"
    path.write_text("fields:\n  id:\n    kind: number\n", encoding="utf-8")
    loader = DescriptorLoader(cache_enabled=True)
    assert loader.cache_enabled is True
    assert list(loader.load(path)) == ["id"]

    path.write_text("fields:\n  name:\n    kind: string\n", encoding="utf-8")
    assert list(loader.load(path)) == ["id"]

    loader.clear_cache()
    assert list(loader.load(path)) == ["name"]


def test_file_errors_carry_source_location(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("fields:\n  id:\n    kind: array\n", encoding="utf-8")
    with pytest.raises(DescriptorFileError) as excinfo:
        DescriptorLoader(cache_enabled=False).load(path)
    assert "broken.yaml:3:5 yaml_path=/fields/id)" in str(excinfo.value)


def test_json_descriptor_file(tmp_path: Path) -> None:
    path = tmp_path / "user.json"
    path.write_text('{"fields": {"id": {"kind": "number"}}}', encoding="utf-8")
    descriptor = DescriptorLoader(cache_enabled=False).load(path)
    assert TypeValidator(descriptor).test({"id": 1e5}) is None


def test_invalid_json_descriptor_file(tmp_path: Path) -> None:
    path = tmp_path / "user.json"
    path.write_text('{"fields": ', encoding="utf-8")
    with pytest.raises(DescriptorFileError, match="Invalid JSON content"):
        DescriptorLoader(cache_enabled=False).load(path)
