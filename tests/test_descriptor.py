"""Tests for descriptor construction."""

import pytest

from type_validator import (
    ArrayKind,
    ConfigurationError,
    FieldSpec,
    ObjectDescriptor,
    ObjectKind,
    PrimitiveKind,
    field_spec,
)


def test_required_defaults_to_true() -> None:
    assert FieldSpec().required is True
    assert field_spec(kind="string").required is True


def test_from_mapping_preserves_field_order() -> None:
    descriptor = ObjectDescriptor.from_mapping(
        {"b": {"kind": "string"}, "a": {"kind": "number"}, "c": {}}
    )
    assert list(descriptor) == ["b", "a", "c"]


def test_from_mapping_builds_tagged_kinds() -> None:
    descriptor = ObjectDescriptor.from_mapping(
        {
            "name": {"kind": "string"},
            "tags": {"kind": "array", "element": "number"},
            "items": {"kind": "array", "element": {"label": {"kind": "string"}}},
            "address": {"kind": "object", "nested": {"city": {"kind": "string"}}},
            "anything": {"required": False},
        }
    )
    assert descriptor["name"].kind == PrimitiveKind("string")
    assert descriptor["tags"].kind == ArrayKind("number")
    assert isinstance(descriptor["items"].kind.element, ObjectDescriptor)
    assert isinstance(descriptor["address"].kind, ObjectKind)
    assert "city" in descriptor["address"].kind.nested
    assert descriptor["anything"].kind is None
    assert descriptor["anything"].required is False


def test_array_without_element_fails_at_construction() -> None:
    with pytest.raises(ConfigurationError, match="requires 'element'"):
        ObjectDescriptor.from_mapping({"tags": {"kind": "array"}})


def test_object_without_nested_fails_at_construction() -> None:
    with pytest.raises(ConfigurationError, match="requires 'nested'"):
        field_spec(kind="object")


def test_companion_option_on_wrong_kind_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        field_spec(kind="string", element="string")
    with pytest.raises(ConfigurationError):
        field_spec(kind="array", element="string", nested={})
    with pytest.raises(ConfigurationError):
        field_spec(nested={"city": {"kind": "string"}})


def test_unknown_kind_and_element_are_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Invalid kind"):
        field_spec(kind="boolean")
    with pytest.raises(ConfigurationError, match="Invalid array element"):
        field_spec(kind="array", element="object")
    with pytest.raises(ConfigurationError):
        PrimitiveKind("array")


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Unknown options"):
        ObjectDescriptor.from_mapping({"id": {"type": "number"}})


def test_non_callable_custom_validator_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        field_spec(kind="string", custom_validator="min_length")


def test_non_boolean_required_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        field_spec(required="no")


def test_descriptor_is_immutable() -> None:
    source = {"id": FieldSpec(kind=PrimitiveKind("number"))}
    descriptor = ObjectDescriptor(source)

    # Later changes to the source dict do not leak into the descriptor.
    source["name"] = FieldSpec()
    assert list(descriptor) == ["id"]

    with pytest.raises(TypeError):
        descriptor.fields["name"] = FieldSpec()
    with pytest.raises(AttributeError):
        descriptor.fields = {}
    with pytest.raises(AttributeError):
        descriptor["id"].required = False


def test_descriptor_requires_field_specs() -> None:
    with pytest.raises(ConfigurationError):
        ObjectDescriptor({"id": {"kind": "number"}})
    with pytest.raises(ConfigurationError):
        ObjectDescriptor({"": FieldSpec()})
