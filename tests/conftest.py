"""Shared fixtures for type_validator tests."""

import logging

import pytest

from type_validator import ObjectDescriptor


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers the CLI attaches to the package logger."""
    yield
    logger = logging.getLogger("type_validator")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def simple_options() -> dict:
    return {
        "id": {"required": True, "kind": "number"},
        "name": {"required": True, "kind": "string"},
    }


@pytest.fixture
def nested_descriptor() -> ObjectDescriptor:
    return ObjectDescriptor.from_mapping(
        {
            "id": {"required": True, "kind": "number"},
            "name": {"required": True, "kind": "string"},
            "address": {
                "required": True,
                "kind": "object",
                "nested": {
                    "city": {"required": True, "kind": "string"},
                    "zipcode": {"required": True, "kind": "number"},
                },
            },
        }
    )
