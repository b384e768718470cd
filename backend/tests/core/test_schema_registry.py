"""Schema Registry: shapes for errors, envelopes, entities and payloads.

Tests:
    - entity shape = id + fields + timestamps, all required
    - create/update shapes exclude system-managed fields
    - catalog contains error, success envelope and one entry per entity
    - request models enforce min length / pattern; partial model accepts subsets
"""

import pytest
from pydantic import ValidationError

from dynamic_crud.core.domain_types import EntityDescriptor, FieldDescriptor
from dynamic_crud.core.schema_registry import (
    ERROR_SCHEMA, SchemaRegistry, build_request_model,
    create_schema, entity_schema, field_schema, ref, success_schema,
)
from dynamic_crud.schemas.user import USER_ENTITY

PRODUCT = EntityDescriptor(
    "Product",
    fields=(
        FieldDescriptor("title"),
        FieldDescriptor("price", type="number", required=False),
    ),
)


def test_error_schema_requires_error_and_message():
    assert ERROR_SCHEMA["required"] == ["error", "message"]
    assert set(ERROR_SCHEMA["properties"]) == {"error", "message"}


def test_entity_schema_includes_system_fields_all_required():
    schema = entity_schema(USER_ENTITY)
    assert list(schema["properties"]) == [
        "id", "name", "email", "createdAt", "updatedAt",
    ]
    assert schema["required"] == list(schema["properties"])
    assert schema["properties"]["id"] == {"type": "string", "format": "uuid"}
    assert schema["properties"]["createdAt"]["format"] == "date-time"


def test_field_schema_carries_constraints():
    name = field_schema(FieldDescriptor("name", format="text", min_length=3))
    assert name == {"type": "string", "format": "text", "minLength": 3}
    email = USER_ENTITY.fields[1]
    assert field_schema(email)["pattern"] == email.pattern


def test_create_schema_excludes_id_and_timestamps():
    schema = create_schema(USER_ENTITY)
    assert set(schema["properties"]) == {"name", "email"}
    assert schema["required"] == ["name", "email"]


def test_create_schema_required_follows_field_flags():
    assert create_schema(PRODUCT)["required"] == ["title"]


def test_success_schema_wraps_item_and_items():
    schema = success_schema((USER_ENTITY, PRODUCT))
    assert schema["properties"]["item"]["anyOf"] == [ref("User"), ref("Product")]
    items = schema["properties"]["items"]
    assert items["type"] == "array"
    assert items["items"]["anyOf"] == [ref("User"), ref("Product")]
    assert "required" not in schema


def test_registry_components_catalog():
    catalog = SchemaRegistry((USER_ENTITY, PRODUCT)).components()
    assert set(catalog) == {"SuccessResponse", "ErrorResponse", "User", "Product"}


def test_registry_components_returns_fresh_copy():
    registry = SchemaRegistry((USER_ENTITY,))
    registry.components()["Extra"] = {}
    registry.components()["ErrorResponse"]["required"].append("x")
    assert "Extra" not in registry.components()
    assert registry.components()["ErrorResponse"]["required"] == ["error", "message"]


def test_registry_register_same_name_replaces():
    registry = SchemaRegistry((USER_ENTITY,))
    registry.register(EntityDescriptor("User"))
    assert len(registry.entities) == 1
    assert registry.get("User").fields == ()


def test_request_model_accepts_valid_payload():
    model = build_request_model(USER_ENTITY)
    payload = model.model_validate({"name": "Ann", "email": "a@b.com"})
    assert payload.model_dump() == {"name": "Ann", "email": "a@b.com"}


@pytest.mark.parametrize("body", [
    {"name": "Al", "email": "a@b.com"},
    {"name": "Ann", "email": "not-an-email"},
    {"name": "Ann"},
    {"name": 123, "email": "a@b.com"},
])
def test_request_model_rejects_invalid_payload(body):
    model = build_request_model(USER_ENTITY)
    with pytest.raises(ValidationError):
        model.model_validate(body)


def test_partial_request_model_keeps_only_submitted_fields():
    model = build_request_model(USER_ENTITY, partial=True)
    payload = model.model_validate({"name": "Annabel"})
    assert payload.model_dump(exclude_unset=True) == {"name": "Annabel"}


def test_partial_request_model_still_enforces_constraints():
    model = build_request_model(USER_ENTITY, partial=True)
    with pytest.raises(ValidationError):
        model.model_validate({"name": "Al"})


@pytest.mark.parametrize("partial", [False, True])
@pytest.mark.parametrize("field", ["name", "email"])
def test_request_model_rejects_null_for_required_field(partial, field):
    model = build_request_model(USER_ENTITY, partial=partial)
    body = {"name": "Ann", "email": "a@b.com", field: None}
    with pytest.raises(ValidationError):
        model.model_validate(body)


def test_optional_field_accepts_null():
    entity = EntityDescriptor(
        "Note", (FieldDescriptor("title"), FieldDescriptor("body", required=False)),
    )
    model = build_request_model(entity, partial=True)
    payload = model.model_validate({"body": None})
    assert payload.model_dump(exclude_unset=True) == {"body": None}


def test_request_model_ignores_system_fields():
    model = build_request_model(USER_ENTITY)
    payload = model.model_validate(
        {"id": "x", "name": "Ann", "email": "a@b.com", "createdAt": "now"},
    )
    assert payload.model_dump(exclude_unset=True) == {
        "name": "Ann", "email": "a@b.com",
    }
