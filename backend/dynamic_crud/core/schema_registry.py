"""Schema Registry: named OpenAPI 3.0 shapes for entities and response envelopes.

Invariants:
    - ERROR_SCHEMA requires both "error" and "message"
    - Entity shape = id + declared fields + createdAt + updatedAt, all required
    - Create/Update shapes hold only user-supplied fields (no id, no timestamps)
    - components() returns a fresh dict; callers may extend it freely

Design Decisions:
    - Shapes are plain dicts in OpenAPI layout: the assembler serializes them as-is
    - Request validation models derived from the same FieldDescriptors, so the
      documented shape and the enforced shape cannot drift apart
"""

import copy
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, create_model

from dynamic_crud.core.domain_types import EntityDescriptor, FieldDescriptor

ERROR_SCHEMA_NAME = "ErrorResponse"
SUCCESS_SCHEMA_NAME = "SuccessResponse"

ERROR_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "error": {"type": "string", "format": "text"},
        "message": {"type": "string", "format": "text"},
    },
    "required": ["error", "message"],
}

_TYPE_SCHEMAS: dict[str, dict[str, str]] = {
    "string": {"type": "string"},
    "uuid": {"type": "string", "format": "uuid"},
    "datetime": {"type": "string", "format": "date-time"},
    "integer": {"type": "integer"},
    "number": {"type": "number"},
    "boolean": {"type": "boolean"},
}

_TYPE_ANNOTATIONS: dict[str, type] = {
    "string": str,
    "uuid": UUID,
    "datetime": datetime,
    "integer": int,
    "number": float,
    "boolean": bool,
}


def ref(name: str) -> dict[str, str]:
    """Reference into the components/schemas catalog."""
    return {"$ref": f"#/components/schemas/{name}"}


def field_schema(descriptor: FieldDescriptor) -> dict[str, Any]:
    """OpenAPI property schema for a single field."""
    schema = dict(_TYPE_SCHEMAS[descriptor.type])
    if descriptor.format:
        schema["format"] = descriptor.format
    if descriptor.min_length is not None:
        schema["minLength"] = descriptor.min_length
    if descriptor.pattern:
        schema["pattern"] = descriptor.pattern
    return schema


def _object_schema(
    properties: dict[str, Any], required: list[str],
) -> dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required}


def entity_schema(entity: EntityDescriptor) -> dict[str, Any]:
    """Full record shape as returned by GET endpoints."""
    properties: dict[str, Any] = {"id": dict(_TYPE_SCHEMAS["uuid"])}
    for f in entity.fields:
        properties[f.name] = field_schema(f)
    properties["createdAt"] = dict(_TYPE_SCHEMAS["datetime"])
    properties["updatedAt"] = dict(_TYPE_SCHEMAS["datetime"])
    return _object_schema(properties, list(properties))


def create_schema(entity: EntityDescriptor) -> dict[str, Any]:
    """Payload shape for creating a record."""
    return _object_schema(
        {f.name: field_schema(f) for f in entity.fields},
        [f.name for f in entity.fields if f.required],
    )


def update_schema(entity: EntityDescriptor) -> dict[str, Any]:
    """Payload shape for updating a record. Same fields as create."""
    return create_schema(entity)


def success_schema(entities: tuple[EntityDescriptor, ...]) -> dict[str, Any]:
    """Envelope wrapping one record under "item" or many under "items"."""
    any_of = [ref(e.name) for e in entities]
    return {
        "type": "object",
        "properties": {
            "item": {"anyOf": any_of},
            "items": {"type": "array", "items": {"anyOf": copy.deepcopy(any_of)}},
        },
    }


def build_request_model(
    entity: EntityDescriptor, partial: bool = False,
) -> type[BaseModel]:
    """Pydantic model validating a create (or partial update) payload."""
    definitions: dict[str, Any] = {}
    for f in entity.fields:
        annotation = _TYPE_ANNOTATIONS[f.type]
        constraints = {"min_length": f.min_length, "pattern": f.pattern}
        constraints = {k: v for k, v in constraints.items() if v is not None}
        if f.required and not partial:
            definitions[f.name] = (annotation, Field(..., **constraints))
        elif f.required:
            # omitted is fine on update, explicit null is not
            definitions[f.name] = (annotation, Field(None, **constraints))
        else:
            definitions[f.name] = (
                annotation | None, Field(None, **constraints),
            )
    prefix = "Update" if partial else "Create"
    return create_model(f"{prefix}{entity.name}Payload", **definitions)


class SchemaRegistry:
    """Catalog of the always-present shapes for a set of entities."""

    def __init__(self, entities: tuple[EntityDescriptor, ...] | list = ()):
        self._entities: dict[str, EntityDescriptor] = {}
        for entity in entities:
            self.register(entity)

    def register(self, entity: EntityDescriptor) -> "SchemaRegistry":
        """Add an entity. Registering the same name again replaces it."""
        self._entities[entity.name] = entity
        return self

    @property
    def entities(self) -> tuple[EntityDescriptor, ...]:
        return tuple(self._entities.values())

    def get(self, name: str) -> EntityDescriptor | None:
        return self._entities.get(name)

    def components(self) -> dict[str, dict[str, Any]]:
        """Error, success envelope, and one shape per registered entity."""
        catalog: dict[str, dict[str, Any]] = {
            SUCCESS_SCHEMA_NAME: success_schema(self.entities),
            ERROR_SCHEMA_NAME: copy.deepcopy(ERROR_SCHEMA),
        }
        for entity in self.entities:
            catalog[entity.name] = entity_schema(entity)
        return catalog
