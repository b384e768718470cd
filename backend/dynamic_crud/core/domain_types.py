"""Domain Types: entity and field descriptors that drive route and schema generation.

Invariants:
    - EntityDescriptor.name is non-empty; descriptors are frozen after creation
    - plural is lowercase(name) + "s", no irregular plural table
    - FieldDescriptor.type is one of FIELD_TYPES

Design Decisions:
    - Explicit descriptor values over model reflection: the ORM model and the
      API shape are declared side by side (ADR: schemas/ owns API contracts)
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass, field
from enum import Enum


FIELD_TYPES = frozenset({
    "string", "uuid", "datetime", "integer", "number", "boolean",
})


class HttpMethod(str, Enum):
    """Methods a generated route can be registered under."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class FieldDescriptor:
    """One user-supplied field of an entity."""
    name: str
    type: str = "string"
    format: str | None = None
    required: bool = True
    min_length: int | None = None
    pattern: str | None = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("field name cannot be empty")
        if self.type not in FIELD_TYPES:
            raise ValueError(f"unsupported field type: {self.type}")


@dataclass(frozen=True)
class EntityDescriptor:
    """A named record type exposed through generated CRUD endpoints."""
    name: str
    fields: tuple[FieldDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("entity name cannot be empty")
        # accept lists from callers, store a tuple
        object.__setattr__(self, "fields", tuple(self.fields))

    @property
    def plural(self) -> str:
        """Naive plural path segment: "User" -> "users", "Category" -> "categorys"."""
        return f"{self.name.lower()}s"

    @property
    def path(self) -> str:
        return f"/{self.plural}"

    @property
    def item_path(self) -> str:
        return f"/{self.plural}/{{id}}"

    @property
    def tag(self) -> str:
        return f"{self.name}s"

    @property
    def label(self) -> str:
        """Lowercase name used inside human-readable messages."""
        return self.name.lower()

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)
