"""Route Definitions: one HTTP method + path + handler + documentation unit.

Invariants:
    - Route.entity is non-empty
    - GET and DELETE routes never carry a create or update schema
    - Route and OpenAPIMetadata are frozen once constructed
    - Paths use OpenAPI placeholder syntax ("/users/{id}")

Design Decisions:
    - Handler is any async callable taking a Starlette Request: routes stay
      independent of the router they are eventually bound to
    - Response maps keyed by status code string, matching OpenAPI layout
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from dynamic_crud.core.domain_types import HttpMethod
from dynamic_crud.core.schema_registry import ERROR_SCHEMA_NAME, ref

Handler = Callable[..., Awaitable[Any]]

_ERROR_DESCRIPTIONS = {
    "400": "Bad Request",
    "401": "Unauthorized",
    "403": "Forbidden",
    "404": "Not Found",
    "500": "Internal Server Error",
}


@dataclass(frozen=True)
class OpenAPIMetadata:
    """Documentation fragment describing a single operation."""
    summary: str
    description: str
    tags: tuple[str, ...] = ()
    parameters: tuple[dict, ...] = ()
    request_body: dict | None = None
    responses: dict[str, dict] = field(default_factory=dict)

    def to_operation(self) -> dict[str, Any]:
        """Render as an OpenAPI operation object."""
        operation: dict[str, Any] = {
            "summary": self.summary,
            "description": self.description,
            "tags": list(self.tags),
        }
        if self.parameters:
            operation["parameters"] = [dict(p) for p in self.parameters]
        if self.request_body is not None:
            operation["requestBody"] = self.request_body
        operation["responses"] = dict(self.responses)
        return operation


@dataclass(frozen=True)
class Route:
    """A generated endpoint, ready for binding and documentation."""
    method: HttpMethod
    path: str
    entity: str
    handler: Handler
    metadata: OpenAPIMetadata
    create_schema: dict | None = None
    update_schema: dict | None = None
    middlewares: tuple = ()

    def __post_init__(self):
        if not self.entity:
            raise ValueError("route entity name cannot be empty")
        if self.method in (HttpMethod.GET, HttpMethod.DELETE) and (
            self.create_schema is not None or self.update_schema is not None
        ):
            raise ValueError(
                f"{self.method.value} {self.path} cannot carry a create/update schema",
            )
        object.__setattr__(self, "middlewares", tuple(self.middlewares))


# ─── Documentation helpers ──────────────────────────────────────

def id_path_parameter() -> dict[str, Any]:
    """Required uuid path parameter named "id"."""
    return {
        "name": "id",
        "in": "path",
        "required": True,
        "schema": {"type": "string", "format": "uuid"},
    }


def json_request_body(schema_name: str, description: str) -> dict[str, Any]:
    return {
        "description": description,
        "required": True,
        "content": {"application/json": {"schema": ref(schema_name)}},
    }


def json_response(description: str, schema_name: str) -> dict[str, Any]:
    return {
        "description": description,
        "content": {"application/json": {"schema": ref(schema_name)}},
    }


def text_ok_response(description: str) -> dict[str, Any]:
    """200 response whose body is the literal text OK."""
    return {
        "description": description,
        "content": {
            "text/plain": {"schema": {"type": "string", "default": "OK"}},
        },
    }


def error_responses(with_not_found: bool) -> dict[str, dict[str, Any]]:
    """Error slots documented on every generated operation."""
    codes = ["400", "401", "403"]
    if with_not_found:
        codes.append("404")
    codes.append("500")
    return {
        code: json_response(_ERROR_DESCRIPTIONS[code], ERROR_SCHEMA_NAME)
        for code in codes
    }
