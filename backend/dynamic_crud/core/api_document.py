"""API Document Assembler: folds the route table into one OpenAPI 3.0 document.

Invariants:
    - Exactly one path entry per distinct (prefixed) path; methods merged onto it
    - A repeated path+method overwrites the earlier operation (last writer wins)
    - POST without create_schema / PUT without update_schema are omitted, never fatal
    - Every documented POST/PUT registers Create<Entity> / Update<Entity>
    - info and servers come from configuration, never from routes

Design Decisions:
    - Pure function over the route tuple: same input, same document; main.py
      caches the result on the FastAPI app
"""

import logging
from typing import Any, Iterable

from dynamic_crud.core.domain_types import HttpMethod
from dynamic_crud.core.routing import Route
from dynamic_crud.core.schema_registry import SchemaRegistry

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.0"


def build_servers(development_url: str, production_url: str) -> list[dict]:
    """Server list in the order development, production."""
    return [
        {"url": development_url, "description": "Development"},
        {"url": production_url, "description": "Production"},
    ]


def _documented_operation(
    route: Route, schemas: dict[str, Any],
) -> dict[str, Any] | None:
    """Operation for a route, registering its payload schema when it has one."""
    if route.method is HttpMethod.POST:
        if route.create_schema is None:
            return None
        schemas[f"Create{route.entity}"] = route.create_schema
    elif route.method is HttpMethod.PUT:
        if route.update_schema is None:
            return None
        schemas[f"Update{route.entity}"] = route.update_schema
    return route.metadata.to_operation()


def assemble_api_document(
    routes: Iterable[Route],
    registry: SchemaRegistry,
    *,
    title: str,
    version: str,
    servers: list[dict],
    path_prefix: str = "/api",
) -> dict[str, Any]:
    """Build the composite API description for every route."""
    paths: dict[str, dict[str, Any]] = {}
    schemas = registry.components()

    for route in routes:
        operation = _documented_operation(route, schemas)
        if operation is None:
            logger.warning(
                f"Skipping {route.method.value} {route.path}: no payload schema assigned",
                extra={"entity": route.entity, "method": route.method.value},
            )
            continue
        path_item = paths.setdefault(f"{path_prefix}{route.path}", {})
        path_item[route.method.value.lower()] = operation

    return {
        "openapi": OPENAPI_VERSION,
        "info": {"title": title, "version": version},
        "servers": servers,
        "tags": [],
        "paths": paths,
        "components": {"schemas": schemas},
    }
