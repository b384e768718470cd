"""HTTP Binder: registers generated routes on a FastAPI router.

Invariants:
    - "{name}" placeholders become Starlette's explicit "{name:str}" converter
    - Registration follows route-table order; middlewares run before the handler
    - Generated routes stay out of FastAPI's own schema: the assembled document
      describes them instead

Design Decisions:
    - Duplicate path+method registration left to the router (first match wins)
"""

import logging
import re
from typing import Iterable

from fastapi import APIRouter

from dynamic_crud.core.routing import Route

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{([^}:]+)\}")


def to_router_path(path: str) -> str:
    """'/users/{id}' -> '/users/{id:str}'. Already-typed placeholders untouched."""
    return _PLACEHOLDER.sub(r"{\1:str}", path)


def bind_routes(router: APIRouter, routes: Iterable[Route]) -> APIRouter:
    """Register every route (middlewares + handler) on the router."""
    for route in routes:
        router.add_api_route(
            to_router_path(route.path),
            route.handler,
            methods=[route.method.value],
            dependencies=list(route.middlewares),
            include_in_schema=False,
            name=f"{route.method.value} {route.path}",
        )
        logger.debug(
            f"Bound {route.method.value} {route.path}",
            extra={"entity": route.entity, "method": route.method.value},
        )
    return router
