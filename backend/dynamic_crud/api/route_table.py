"""Route Table: the process-wide, immutable list of generated routes.

Invariants:
    - Built once at import of main.py, before binding and documentation
    - ENTITIES and ROUTE_LOADERS list the same entities in the same order
    - Both the HTTP binder and the API document consume this one table
"""

from dynamic_crud.api.routes import users
from dynamic_crud.core.routing import Route
from dynamic_crud.schemas.user import USER_ENTITY

ENTITIES = (USER_ENTITY,)

ROUTE_LOADERS = (users.load_routes,)


def build_route_table() -> tuple[Route, ...]:
    """Concatenate every entity's routes."""
    routes: list[Route] = []
    for load_routes in ROUTE_LOADERS:
        routes.extend(load_routes())
    return tuple(routes)
