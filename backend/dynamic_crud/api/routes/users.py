"""Users Routes: CRUD endpoints for the User entity.

Invariants:
    - Five routes under /users and /users/{id}
    - CreateUser and UpdateUser shapes always assigned, so all five are documented
"""

import logging

from dynamic_crud.core.repository_protocols import CrudRepository
from dynamic_crud.core.routing import Route
from dynamic_crud.infrastructure.crud_repository import SqlAlchemyCrudRepository
from dynamic_crud.models.user import User
from dynamic_crud.schemas.user import (
    CREATE_USER_SCHEMA, UPDATE_USER_SCHEMA, USER_ENTITY,
)
from dynamic_crud.services.crud_api import CrudApi

logger = logging.getLogger(__name__)


def load_routes(repository: CrudRepository | None = None) -> list[Route]:
    """Build the User routes, backed by SQLAlchemy unless a repository is given."""
    crud_api = CrudApi(
        USER_ENTITY,
        repository or SqlAlchemyCrudRepository(User, USER_ENTITY),
    ).with_create_schema(CREATE_USER_SCHEMA).with_update_schema(UPDATE_USER_SCHEMA)
    logger.info(
        f"Initialized CRUD API for {USER_ENTITY.name} at {USER_ENTITY.path}",
        extra={"entity": USER_ENTITY.name},
    )
    return crud_api.routes()
