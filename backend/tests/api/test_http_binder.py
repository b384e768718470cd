"""HTTP Binder: placeholder translation and registration on a FastAPI router.

Tests:
    - "{id}" becomes "{id:str}"; typed placeholders untouched
    - one APIRoute per generated route, in order, with its method
    - generated routes excluded from FastAPI's own schema
"""

from fastapi import APIRouter

from dynamic_crud.api.http_binder import bind_routes, to_router_path
from dynamic_crud.schemas.user import USER_ENTITY
from dynamic_crud.services.crud_api import CrudApi
from tests.services.fake_repository import InMemoryCrudRepository


def test_placeholder_translated_to_string_converter():
    assert to_router_path("/users/{id}") == "/users/{id:str}"
    assert to_router_path("/a/{x}/b/{y}") == "/a/{x:str}/b/{y:str}"


def test_paths_without_placeholders_unchanged():
    assert to_router_path("/users") == "/users"


def test_typed_placeholder_left_alone():
    assert to_router_path("/files/{p:path}") == "/files/{p:path}"


def test_bind_routes_registers_every_route_in_order():
    routes = CrudApi(USER_ENTITY, InMemoryCrudRepository()).routes()
    router = bind_routes(APIRouter(prefix="/api"), routes)
    bound = [(r.path, sorted(r.methods)) for r in router.routes]
    assert bound == [
        ("/api/users", ["GET"]),
        ("/api/users/{id:str}", ["GET"]),
        ("/api/users", ["POST"]),
        ("/api/users/{id:str}", ["PUT"]),
        ("/api/users/{id:str}", ["DELETE"]),
    ]
    assert all(r.include_in_schema is False for r in router.routes)
