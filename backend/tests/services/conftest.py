"""Service test fixtures: FastAPI test clients over generated routes.

Invariants:
    - client drives the real application against in-memory SQLite
    - fake_client drives routes generated for a fake repository, mounted without prefix

Design Decisions:
    - Lifespan not run by ASGITransport: db_manager fixture stands in for init_db
"""

import pytest
from fastapi import APIRouter, FastAPI
from httpx import ASGITransport, AsyncClient

from dynamic_crud.api.http_binder import bind_routes
from dynamic_crud.main import app
from dynamic_crud.schemas.user import (
    CREATE_USER_SCHEMA, UPDATE_USER_SCHEMA, USER_ENTITY,
)
from dynamic_crud.services.crud_api import CrudApi
from tests.services.fake_repository import InMemoryCrudRepository


@pytest.fixture
async def client(db_manager):
    """Application client with the database swapped for in-memory SQLite."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def fake_repo():
    return InMemoryCrudRepository("User")


@pytest.fixture
def user_api(fake_repo):
    return (
        CrudApi(USER_ENTITY, fake_repo)
        .with_create_schema(CREATE_USER_SCHEMA)
        .with_update_schema(UPDATE_USER_SCHEMA)
    )


@pytest.fixture
async def fake_client(user_api):
    """Client for User routes backed by the in-memory fake repository."""
    fake_app = FastAPI()
    fake_app.include_router(bind_routes(APIRouter(), user_api.routes()))
    async with AsyncClient(
        transport=ASGITransport(app=fake_app), base_url="http://test",
    ) as c:
        yield c
