"""Dynamic CRUD API: FastAPI application entry point.

Invariants:
    - Route table built once at import; binder and API document consume the same tuple
    - Generated routes mounted under settings.route_prefix; documented under
      settings.docs_path_prefix
    - /openapi.json (and /docs) serve the assembled document, not FastAPI's own
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Startup and shutdown live in one lifespan context manager
    - Three error handler layers registered in api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dynamic_crud.api.error_handlers import register_error_handlers
from dynamic_crud.api.http_binder import bind_routes
from dynamic_crud.api.route_table import ENTITIES, build_route_table
from dynamic_crud.api.routes import health
from dynamic_crud.config import Settings, get_settings
from dynamic_crud.core.api_document import assemble_api_document, build_servers
from dynamic_crud.core.schema_registry import SchemaRegistry
from dynamic_crud.infrastructure import database
from dynamic_crud.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

ROUTES = build_route_table()
SCHEMA_REGISTRY = SchemaRegistry(ENTITIES)


def build_api_document(settings: Settings) -> dict:
    """OpenAPI document for every generated route."""
    return assemble_api_document(
        ROUTES,
        SCHEMA_REGISTRY,
        title=settings.app_name,
        version=settings.app_version,
        servers=build_servers(settings.development_url, settings.app_base_url),
        path_prefix=settings.docs_path_prefix,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"{settings.app_name} started with {len(ROUTES)} generated routes")
    yield
    await manager.dispose()
    logger.info(f"{settings.app_name} shutting down")


settings = get_settings()

app = FastAPI(
    title=settings.app_name, version=settings.app_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(bind_routes(APIRouter(prefix=settings.route_prefix), ROUTES))

register_error_handlers(app)


def custom_openapi() -> dict:
    if app.openapi_schema:
        return app.openapi_schema
    app.openapi_schema = build_api_document(settings)
    return app.openapi_schema


app.openapi = custom_openapi
