"""CRUD API Generator: builds the five REST routes for one entity.

Invariants:
    - Exactly five routes per entity: list, get, create, update, delete (in that order)
    - Bad input is rejected with 400 before any repository call
    - RecordNotFoundError maps to 404 on id-scoped routes only
    - Any other repository failure maps to 500 with the error's text
    - Handlers never raise to the server; every failure returns {error, message}
    - Handlers hold no mutable state beyond the injected repository

Design Decisions:
    - CrudApiConfig is frozen; with_create_schema()/with_update_schema() return
      a new CrudApi so assignment is chainable and reassignment overwrites
    - Request bodies validated with pydantic models derived from the entity's
      FieldDescriptors; PUT uses the partial model (only submitted fields change)
    - Identifier format is not checked here: the repository reports malformed
      ids as not found
"""

import logging
from dataclasses import dataclass, replace
from functools import wraps

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel, ValidationError

from dynamic_crud.core.domain_types import EntityDescriptor, HttpMethod
from dynamic_crud.core.errors import (
    BadRequestError, CrudError, InternalServerError, RecordNotFoundError,
)
from dynamic_crud.core.repository_protocols import CrudRepository
from dynamic_crud.core.routing import (
    OpenAPIMetadata, Route,
    error_responses, id_path_parameter, json_request_body,
    json_response, text_ok_response,
)
from dynamic_crud.core.schema_registry import (
    SUCCESS_SCHEMA_NAME, build_request_model,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrudApiConfig:
    """Payload shapes and pre-handler dependencies for one entity's routes."""
    create_schema: dict | None = None
    update_schema: dict | None = None
    middlewares: tuple = ()


class CrudApi:
    """Generates CRUD routes for a single entity bound to one repository."""

    def __init__(
        self,
        entity: EntityDescriptor,
        repository: CrudRepository,
        config: CrudApiConfig | None = None,
    ):
        self.entity = entity
        self.repository = repository
        self.config = config or CrudApiConfig()
        self._create_model = build_request_model(entity)
        self._update_model = build_request_model(entity, partial=True)

    def with_create_schema(self, schema: dict) -> "CrudApi":
        return CrudApi(
            self.entity, self.repository,
            replace(self.config, create_schema=schema),
        )

    def with_update_schema(self, schema: dict) -> "CrudApi":
        return CrudApi(
            self.entity, self.repository,
            replace(self.config, update_schema=schema),
        )

    def with_middlewares(self, *middlewares) -> "CrudApi":
        return CrudApi(
            self.entity, self.repository,
            replace(self.config, middlewares=tuple(middlewares)),
        )

    def routes(self) -> list[Route]:
        """All five routes, in list/get/create/update/delete order."""
        return [
            self.get_all_route(),
            self.get_one_route(),
            self.create_route(),
            self.update_route(),
            self.delete_route(),
        ]

    # ─── Route builders ─────────────────────────────────────────

    def get_all_route(self) -> Route:
        entity = self.entity

        @self._guarded(HttpMethod.GET, id_scoped=False)
        async def handler(request: Request) -> Response:
            records = await self.repository.find_all()
            return JSONResponse({"items": jsonable_encoder(records)})

        return Route(
            method=HttpMethod.GET,
            path=entity.path,
            entity=entity.name,
            handler=handler,
            middlewares=self.config.middlewares,
            metadata=OpenAPIMetadata(
                summary=f"Get {entity.tag}",
                description=f"This endpoint retrieves a list of {entity.plural}.",
                tags=(entity.tag,),
                responses={
                    "200": json_response(
                        f"{entity.tag} retrieved successfully.",
                        SUCCESS_SCHEMA_NAME,
                    ),
                    **error_responses(with_not_found=False),
                },
            ),
        )

    def get_one_route(self) -> Route:
        entity = self.entity

        @self._guarded(HttpMethod.GET, id_scoped=True)
        async def handler(request: Request) -> Response:
            entity_id = _path_id(request)
            record = await self.repository.find_one(entity_id)
            return JSONResponse({"item": jsonable_encoder(record)})

        return Route(
            method=HttpMethod.GET,
            path=entity.item_path,
            entity=entity.name,
            handler=handler,
            middlewares=self.config.middlewares,
            metadata=OpenAPIMetadata(
                summary=f"Get {entity.name}",
                description=f"This endpoint retrieves an existing {entity.label}.",
                tags=(entity.tag,),
                parameters=(id_path_parameter(),),
                responses={
                    "200": json_response(
                        f"{entity.name} retrieved successfully.",
                        SUCCESS_SCHEMA_NAME,
                    ),
                    **error_responses(with_not_found=True),
                },
            ),
        )

    def create_route(self) -> Route:
        entity = self.entity
        create_schema = self.config.create_schema

        @self._guarded(HttpMethod.POST, id_scoped=False)
        async def handler(request: Request) -> Response:
            data = await _parse_body(request, self._create_model)
            await self.repository.create(data)
            return PlainTextResponse("OK", status_code=200)

        request_body = None
        if create_schema is not None:
            request_body = json_request_body(
                f"Create{entity.name}",
                f"Payload to create a new {entity.label}.",
            )
        return Route(
            method=HttpMethod.POST,
            path=entity.path,
            entity=entity.name,
            handler=handler,
            create_schema=create_schema,
            middlewares=self.config.middlewares,
            metadata=OpenAPIMetadata(
                summary=f"Create {entity.name}",
                description=f"This endpoint creates a new {entity.label}.",
                tags=(entity.tag,),
                request_body=request_body,
                responses={
                    "200": text_ok_response(f"{entity.name} created successfully."),
                    **error_responses(with_not_found=False),
                },
            ),
        )

    def update_route(self) -> Route:
        entity = self.entity
        update_schema = self.config.update_schema

        @self._guarded(HttpMethod.PUT, id_scoped=True)
        async def handler(request: Request) -> Response:
            entity_id = _path_id(request)
            data = await _parse_body(request, self._update_model)
            await self.repository.update(entity_id, data)
            return PlainTextResponse("OK", status_code=200)

        request_body = None
        if update_schema is not None:
            request_body = json_request_body(
                f"Update{entity.name}",
                f"Payload to update an existing {entity.label}.",
            )
        return Route(
            method=HttpMethod.PUT,
            path=entity.item_path,
            entity=entity.name,
            handler=handler,
            update_schema=update_schema,
            middlewares=self.config.middlewares,
            metadata=OpenAPIMetadata(
                summary=f"Update {entity.name}",
                description=f"This endpoint updates an existing {entity.label}.",
                tags=(entity.tag,),
                parameters=(id_path_parameter(),),
                request_body=request_body,
                responses={
                    "200": text_ok_response(f"{entity.name} updated successfully."),
                    **error_responses(with_not_found=True),
                },
            ),
        )

    def delete_route(self) -> Route:
        entity = self.entity

        @self._guarded(HttpMethod.DELETE, id_scoped=True)
        async def handler(request: Request) -> Response:
            entity_id = _path_id(request)
            await self.repository.delete(entity_id)
            return PlainTextResponse("OK", status_code=200)

        return Route(
            method=HttpMethod.DELETE,
            path=entity.item_path,
            entity=entity.name,
            handler=handler,
            middlewares=self.config.middlewares,
            metadata=OpenAPIMetadata(
                summary=f"Delete {entity.name}",
                description=f"This endpoint deletes an existing {entity.label}.",
                tags=(entity.tag,),
                parameters=(id_path_parameter(),),
                responses={
                    "200": text_ok_response(f"{entity.name} deleted successfully."),
                    **error_responses(with_not_found=True),
                },
            ),
        )

    # ─── Error mapping ──────────────────────────────────────────

    def _guarded(self, method: HttpMethod, id_scoped: bool):
        """Wrap a handler so every failure becomes a structured error response."""
        entity = self.entity

        def decorator(func):
            @wraps(func)
            async def wrapper(request: Request) -> Response:
                try:
                    return await func(request)
                except BadRequestError as e:
                    return _error_response(e, request, entity, method)
                except RecordNotFoundError as e:
                    if id_scoped:
                        return _error_response(
                            RecordNotFoundError(entity.name, e.entity_id),
                            request, entity, method,
                        )
                    return _error_response(
                        InternalServerError(e.message), request, entity, method,
                    )
                except Exception as e:
                    logger.error(
                        f"{method.value} {request.url.path} failed: {e}",
                        exc_info=True,
                        extra={"entity": entity.name, "method": method.value},
                    )
                    return _error_response(
                        InternalServerError(str(e)), request, entity, method,
                    )
            return wrapper

        return decorator


# ─── Request parsing ────────────────────────────────────────────

def _path_id(request: Request) -> str:
    """Identifier token from the path. Format is the repository's concern."""
    entity_id = request.path_params.get("id")
    if not entity_id:
        raise BadRequestError("Missing path parameter: id")
    return str(entity_id)


async def _parse_body(request: Request, model: type[BaseModel]) -> dict:
    """Decode and validate a JSON body, keeping only submitted fields."""
    try:
        payload = await request.json()
    except ValueError as e:
        raise BadRequestError(f"Invalid JSON body: {e}")
    try:
        return model.model_validate(payload).model_dump(exclude_unset=True)
    except ValidationError as e:
        raise BadRequestError(_describe_validation_error(e))


def _describe_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in err['loc']) or 'body'}: {err['msg']}"
        for err in exc.errors()
    )


def _error_response(
    exc: CrudError, request: Request, entity: EntityDescriptor, method: HttpMethod,
) -> JSONResponse:
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{method.value} {request.url.path} -> {exc.http_status}: {exc.message}",
        extra={
            "entity": entity.name,
            "method": method.value,
            "path": request.url.path,
            "status_code": exc.http_status,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())
