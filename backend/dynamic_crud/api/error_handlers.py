"""Error Handlers: global exception handlers for anything outside the generated handlers.

Invariants:
    - CrudError -> its own status and {error, message} body
    - RequestValidationError -> 400 with field-level detail folded into message
    - Exception (catch-all) -> 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (CrudError), validation (Pydantic), catch-all (Exception)
    - Same envelope as the generated handlers so clients parse one error shape
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from dynamic_crud.core.errors import CrudError, InternalServerError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_crud_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_crud_error_handler(app: FastAPI) -> None:

    @app.exception_handler(CrudError)
    async def crud_error_handler(request: Request, exc: CrudError):
        """Handle all Dynamic CRUD domain/infrastructure errors."""
        logger.error(
            f"CrudError: {exc.message}",
            extra={
                "error_code": exc.error,
                "path": request.url.path,
                "status_code": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=InternalServerError(
                "An unexpected error occurred",
            ).to_response(),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Fold field errors into the single message string."""
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    )
    return {"error": "Bad Request", "message": details or "Invalid request data"}
