"""Error Hierarchy: typed exceptions for every failure a generated endpoint can report.

Invariants:
    - Every error carries an error category string, a message, and an HTTP status
    - to_response() always produces {"error": <category>, "message": <detail>}
    - DatabaseError messages never contain SQL or driver detail

Design Decisions:
    - Single hierarchy with CrudError base: handlers and the global FastAPI
      handler share one envelope (ADR: uniform error shape)
    - RecordNotFoundError is the adapter's "not found" sentinel; handlers map it to 404
"""


class CrudError(Exception):
    """Base exception for all Dynamic CRUD errors."""

    def __init__(self, message: str, error: str, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.error = error
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the standard REST error body."""
        return {"error": self.error, "message": self.message}


# ─── Request Errors (400-level) ─────────────────────────────────

class BadRequestError(CrudError):
    """Malformed path parameter or request body."""
    def __init__(self, message: str):
        super().__init__(message, "Bad Request", 400)


class RecordNotFoundError(CrudError):
    """No record matches the identifier of an id-scoped operation."""
    def __init__(self, entity: str, entity_id: str | None = None):
        super().__init__(
            f"The {entity.lower()} was not found.", "Not Found", 404,
        )
        self.entity = entity
        self.entity_id = entity_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InternalServerError(CrudError):
    """Any failure that is not the caller's fault."""
    def __init__(self, message: str):
        super().__init__(message, "Internal Server Error", 500)


class DatabaseError(InternalServerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(f"Database {operation} failed: {message}")
        self.operation = operation
