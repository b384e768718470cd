"""Boundary Protocols: the persistence contract generated handlers depend on.

Invariants:
    - Core NEVER imports from infrastructure; implementations injected by the shell
    - Records cross the boundary as JSON-ready dicts (id, fields, createdAt, updatedAt)
    - update/delete/find_one raise RecordNotFoundError for unknown or malformed ids
    - Any other failure propagates as an exception (typically DatabaseError)

Design Decisions:
    - Protocol over ABC: structural subtyping, in-memory fakes need no base class
    - Async methods: implementations do IO; one call never waits on another request
"""

from typing import Protocol


class CrudRepository(Protocol):
    """Contract for single-entity persistence, bound to one record type."""
    async def create(self, data: dict) -> dict: ...
    async def update(self, entity_id: str, data: dict) -> dict: ...
    async def delete(self, entity_id: str) -> None: ...
    async def find_one(self, entity_id: str) -> dict: ...
    async def find_all(self) -> list[dict]: ...
