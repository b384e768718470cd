"""In-memory CrudRepository: controllable fake for handler tests.

Usage:
    repo = InMemoryCrudRepository("User")
    repo.fail_with = RuntimeError("boom")   # every call raises
    repo.calls                               # [("create", {...}), ...]
"""

from datetime import datetime, timezone
from uuid import uuid4

from dynamic_crud.core.errors import RecordNotFoundError


class InMemoryCrudRepository:
    def __init__(self, entity: str = "User"):
        self.entity = entity
        self.records: dict[str, dict] = {}
        self.calls: list[tuple] = []
        self.fail_with: Exception | None = None

    def _record_call(self, *call) -> None:
        self.calls.append(call)
        if self.fail_with is not None:
            raise self.fail_with

    def _get(self, entity_id: str) -> dict:
        if entity_id not in self.records:
            raise RecordNotFoundError(self.entity, entity_id)
        return self.records[entity_id]

    def seed(self, **fields) -> dict:
        now = datetime.now(timezone.utc).isoformat()
        record = {"id": str(uuid4()), **fields, "createdAt": now, "updatedAt": now}
        self.records[record["id"]] = record
        return record

    async def create(self, data: dict) -> dict:
        self._record_call("create", data)
        return dict(self.seed(**data))

    async def update(self, entity_id: str, data: dict) -> dict:
        self._record_call("update", entity_id, data)
        record = self._get(entity_id)
        record.update(data)
        record["updatedAt"] = datetime.now(timezone.utc).isoformat()
        return dict(record)

    async def delete(self, entity_id: str) -> None:
        self._record_call("delete", entity_id)
        self._get(entity_id)
        del self.records[entity_id]

    async def find_one(self, entity_id: str) -> dict:
        self._record_call("find_one", entity_id)
        return dict(self._get(entity_id))

    async def find_all(self) -> list[dict]:
        self._record_call("find_all")
        return [dict(r) for r in self.records.values()]
