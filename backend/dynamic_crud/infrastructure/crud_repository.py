"""SQLAlchemy CRUD Repository: the persistence adapter behind every generated route.

Invariants:
    - One session per call, taken from the process-wide DatabaseSessionManager
    - Each mutating call commits on its own (no cross-call transactions)
    - Non-UUID identifiers are reported as RecordNotFoundError, never as 500
    - Records leave as JSON-ready dicts: id, declared fields, createdAt, updatedAt
    - update() touches only the keys present in data

Design Decisions:
    - db_manager looked up on every call: the FastAPI lifespan initializes it
      after routes are built, and tests replace it with an in-memory engine
"""

import logging
import uuid
from datetime import datetime

from sqlalchemy import select

from dynamic_crud.core.domain_types import EntityDescriptor
from dynamic_crud.core.errors import RecordNotFoundError
from dynamic_crud.db.base import Base, utcnow
from dynamic_crud.infrastructure import database

logger = logging.getLogger(__name__)


class SqlAlchemyCrudRepository:
    """CrudRepository implementation for one ORM model."""

    def __init__(self, model: type[Base], entity: EntityDescriptor):
        self.model = model
        self.entity = entity

    async def create(self, data: dict) -> dict:
        async with database.get_db_manager().session() as db:
            record = self.model(**data)
            db.add(record)
            await db.commit()
            await db.refresh(record)
            logger.info(
                f"{self.entity.name} {record.id} created",
                extra={"entity": self.entity.name},
            )
            return self._to_dict(record)

    async def update(self, entity_id: str, data: dict) -> dict:
        async with database.get_db_manager().session() as db:
            record = await self._get_or_raise(db, entity_id)
            for key, value in data.items():
                setattr(record, key, value)
            record.updated_at = utcnow()
            await db.commit()
            await db.refresh(record)
            return self._to_dict(record)

    async def delete(self, entity_id: str) -> None:
        async with database.get_db_manager().session() as db:
            record = await self._get_or_raise(db, entity_id)
            await db.delete(record)
            await db.commit()
            logger.info(
                f"{self.entity.name} {entity_id} deleted",
                extra={"entity": self.entity.name},
            )

    async def find_one(self, entity_id: str) -> dict:
        async with database.get_db_manager().session() as db:
            record = await self._get_or_raise(db, entity_id)
            return self._to_dict(record)

    async def find_all(self) -> list[dict]:
        async with database.get_db_manager().session() as db:
            result = await db.execute(
                select(self.model).order_by(self.model.created_at),
            )
            return [self._to_dict(r) for r in result.scalars().all()]

    # ─── Helpers ────────────────────────────────────────────────

    async def _get_or_raise(self, db, entity_id: str):
        try:
            key = uuid.UUID(str(entity_id))
        except ValueError:
            raise RecordNotFoundError(self.entity.name, entity_id)
        result = await db.execute(
            select(self.model).where(self.model.id == key),
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise RecordNotFoundError(self.entity.name, entity_id)
        return record

    def _to_dict(self, record) -> dict:
        item = {"id": str(record.id)}
        for name in self.entity.field_names:
            item[name] = _json_value(getattr(record, name))
        item["createdAt"] = _json_value(record.created_at)
        item["updatedAt"] = _json_value(record.updated_at)
        return item


def _json_value(value):
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    return value
