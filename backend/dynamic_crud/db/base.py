"""SQLAlchemy Declarative Base and the columns every CRUD entity shares.

Invariants:
    - All models inherit from Base
    - Every CRUD entity mixes in EntityMixin: id (UUID pk), created_at, updated_at
    - updated_at refreshed on every ORM update

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - Timestamps set in Python (timezone-aware UTC) so SQLite and PostgreSQL agree
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all Dynamic CRUD ORM models."""
    pass


class EntityMixin:
    """System-managed columns: never accepted from request bodies."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )
