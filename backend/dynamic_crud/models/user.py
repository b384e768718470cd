"""User ORM: the example record type exposed through generated CRUD endpoints.

Invariants:
    - name is non-nullable text (API enforces min length 3)
    - email is non-nullable and unique
    - id, created_at, updated_at come from EntityMixin
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from dynamic_crud.db.base import Base, EntityMixin


class User(EntityMixin, Base):
    """User entity."""
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
