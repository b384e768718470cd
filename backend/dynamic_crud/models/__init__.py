"""ORM Models: SQLAlchemy declarative models for every CRUD entity.

Invariants:
    - All models inherit from Base (db/base.py) and EntityMixin
    - One table per entity, no relationships between entities

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before
      create_all or alembic autogenerate runs
"""

from dynamic_crud.models.user import User  # noqa: F401
