"""Infrastructure Layer: database sessions, repositories, and logging.

Invariants:
    - SQLAlchemy exceptions never escape this layer unmapped (DatabaseError)

Design Decisions:
    - Repositories implement core/repository_protocols.py structurally
"""
