"""Entity Shapes: API-facing field declarations, one module per entity.

Invariants:
    - Each module exports an EntityDescriptor plus its Create/Update shapes
    - Field names match the ORM column attribute names

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
