"""Services Layer: turns entity descriptors into executable CRUD routes.

Invariants:
    - Services depend on core protocols, never on a concrete repository
"""
