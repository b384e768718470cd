"""Dynamic CRUD: REST endpoints and OpenAPI documentation generated from entity descriptors.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
