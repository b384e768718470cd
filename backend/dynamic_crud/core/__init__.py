"""Core Layer: descriptors, schemas, route definitions and document assembly. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic: same descriptors, same routes and documents
"""
