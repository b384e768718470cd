"""Database Models Base: declarative base and shared entity columns.

Invariants:
    - Single async engine per process (initialized via init_db)

Design Decisions:
    - asyncpg driver for PostgreSQL (ADR: native async, no thread pool overhead)
"""
