"""Route Modules: one file per entity or concern.

Invariants:
    - Entity modules expose load_routes() returning generated Route objects
    - Routes never contain persistence logic (delegated to repositories)

Design Decisions:
    - Explicit registration in route_table.py over auto-discovery
"""
