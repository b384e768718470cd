"""API Layer: route table, HTTP binder, health probes and error handlers.

Invariants:
    - Generated routes registered through http_binder only
    - All error responses share the {error, message} envelope
"""
