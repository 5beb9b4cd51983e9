"""API Layer: FastAPI routes, request dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every error leaves the API as the same structured JSON envelope

Design Decisions:
    - Thin routes delegate to services (functional core, imperative shell)
    - Domain errors propagate to the global handlers instead of per-route HTTPException
"""
