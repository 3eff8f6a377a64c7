"""API Layer — FastAPI routes, dependencies and framework error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response body is either a success payload or an error envelope

Design Decisions:
    - Thin routes build a request object and hand it to the operation boundary
"""
