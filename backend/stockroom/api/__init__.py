"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; all errors share one envelope

Design Decisions:
    - Thin routes: parse → core validation → repository → schema
"""
