"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas shape data at the system boundary (API responses)
    - Wire names are camelCase; Python attribute names stay snake_case

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
