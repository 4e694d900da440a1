"""Infrastructure Layer — persistence adapters and cross-cutting concerns.

Invariants:
    - Infrastructure implements core/ protocols, never the other way round
    - All store calls wrapped with error mapping (SQLAlchemy → DatabaseError)

Design Decisions:
    - Resilient wrappers over raw clients (ADR: single responsibility)
"""
