"""Infrastructure Layer — storage pool, HTTP middleware and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - All storage failures surface as StorageError

Design Decisions:
    - Thin wrappers over SQLAlchemy and Starlette (ADR: single responsibility)
"""
