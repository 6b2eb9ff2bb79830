"""Library API Package — CRUD service for users and multimedia resources.

Invariants:
    - Package root holds only the version constant (import side-effects prohibited)
"""

__version__ = "1.0.0"
