"""ORM Models — SQLAlchemy declarative models for the users and resources tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Tables are owned by the datastore; the service never issues DDL at runtime

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for test fixtures
"""

from library_api.models.user import User  # noqa: F401
from library_api.models.resource import Resource  # noqa: F401
