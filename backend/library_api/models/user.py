"""User ORM — a named account row.

Invariants:
    - id is an integer primary key generated by the store
    - name is non-nullable and stored trimmed (enforced by schemas/user.py)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from library_api.db.base import Base


class User(Base):
    """User entity."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
