"""Resource ORM — a catalogued multimedia link (video, course, article...).

Invariants:
    - id is an integer primary key generated by the store
    - title and url are non-nullable
    - created_at is assigned by the database on insert (server default)

Design Decisions:
    - server_default over Python default: the store owns the timestamp, and
      list ordering by created_at must agree with rows inserted by other clients
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from library_api.db.base import Base


class Resource(Base):
    """Resource entity."""
    __tablename__ = "resources"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(
        Text, nullable=False, default="",
    )
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    type: Mapped[str] = mapped_column(
        String(50), nullable=False, default="Otro",
    )
    platform: Mapped[str] = mapped_column(
        String(50), nullable=False, default="Otro",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
