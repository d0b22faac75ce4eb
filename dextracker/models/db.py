"""
SQLAlchemy ORM models for persistent storage.

The whole catalogue, caught flags included, is stored as one JSON
document under a snapshot key.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CatalogueSnapshotDB(Base):
    """
    A saved catalogue snapshot.

    One row per key; saving replaces the payload.
    """

    __tablename__ = "catalogue_snapshots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    payload: Mapped[list[dict[str, Any]]] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<CatalogueSnapshotDB(id={self.id}, key={self.key})>"
