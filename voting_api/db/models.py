"""SQLAlchemy model for the shared key-value table."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, JSON, func

from .session import Base


class KVEntry(Base):
    """One JSON document stored under a ``<namespace>:<id>`` key."""

    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
