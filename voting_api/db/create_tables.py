"""Create the ``kv_entries`` table on the configured backend.

    python -m voting_api.db.create_tables
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers KVEntry on Base.metadata


def create_all(engine: Optional[Engine] = None) -> None:
    """Create missing tables on ``engine`` (default: the ``DATABASE_URL`` engine)."""
    Base.metadata.create_all(bind=engine or get_engine())


if __name__ == "__main__":
    try:
        create_all()
        print("kv_entries table ready.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
