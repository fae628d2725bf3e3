"""Key-value access to the shared ``kv_entries`` table backed by SQLAlchemy."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update, delete
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from voting_api.core.errors import BackendUnavailableError
from voting_api.db.models import KVEntry
from voting_api.db.session import get_engine, get_session, session_scope

logger = logging.getLogger(__name__)


@contextmanager
def _backend_call(action: str):
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Backend %s failed: %s", action, exc)
        raise BackendUnavailableError(f"backend unavailable during {action}") from exc


class KeyValueStore:
    """JSON documents addressed by string keys.

    Every method is a single round-trip to the backend. ``set_if_absent`` and
    ``set_if_present`` are conditional writes, so callers never need a separate
    existence check before writing. Without an explicit ``engine`` the store
    uses the process-wide one built from ``DATABASE_URL``.
    """

    def __init__(self, engine: Optional[Engine] = None) -> None:
        self._engine = engine
        self._scope = session_scope(engine) if engine is not None else None

    @property
    def engine(self) -> Engine:
        return self._engine if self._engine is not None else get_engine()

    def _session(self):
        if self._scope is not None:
            return self._scope()
        return get_session()

    def ping(self) -> None:
        with _backend_call("ping"), self._session() as session:
            session.execute(select(1))

    def get(self, key: str) -> Optional[dict]:
        with _backend_call("get"), self._session() as session:
            entry = session.get(KVEntry, key)
            return dict(entry.value) if entry else None

    def exists(self, key: str) -> bool:
        with _backend_call("exists"), self._session() as session:
            stmt = select(KVEntry.key).where(KVEntry.key == key).limit(1)
            return session.execute(stmt).first() is not None

    def set_if_absent(self, key: str, value: dict) -> bool:
        """Insert ``value`` under ``key``; return False when the key is taken."""
        with _backend_call("insert"), self._session() as session:
            session.add(KVEntry(key=key, value=value, updated_at=datetime.now(timezone.utc)))
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                return False
            logger.debug("Inserted %s", key)
            return True

    def set_if_present(self, key: str, value: dict) -> bool:
        """Replace the document under ``key``; return False when the key is missing."""
        with _backend_call("update"), self._session() as session:
            stmt = (
                update(KVEntry)
                .where(KVEntry.key == key)
                .values(value=value, updated_at=datetime.now(timezone.utc))
            )
            result = session.execute(stmt)
            session.commit()
            logger.debug("Updated %s (%d row)", key, result.rowcount)
            return result.rowcount == 1

    def delete(self, *keys: str) -> int:
        """Delete the given keys and return how many were actually removed."""
        if not keys:
            return 0
        with _backend_call("delete"), self._session() as session:
            result = session.execute(delete(KVEntry).where(KVEntry.key.in_(keys)))
            session.commit()
            logger.debug("Deleted %d of %d keys", result.rowcount, len(keys))
            return result.rowcount

    def keys(self, prefix: str) -> list[str]:
        with _backend_call("scan"), self._session() as session:
            stmt = select(KVEntry.key).where(KVEntry.key.startswith(prefix, autoescape=True))
            return list(session.execute(stmt).scalars().all())
