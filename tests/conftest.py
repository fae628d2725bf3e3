from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the voting_api package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from voting_api.core import config as core_config  # noqa: E402
from voting_api.db import models  # noqa: E402
from voting_api.db import session as db_session  # noqa: E402
from voting_api.repositories.kv_store import KeyValueStore  # noqa: E402


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Temporary SQLite backend; settings/engine caches are reset around each test."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    try:
        models.Base.metadata.drop_all(bind=engine)
    except Exception:
        pass
    try:
        engine.dispose()
    except Exception:
        pass
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def backend(temp_db) -> KeyValueStore:
    return KeyValueStore()


@pytest.fixture()
def settings(temp_db) -> core_config.Settings:
    return core_config.get_settings()
