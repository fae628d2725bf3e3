"""
Configuration helpers for the voting services.

A single Settings object reads the environment once so routers, services and
the storage layer never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    log_level: str
    api_host: str
    voters_port: int
    polls_port: int
    votes_port: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=(os.getenv("DATABASE_URL") or "sqlite:///./voting.db").strip(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        api_host=os.getenv("API_HOST", "0.0.0.0"),
        voters_port=_int(os.getenv("VOTERS_PORT", "1080"), 1080),
        polls_port=_int(os.getenv("POLLS_PORT", "1090"), 1090),
        votes_port=_int(os.getenv("VOTES_PORT", "1100"), 1100),
    )
