"""Engine and session helpers for the key-value table."""

from .session import Base, build_engine, get_engine, get_session, session_scope

__all__ = ["Base", "build_engine", "get_engine", "get_session", "session_scope"]
