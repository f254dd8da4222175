"""Database utilities - engine, session, schema bootstrap."""

from src.applypath.core.db.engine import build_engine, dispose_engine, get_engine
from src.applypath.core.db.session import create_all, get_session

__all__ = [
    # Engine
    "build_engine",
    "dispose_engine",
    "get_engine",
    # Session
    "create_all",
    "get_session",
]
