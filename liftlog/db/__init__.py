"""Database package: engine, session factory, key-indexed store."""

from liftlog.db.session import build_engine, build_session_maker
from liftlog.db.store import Store

__all__ = ["build_engine", "build_session_maker", "Store"]
