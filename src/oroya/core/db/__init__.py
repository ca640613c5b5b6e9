"""Database utilities - engine, session, migrations."""

from src.oroya.core.db.engine import create_engine_for_url, dispose_engine, get_engine
from src.oroya.core.db.migrations import run_migrations_async, run_migrations_sync
from src.oroya.core.db.session import get_session

__all__ = [
    # Engine
    "create_engine_for_url",
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
    # Migrations
    "run_migrations_async",
    "run_migrations_sync",
]
