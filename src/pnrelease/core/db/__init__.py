"""Database utilities - engine, session, migrations."""

from src.pnrelease.core.db.engine import dispose_engine, get_engine, to_sync_url
from src.pnrelease.core.db.migrations import run_migrations_async, run_migrations_sync
from src.pnrelease.core.db.session import get_session

__all__ = [
    # Engine
    "dispose_engine",
    "get_engine",
    "to_sync_url",
    # Session
    "get_session",
    # Migrations
    "run_migrations_async",
    "run_migrations_sync",
]
