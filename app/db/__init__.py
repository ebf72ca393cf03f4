"""
Database module for the container risk tracker.
"""
from app.db.database import (
    Base,
    engine,
    async_session_maker,
    create_sync_engine,
    create_sync_session_maker,
    get_async_session,
    init_db,
    drop_db,
)

__all__ = [
    "Base",
    "engine",
    "async_session_maker",
    "create_sync_engine",
    "create_sync_session_maker",
    "get_async_session",
    "init_db",
    "drop_db",
]
