"""Persistence layer: database engine, models and repositories."""

from outletbase.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    close_database,
    get_db_manager,
    get_db_session,
    init_database,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "close_database",
    "get_db_manager",
    "get_db_session",
    "init_database",
]
