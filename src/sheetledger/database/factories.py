"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from sheetledger.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "SHEETLEDGER_DB_PATH"


def default_database_path() -> str:
    """Return ``$SHEETLEDGER_DB_PATH`` or ``~/.sheetledger/sheetledger.db``."""
    database_path = os.environ.get(DB_PATH_ENV)
    if database_path:
        return database_path

    db_dir = Path.home() / ".sheetledger"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "sheetledger.db")


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks SHEETLEDGER_DB_PATH
            environment variable, then defaults to ~/.sheetledger/sheetledger.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = default_database_path()
    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
