"""Database layer for sheetledger."""

from sheetledger.database.base import Database
from sheetledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
