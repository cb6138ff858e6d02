"""Database layer for compta application."""

from compta.database.base import Database
from compta.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
