"""Database layer for ledgerkit."""

from ledgerkit.database.base import Database
from ledgerkit.database.factories import create_memory_database, create_sqlite_database
from ledgerkit.database.memory import InMemoryDatabase

__all__ = [
    "Database",
    "InMemoryDatabase",
    "create_memory_database",
    "create_sqlite_database",
]
