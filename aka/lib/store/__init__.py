"""Persistence collaborator: transactional key-value table on SQLite."""

from aka.lib.store.kv import Database, Transaction
from aka.lib.store.migrations import load_migrations, migrate
from aka.lib.store.sqlite import connect

__all__ = [
    "Database",
    "Transaction",
    "connect",
    "load_migrations",
    "migrate",
]
