"""Transactional key-value table on SQLite.

The alias store talks to persistence only through this contract: open a
database, begin a read or write transaction, then get / insert / remove /
iterate keys and commit. A write transaction left without commit is rolled
back, so nothing it wrote becomes visible.
"""

import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from aka.errors import StorageError

from . import migrations
from .sqlite import connect

logger = logging.getLogger(__name__)

TABLE = "aliases"


class Transaction:
    """One SQLite transaction over the aliases table.

    Use as a context manager; leaving the block without commit() rolls back.
    """

    def __init__(self, conn: sqlite3.Connection, write: bool):
        self._conn = conn
        self.write = write
        self._open = False

    def __enter__(self) -> "Transaction":
        try:
            self._conn.execute("BEGIN IMMEDIATE" if self.write else "BEGIN")
        except sqlite3.Error as e:
            raise StorageError(f"Cannot begin transaction: {e}") from e
        self._open = True
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._open:
            self.rollback()
        return False

    def get(self, key: str) -> str | None:
        row = self._execute(f"SELECT definitions FROM {TABLE} WHERE name = ?", (key,)).fetchone()
        return row[0] if row else None

    def insert(self, key: str, value: str) -> None:
        self._require_write()
        self._execute(
            f"INSERT INTO {TABLE} (name, definitions) VALUES (?, ?) "
            "ON CONFLICT(name) DO UPDATE SET definitions = excluded.definitions",
            (key, value),
        )

    def remove(self, key: str) -> str | None:
        """Delete `key`, returning its previous value (None if absent)."""
        self._require_write()
        previous = self.get(key)
        if previous is not None:
            self._execute(f"DELETE FROM {TABLE} WHERE name = ?", (key,))
        return previous

    def iter(self) -> Iterator[tuple[str, str]]:
        """Yield (key, value) pairs ordered by key."""
        rows = self._execute(f"SELECT name, definitions FROM {TABLE} ORDER BY name").fetchall()
        for row in rows:
            yield row[0], row[1]

    def commit(self) -> None:
        if not self._open:
            raise StorageError("Transaction is not open")
        try:
            self._conn.execute("COMMIT")
        except sqlite3.Error as e:
            self.rollback()
            raise StorageError(f"Commit failed: {e}") from e
        self._open = False

    def rollback(self) -> None:
        self._open = False
        if not self._conn.in_transaction:
            return
        try:
            self._conn.execute("ROLLBACK")
        except sqlite3.Error as e:
            logger.warning(f"Rollback failed: {e}")

    def _require_write(self) -> None:
        if not self.write:
            raise StorageError("Cannot modify aliases inside a read transaction")

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        if not self._open:
            raise StorageError("Transaction is not open")
        try:
            return self._conn.execute(sql, params)
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e


class Database:
    """Durable alias table in a single SQLite file."""

    def __init__(self, conn: sqlite3.Connection, path: Path):
        self._conn = conn
        self.path = path

    @classmethod
    def open(cls, path: Path) -> "Database":
        """Open (creating if needed) the database at `path` and apply migrations."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            conn = connect(path)
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot open database {path}: {e}") from e
        try:
            migrations.migrate(conn, migrations.load_migrations())
        except sqlite3.Error as e:
            conn.close()
            raise StorageError(f"Cannot initialize database {path}: {e}") from e
        logger.debug(f"Opened alias database {path}")
        return cls(conn, path)

    def begin_read(self) -> Transaction:
        return Transaction(self._conn, write=False)

    def begin_write(self) -> Transaction:
        return Transaction(self._conn, write=True)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
