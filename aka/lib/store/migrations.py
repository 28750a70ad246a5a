"""Database schema migrations."""

import logging
import sqlite3
from pathlib import Path

from aka.lib import paths

logger = logging.getLogger(__name__)

Migration = tuple[str, str]


def load_migrations(migrations_dir: Path | None = None) -> list[Migration]:
    """Load numbered .sql files (001_*.sql, 002_*.sql, ...) in lexical order."""
    directory = migrations_dir or paths.migrations_dir()
    if not directory.exists():
        return []

    migrations = []
    for sql_file in sorted(directory.glob("*.sql")):
        migrations.append((sql_file.stem, sql_file.read_text()))
    return migrations


def migrate(conn: sqlite3.Connection, migs: list[Migration]) -> None:
    """Apply pending migrations, each in its own transaction."""
    conn.execute("CREATE TABLE IF NOT EXISTS _migrations (name TEXT PRIMARY KEY)")

    for name, migration in migs:
        applied = conn.execute("SELECT 1 FROM _migrations WHERE name = ?", (name,)).fetchone()
        if applied:
            continue
        try:
            conn.execute("BEGIN IMMEDIATE")
            for statement in _statements(migration):
                conn.execute(statement)
            conn.execute("INSERT OR IGNORE INTO _migrations (name) VALUES (?)", (name,))
            conn.execute("COMMIT")
            logger.debug(f"Applied migration '{name}'")
        except Exception as e:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            logger.error(f"Migration '{name}' failed: {e}")
            raise


def _statements(script: str) -> list[str]:
    """Split a migration script into statements.

    executescript() would commit the surrounding transaction, so statements are
    run one by one instead.
    """
    statements = []
    buffer = ""
    for line in script.splitlines(keepends=True):
        buffer += line
        if sqlite3.complete_statement(buffer):
            statement = buffer.strip()
            if statement:
                statements.append(statement)
            buffer = ""
    if buffer.strip():
        statements.append(buffer.strip())
    return statements
