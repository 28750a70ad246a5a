import logging
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)

BUSY_TIMEOUT_MS = 5000
CONNECT_ATTEMPTS = 5
SLOW_CONNECT_SECONDS = 0.1


def _configure(conn: sqlite3.Connection) -> None:
    # Autocommit: Transaction issues BEGIN/COMMIT itself.
    conn.isolation_level = None
    conn.execute(f"PRAGMA busy_timeout = {BUSY_TIMEOUT_MS}")
    conn.execute("PRAGMA journal_mode = WAL")


def connect(db_path: Path) -> sqlite3.Connection:
    """Open the alias database, retrying while another aka process holds the lock.

    Switching to WAL needs a brief exclusive lock, so a shell hook and a
    concurrent `aka add` can collide here; later statements wait on busy_timeout.
    """
    start = time.perf_counter()

    for attempt in range(1, CONNECT_ATTEMPTS + 1):
        conn = sqlite3.connect(db_path, check_same_thread=False)
        try:
            _configure(conn)
        except sqlite3.OperationalError as err:
            conn.close()
            if "locked" not in str(err).lower() or attempt == CONNECT_ATTEMPTS:
                raise
            logger.debug(f"Database {db_path} locked, retry {attempt}")
            time.sleep(0.05 * attempt)
            continue

        elapsed = time.perf_counter() - start
        if elapsed > SLOW_CONNECT_SECONDS:
            logger.warning(f"SQLite connection took {elapsed:.3f}s (possible lock contention)")
        return conn

    raise sqlite3.OperationalError(f"Cannot connect to {db_path}")
