"""Scoped alias store.

Each alias name maps to an ordered list of definitions, at most one per scope.
Every operation runs in a single transaction of the key-value collaborator and
only takes effect once that transaction commits.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import AliasNotFoundError, ScopeNotFoundError
from .lib import codec, paths
from .lib.store import Database, Transaction
from .models import Definition, Scope

logger = logging.getLogger(__name__)


def _load(txn: Transaction, name: str) -> dict[Scope, Definition] | None:
    raw = txn.get(name)
    if raw is None:
        return None
    return {d.scope: d for d in codec.decode_or_legacy(raw)}


def _save(txn: Transaction, name: str, record: dict[Scope, Definition]) -> None:
    if record:
        txn.insert(name, codec.encode(list(record.values())))
    else:
        txn.remove(name)


class Store:
    """Alias records backed by a transactional key-value table."""

    def __init__(self, db: Database):
        self.db = db

    @classmethod
    def open(cls, path: Path | None = None) -> Store:
        return cls(Database.open(path or paths.database()))

    def close(self) -> None:
        self.db.close()

    def __enter__(self) -> Store:
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def add(self, name: str, command: str, scope: Scope) -> None:
        """Add a definition, replacing any existing one with the same scope."""
        with self.db.begin_write() as txn:
            record = _load(txn, name) or {}
            record.pop(scope, None)
            record[scope] = Definition(command, scope)
            _save(txn, name, record)
            txn.commit()
        logger.debug(f"Added '{name}' in scope {scope}")

    def remove(self, name: str) -> list[Definition]:
        """Delete the whole record for `name` and return its definitions."""
        with self.db.begin_write() as txn:
            raw = txn.remove(name)
            if raw is None:
                raise AliasNotFoundError(name)
            txn.commit()
        logger.debug(f"Removed '{name}'")
        return codec.decode_or_legacy(raw)

    def remove_scope(self, name: str, scope: Scope) -> Definition:
        """Remove the one definition of `name` in `scope`.

        Deletes the record when no definitions remain.
        """
        with self.db.begin_write() as txn:
            record = _load(txn, name)
            if record is None:
                raise AliasNotFoundError(name)
            removed = record.pop(scope, None)
            if removed is None:
                raise ScopeNotFoundError(name, str(scope))
            _save(txn, name, record)
            txn.commit()
        logger.debug(f"Removed '{name}' from scope {scope}")
        return removed

    def remove_all(self) -> int:
        """Delete every record; return how many existed."""
        with self.db.begin_write() as txn:
            names = [name for name, _ in txn.iter()]
            for name in names:
                txn.remove(name)
            txn.commit()
        logger.debug(f"Removed {len(names)} aliases")
        return len(names)

    def remove_all_in_scope(self, scope: Scope) -> dict[str, list[Definition]]:
        """Remove every definition whose scope equals `scope`.

        Equality only: removing Recursive(/a) leaves Recursive(/a/b) alone.
        Returns the removed definitions keyed by alias name.
        """
        removed: dict[str, list[Definition]] = {}
        with self.db.begin_write() as txn:
            for name, raw in list(txn.iter()):
                record = {d.scope: d for d in codec.decode_or_legacy(raw)}
                match = record.pop(scope, None)
                if match is None:
                    continue
                removed[name] = [match]
                _save(txn, name, record)
            txn.commit()
        logger.debug(f"Removed {len(removed)} aliases from scope {scope}")
        return removed

    def get(self, name: str) -> list[Definition] | None:
        with self.db.begin_read() as txn:
            record = _load(txn, name)
        return list(record.values()) if record is not None else None

    def list(self) -> dict[str, list[Definition]]:
        """Snapshot of every record, ordered by alias name."""
        with self.db.begin_read() as txn:
            return {name: codec.decode_or_legacy(raw) for name, raw in txn.iter()}
