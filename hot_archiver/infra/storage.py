"""SQLite connection management and the hot topic index."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from threading import Lock
from typing import Dict, Iterator

from ..records import IndexedRecord

_CREATE_TABLE = "CREATE TABLE IF NOT EXISTS hot (date TEXT, title TEXT, summary TEXT)"
_CREATE_TITLE_INDEX = "CREATE INDEX IF NOT EXISTS hot_title ON hot (title)"
_SELECT_BY_TITLE = "SELECT date, title FROM hot WHERE title = ? ORDER BY rowid"
_INSERT = "INSERT INTO hot(date, title, summary) VALUES (?, ?, ?)"


class SQLiteManager:
    """Open SQLite connections and own transaction boundaries."""

    def __init__(self) -> None:
        self._connections: Dict[Path, sqlite3.Connection] = {}
        self._lock = Lock()

    def connect(self, path: Path) -> sqlite3.Connection:
        path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            if path not in self._connections:
                # Autocommit mode: BEGIN/COMMIT are issued explicitly by transaction().
                conn = sqlite3.connect(path, isolation_level=None, check_same_thread=False)
                conn.row_factory = sqlite3.Row
                self._connections[path] = conn
            return self._connections[path]

    @staticmethod
    @contextmanager
    def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
        """Run the block inside BEGIN/COMMIT, rolling back on any exception, COMMIT included."""

        conn.execute("BEGIN")
        try:
            yield conn
            conn.execute("COMMIT")
        except BaseException:
            # A failed COMMIT may leave the transaction open; SQLite may also
            # have rolled back on its own already.
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise

    def close(self, path: Path) -> None:
        with self._lock:
            conn = self._connections.pop(path, None)
        if conn is not None:
            conn.close()

    def close_all(self) -> None:
        with self._lock:
            for conn in self._connections.values():
                conn.close()
            self._connections.clear()


class HotIndex:
    """Durable store of accepted hot topics.

    Every statement runs on the connection handed in at construction, so it
    joins whatever transaction the caller has open there.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def ensure_schema(self) -> None:
        self.conn.execute(_CREATE_TABLE)
        self.conn.execute(_CREATE_TITLE_INDEX)

    def find_by_title(self, title: str) -> list[IndexedRecord]:
        cur = self.conn.execute(_SELECT_BY_TITLE, (title,))
        return [IndexedRecord(date=row["date"], title=row["title"]) for row in cur.fetchall()]

    def insert(self, date: str, title: str, summary: str) -> None:
        self.conn.execute(_INSERT, (date, title, summary))

    def count(self) -> int:
        return self.conn.execute("SELECT count(*) FROM hot").fetchone()[0]


__all__ = ["HotIndex", "SQLiteManager"]
