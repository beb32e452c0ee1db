# persistence/db.py
"""
SQLite database handle and schema management.

A single Database instance is created by the application factory and handed
to every store that needs it. Connections are thread-local so that sync
route handlers running in the worker thread pool never share a cursor.

Note: ":memory:" gives each thread its own empty database. Use a file path
whenever more than one thread touches the handle (e.g. the API tests).
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

_logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"


class StoreError(Exception):
    """Underlying persistence failure. Never shown to clients verbatim."""

    status_code = 500
    message = "Internal server error"


class ConstraintError(StoreError):
    """A UNIQUE / FOREIGN KEY / NOT NULL constraint was violated."""

    pass


_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS sessions (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        created_at TEXT NOT NULL,
        expires_at TEXT NOT NULL,
        ip_address TEXT,
        user_agent TEXT
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_sessions_user
    ON sessions(user_id)
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_sessions_expires
    ON sessions(expires_at)
    """,
    """
    CREATE TABLE IF NOT EXISTS tasks (
        id TEXT PRIMARY KEY,
        owner_id TEXT NOT NULL REFERENCES users(id),
        title TEXT NOT NULL,
        completed INTEGER NOT NULL DEFAULT 0,
        due_date TEXT,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_tasks_owner_created
    ON tasks(owner_id, created_at DESC)
    """,
)

_TABLES = ("tasks", "sessions", "users")


class Database:
    """
    Handle on one SQLite database file.

    Usage:
        db = Database("/var/lib/todo/todo.db")
        with db.connect() as conn:
            conn.execute("SELECT ...")
    """

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        self._local = threading.local()
        self._init_lock = threading.Lock()
        self._initialized = False
        # Every open connection, whichever thread opened it
        self._connections: set[sqlite3.Connection] = set()
        self._connections_lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        """Get this thread's connection, opening it on first use."""
        conn = getattr(self._local, "connection", None)
        if conn is not None and conn not in self._connections:
            # Closed by close_all() from another thread
            conn = None

        if conn is None:
            if self.path != MEMORY_PATH:
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)

            conn = sqlite3.connect(self.path, timeout=30.0, check_same_thread=False)
            conn.execute("PRAGMA foreign_keys = ON")
            conn.row_factory = sqlite3.Row
            self._local.connection = conn
            with self._connections_lock:
                self._connections.add(conn)

        return conn

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """
        Transaction scope: commits on success, rolls back on any error.

        sqlite3 errors are re-raised as StoreError (ConstraintError for
        integrity violations) so callers never depend on the driver.
        """
        if not self._initialized:
            self.init_db()

        conn = self._get_connection()
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise ConstraintError(str(e)) from e
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(str(e)) from e
        except Exception:
            conn.rollback()
            raise

    def init_db(self) -> None:
        """
        Create tables if they don't exist.

        Safe to call multiple times (idempotent).
        """
        with self._init_lock:
            if self._initialized:
                return

            conn = self._get_connection()
            try:
                for statement in _SCHEMA:
                    conn.execute(statement)
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise StoreError(str(e)) from e

            _logger.info(f"Database initialized at {self.path}")
            self._initialized = True

    def reset(self) -> None:
        """Drop all tables (for testing)."""
        with self._init_lock:
            conn = self._get_connection()
            for table in _TABLES:
                conn.execute(f"DROP TABLE IF EXISTS {table}")
            conn.commit()
            self._initialized = False

    def close(self) -> None:
        """Close this thread's connection."""
        conn = getattr(self._local, "connection", None)
        if conn is not None:
            with self._connections_lock:
                self._connections.discard(conn)
            conn.close()
            self._local.connection = None

    def close_all(self) -> None:
        """Close every connection opened through this handle, in any thread."""
        with self._connections_lock:
            connections = list(self._connections)
            self._connections.clear()

        for conn in connections:
            conn.close()
        self._local.connection = None
        _logger.info(f"Closed {len(connections)} database connection(s)")
