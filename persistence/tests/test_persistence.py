"""Tests for persistence layer."""

import sqlite3
import threading

import pytest

from persistence.db import ConstraintError, Database, StoreError


class TestDatabaseInit:
    """Test database initialization."""

    def test_init_creates_tables(self, database):
        with database.connect() as conn:
            tables = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        names = {row["name"] for row in tables}

        assert {"users", "sessions", "tasks"} <= names

    def test_init_is_idempotent(self, database):
        database.init_db()
        database.init_db()

        with database.connect() as conn:
            count = conn.execute(
                "SELECT COUNT(*) AS n FROM sqlite_master WHERE name = 'tasks'"
            ).fetchone()["n"]
        assert count == 1

    def test_connect_initializes_lazily(self, tmp_path):
        """First connect() creates the schema without an explicit init_db()."""
        db = Database(tmp_path / "nested" / "dir" / "lazy.db")

        with db.connect() as conn:
            conn.execute("SELECT * FROM users").fetchall()

        assert (tmp_path / "nested" / "dir" / "lazy.db").exists()
        db.close()

    def test_reset_drops_tables(self, database):
        database.reset()

        conn = sqlite3.connect(database.path)
        names = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        conn.close()
        assert "tasks" not in names


class TestTransactions:
    """Commit / rollback behaviour of connect()."""

    def test_commit_on_success(self, database):
        with database.connect() as conn:
            conn.execute(
                "INSERT INTO users (id, email, password_hash, created_at) VALUES (?, ?, ?, ?)",
                ("u1", "a@x.com", "hash", "2024-01-01T00:00:00+00:00"),
            )

        with database.connect() as conn:
            row = conn.execute("SELECT email FROM users WHERE id = 'u1'").fetchone()
        assert row["email"] == "a@x.com"

    def test_rollback_on_error(self, database):
        with pytest.raises(RuntimeError):
            with database.connect() as conn:
                conn.execute(
                    "INSERT INTO users (id, email, password_hash, created_at) VALUES (?, ?, ?, ?)",
                    ("u1", "a@x.com", "hash", "2024-01-01T00:00:00+00:00"),
                )
                raise RuntimeError("boom")

        with database.connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = 'u1'").fetchone()
        assert row is None

    def test_unique_violation_is_constraint_error(self, database):
        insert = "INSERT INTO users (id, email, password_hash, created_at) VALUES (?, ?, ?, ?)"
        with database.connect() as conn:
            conn.execute(insert, ("u1", "a@x.com", "hash", "2024-01-01T00:00:00+00:00"))

        with pytest.raises(ConstraintError):
            with database.connect() as conn:
                conn.execute(insert, ("u2", "a@x.com", "hash", "2024-01-01T00:00:00+00:00"))

    def test_sql_error_is_store_error(self, database):
        with pytest.raises(StoreError) as exc_info:
            with database.connect() as conn:
                conn.execute("SELECT * FROM no_such_table")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal server error"

    def test_foreign_keys_enforced(self, database):
        with pytest.raises(ConstraintError):
            with database.connect() as conn:
                conn.execute(
                    """
                    INSERT INTO tasks (id, owner_id, title, completed, created_at)
                    VALUES ('t1', 'missing-user', 'x', 0, '2024-01-01T00:00:00+00:00')
                    """
                )


class TestThreadLocalConnections:
    """Each thread gets its own connection to the same file."""

    def test_threads_see_committed_rows(self, database):
        with database.connect() as conn:
            conn.execute(
                "INSERT INTO users (id, email, password_hash, created_at) VALUES (?, ?, ?, ?)",
                ("u1", "a@x.com", "hash", "2024-01-01T00:00:00+00:00"),
            )

        seen = []

        def read():
            with database.connect() as conn:
                seen.append(conn.execute("SELECT email FROM users").fetchone()["email"])
            database.close()

        worker = threading.Thread(target=read)
        worker.start()
        worker.join()

        assert seen == ["a@x.com"]

    def test_close_all_closes_other_threads_connections(self, database):
        opened = []

        def open_and_leave():
            with database.connect() as conn:
                conn.execute("SELECT 1")
                opened.append(conn)

        worker = threading.Thread(target=open_and_leave)
        worker.start()
        worker.join()

        database.close_all()

        with pytest.raises(sqlite3.ProgrammingError):
            opened[0].execute("SELECT 1")

    def test_connect_reopens_after_close_all(self, database):
        with database.connect() as conn:
            first = conn

        database.close_all()

        with database.connect() as conn:
            assert conn is not first
            assert conn.execute("SELECT COUNT(*) AS n FROM users").fetchone()["n"] == 0
