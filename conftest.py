"""Configure pytest for the to-do API."""
import os

import pytest

# =============================================================================
# Test Environment Configuration
# =============================================================================
# Set environment for tests BEFORE any project imports
# Cheap bcrypt keeps the suite fast; hashes are still real bcrypt hashes
os.environ.setdefault("TODO_BCRYPT_ROUNDS", "4")
os.environ.setdefault("TODO_ENVIRONMENT", "test")


@pytest.fixture
def database(tmp_path):
    """Fresh SQLite file per test."""
    from persistence.db import Database

    db = Database(tmp_path / "todo-test.db")
    db.init_db()
    yield db
    db.close()


@pytest.fixture
def session_manager(database):
    from auth.sessions import SessionManager

    return SessionManager(database)


@pytest.fixture
def credential_store(database):
    from auth.credentials import CredentialStore

    return CredentialStore(database)


@pytest.fixture
def auth_service(credential_store, session_manager):
    from auth.service import AuthService

    return AuthService(credential_store, session_manager)


@pytest.fixture
def task_service(database):
    from tasks.service import TaskService
    from tasks.store import TaskStore

    return TaskService(TaskStore(database))


@pytest.fixture
def app_config(tmp_path):
    from app.config import AppConfig

    return AppConfig(environment="test", db_path=str(tmp_path / "todo-api.db"))


@pytest.fixture
def client(app_config):
    """TestClient with lifespan events running."""
    from fastapi.testclient import TestClient

    from app.main import create_app

    with TestClient(create_app(app_config)) as test_client:
        yield test_client
