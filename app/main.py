"""To-do API - FastAPI application entrypoint."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.config import AppConfig, load_config, log_config_snapshot
from app.errors import register_error_handlers
from app.middleware import RequestIdMiddleware, SecurityHeadersMiddleware
from app.routers import auth as auth_routes
from app.routers import tasks as task_routes
from auth.credentials import CredentialStore
from auth.service import AuthService
from auth.sessions import SessionManager
from persistence.db import Database
from tasks.service import TaskService
from tasks.store import TaskStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema and sweep stale sessions on startup."""
    app.state.database.init_db()
    app.state.auth_service.sessions.cleanup_expired()
    logger.info(f"Started {app.state.config.service_name} ({app.state.config.environment})")
    yield
    app.state.database.close_all()


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Configuration to use; loaded from the environment if omitted

    Returns:
        Configured FastAPI instance
    """
    if config is None:
        config = load_config()
    log_config_snapshot(config)

    database = Database(config.db_path)
    sessions = SessionManager(database, ttl=timedelta(hours=config.session_ttl_hours))

    app = FastAPI(
        title="To-do API",
        description="Session-authenticated personal task lists",
        version=config.service_version,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.database = database
    app.state.started_at = datetime.now(timezone.utc)
    app.state.auth_service = AuthService(CredentialStore(database), sessions)
    app.state.task_service = TaskService(TaskStore(database))

    # Added in reverse execution order: request ID wraps everything
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_error_handlers(app)

    app.include_router(auth_routes.router)
    app.include_router(task_routes.router)

    @app.get("/health")
    def health():
        """Health check with service info."""
        return {
            "status": "healthy",
            "service": config.service_name,
            "version": config.service_version,
            "environment": config.environment,
            "started_at": app.state.started_at.isoformat(),
        }

    # Front end last so it never shadows /api or /health
    if config.static_dir:
        app.mount(
            "/",
            StaticFiles(directory=str(Path(config.static_dir)), html=True),
            name="static",
        )

    return app


# Application instance for uvicorn
app = create_app()
