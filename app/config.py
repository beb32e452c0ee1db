# app/config.py
"""
Centralized configuration management with startup validation.

Reads every setting from the environment once, falls back to defaults with
a logged warning when a value is invalid, and produces a log-safe snapshot.
"""
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

SERVICE_NAME = "todo-api"
SERVICE_VERSION = "0.1.0"

DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "data" / "todo.db"
DEFAULT_SESSION_TTL_HOURS = 7 * 24
MIN_SESSION_TTL_HOURS = 1
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000

# Sensitive substrings that should never appear in logs with a value
SENSITIVE_SUBSTRINGS = ("key", "token", "secret", "password", "credential")


# =============================================================================
# Configuration Dataclass
# =============================================================================


@dataclass
class AppConfig:
    """Application configuration loaded from environment."""

    # Service info
    service_name: str = SERVICE_NAME
    service_version: str = SERVICE_VERSION
    environment: str = "development"

    # Storage
    db_path: str = str(DEFAULT_DB_PATH)

    # Sessions
    session_ttl_hours: int = DEFAULT_SESSION_TTL_HOURS
    cookie_secure: bool = False

    # Front end (OPTIONAL - API only when unset)
    static_dir: Optional[str] = None

    # Server
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    # Warnings collected during config load
    warnings: list = field(default_factory=list)

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_hours * 60 * 60


# =============================================================================
# Configuration Loading
# =============================================================================


def _parse_int_env(
    name: str, default: int, min_value: Optional[int] = None
) -> tuple[int, Optional[str]]:
    """
    Parse an integer environment variable with validation.

    Returns (value, warning_message).
    On invalid input, returns default with a warning.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default, None

    try:
        value = int(raw)
    except ValueError:
        warning = f"{name}='{raw}' is not a valid integer; using default {default}"
        return default, warning

    if min_value is not None and value < min_value:
        warning = f"{name}={value} is below minimum {min_value}; using default {default}"
        return default, warning

    return value, None


def _parse_bool_env(name: str, default: bool = False) -> bool:
    """Parse a boolean environment variable."""
    raw = os.environ.get(name, "").lower()
    if raw in ("true", "1", "yes", "on"):
        return True
    if raw in ("false", "0", "no", "off"):
        return False
    return default


def load_config() -> AppConfig:
    """
    Load and validate application configuration from environment.

    Returns:
        AppConfig instance with validated configuration.
    """
    warnings = []

    environment = os.environ.get("TODO_ENVIRONMENT", "development")
    db_path = os.environ.get("TODO_DB_PATH") or str(DEFAULT_DB_PATH)

    session_ttl_hours, ttl_warning = _parse_int_env(
        "TODO_SESSION_TTL_HOURS",
        DEFAULT_SESSION_TTL_HOURS,
        min_value=MIN_SESSION_TTL_HOURS,
    )
    if ttl_warning:
        warnings.append(ttl_warning)

    # Secure cookies by default only when serving production over HTTPS
    cookie_secure = _parse_bool_env("TODO_COOKIE_SECURE", environment == "production")

    static_dir = os.environ.get("TODO_STATIC_DIR") or None
    if static_dir and not Path(static_dir).is_dir():
        warnings.append(f"TODO_STATIC_DIR={static_dir} is not a directory; front end disabled")
        static_dir = None

    host = os.environ.get("HOST") or DEFAULT_HOST
    port, port_warning = _parse_int_env("PORT", DEFAULT_PORT, min_value=1)
    if port_warning:
        warnings.append(port_warning)

    for warning in warnings:
        logger.warning(f"[CONFIG] {warning}")

    return AppConfig(
        environment=environment,
        db_path=db_path,
        session_ttl_hours=session_ttl_hours,
        cookie_secure=cookie_secure,
        static_dir=static_dir,
        host=host,
        port=port,
        warnings=warnings,
    )


def log_config_snapshot(config: AppConfig) -> str:
    """
    Generate and log a safe configuration snapshot.

    Returns the snapshot string for testing purposes.
    """
    snapshot = (
        f"[STARTUP] service={config.service_name} "
        f"version={config.service_version} "
        f"environment={config.environment} "
        f"db_path={config.db_path} "
        f"session_ttl_hours={config.session_ttl_hours} "
        f"cookie_secure={config.cookie_secure} "
        f"static_dir={config.static_dir}"
    )
    logger.info(snapshot)
    return snapshot


def validate_config_snapshot_safety(snapshot: str) -> bool:
    """
    Validate that a config snapshot doesn't contain sensitive values.

    Returns True if safe, False if potentially unsafe.
    """
    snapshot_lower = snapshot.lower()

    for sensitive in SENSITIVE_SUBSTRINGS:
        # sensitive word followed by = and a value that's not a boolean
        pattern = rf"{sensitive}=(?!true\b|false\b)"
        if re.search(pattern, snapshot_lower):
            return False

    return True
