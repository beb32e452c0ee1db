# auth/password.py
"""
Secure password hashing using bcrypt.

Bcrypt is designed for password hashing with:
- Automatic salt generation
- Configurable work factor (cost)
- Constant-time verification via checkpw
"""

from __future__ import annotations

import bcrypt
import logging
import os

_logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12
MIN_BCRYPT_ROUNDS = 4

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72


def _rounds_from_env() -> int:
    raw = os.environ.get("TODO_BCRYPT_ROUNDS")
    if raw is None:
        return DEFAULT_BCRYPT_ROUNDS
    try:
        rounds = int(raw)
    except ValueError:
        _logger.warning(f"TODO_BCRYPT_ROUNDS='{raw}' is not a valid integer; using {DEFAULT_BCRYPT_ROUNDS}")
        return DEFAULT_BCRYPT_ROUNDS
    return max(rounds, MIN_BCRYPT_ROUNDS)


# Work factor (cost) - higher = slower but more secure
BCRYPT_ROUNDS = _rounds_from_env()


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash string (includes salt)
    """
    if not password:
        raise ValueError("Password cannot be empty")

    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password_bytes, salt)

    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        password: Plain text password to verify
        password_hash: Stored bcrypt hash

    Returns:
        True if password matches, False otherwise

    An empty password still goes through bcrypt, so a rejected login costs
    the same whatever the candidate was.
    """
    if not password_hash:
        return False

    try:
        password_bytes = (password or "").encode("utf-8")
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(password_bytes, hash_bytes)
    except ValueError as e:
        _logger.warning(f"Password verification error: {e}")
        return False


def check_password_policy(password: str) -> tuple[bool, str]:
    """
    Check if a password is acceptable for a new account.

    Requirements:
    - At least 6 characters
    - At most 72 bytes once UTF-8 encoded

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password:
        return False, "Password cannot be empty"

    if len(password) < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters"

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False, f"Password must be at most {MAX_PASSWORD_BYTES} bytes"

    return True, ""
