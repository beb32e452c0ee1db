# auth/credentials.py
"""
Credential store.

The only component that reads or writes the users table. Passwords are
hashed with bcrypt before they are persisted and are verified with
bcrypt.checkpw, never by string comparison.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from auth.exceptions import DuplicateEmailError, InvalidEmailError
from auth.models import User, normalize_email
from auth.password import hash_password, verify_password
from persistence.db import ConstraintError, Database

_logger = logging.getLogger(__name__)


class CredentialStore:
    """Persists user identities in the users table."""

    def __init__(self, db: Database):
        self._db = db

    def create_user(self, email: str, password: str) -> User:
        """
        Create a new user account.

        Args:
            email: User's email address (any case)
            password: Plain text password, already checked against policy

        Returns:
            Created User object

        Raises:
            InvalidEmailError: If the email is empty or has no "@"
            DuplicateEmailError: If the email is already registered
        """
        email = normalize_email(email)
        if not email or "@" not in email:
            raise InvalidEmailError()

        if self.find_by_email(email):
            raise DuplicateEmailError()

        user = User.new(email=email, password_hash=hash_password(password))

        try:
            with self._db.connect() as conn:
                conn.execute(
                    """
                    INSERT INTO users (id, email, password_hash, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (user.id, user.email, user.password_hash, user.created_at.isoformat()),
                )
        except ConstraintError as e:
            # Lost a race with a concurrent signup for the same email
            raise DuplicateEmailError() from e

        _logger.info(f"Created user: {user.id}")
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)."""
        email = normalize_email(email)
        if not email:
            return None

        with self._db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE email = ?",
                (email,),
            ).fetchone()

        return _row_to_user(row) if row else None

    def find_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        with self._db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()

        return _row_to_user(row) if row else None

    def verify_password(self, user: User, candidate_password: str) -> bool:
        """Check a candidate password against the user's stored hash."""
        return verify_password(candidate_password, user.password_hash)


def _row_to_user(row) -> User:
    """Convert a database row to a User object."""
    return User(
        id=row["id"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )
