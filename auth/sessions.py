# auth/sessions.py
"""
Session manager.

Owns the sessions table: issues opaque session IDs, resolves them back to a
user ID and destroys them. A session is either active or gone; there is no
way back from destroyed or expired. Nothing is cached between calls, so a
destroyed session stops resolving on the very next request.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from auth.models import DEFAULT_SESSION_TTL, Session, utcnow
from persistence.db import Database

_logger = logging.getLogger(__name__)

# Anything longer than this can't be one of ours
MAX_SESSION_ID_LENGTH = 128


def _is_well_formed(session_id) -> bool:
    return (
        isinstance(session_id, str)
        and 0 < len(session_id) <= MAX_SESSION_ID_LENGTH
    )


def _short(session_id: str) -> str:
    """Prefix of a session ID that is safe to log."""
    return f"{session_id[:6]}..."


class SessionManager:
    """Server-side session table."""

    def __init__(self, db: Database, ttl: timedelta = DEFAULT_SESSION_TTL):
        self._db = db
        self.ttl = ttl

    def create(
        self,
        user_id: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Session:
        """
        Create a new session for a user.

        Args:
            user_id: User ID
            ip_address: Client IP (optional)
            user_agent: Client user agent (optional)

        Returns:
            Created Session object
        """
        session = Session.new(
            user_id=user_id,
            ttl=self.ttl,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        with self._db.connect() as conn:
            conn.execute(
                """
                INSERT INTO sessions (id, user_id, created_at, expires_at, ip_address, user_agent)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    session.id,
                    session.user_id,
                    session.created_at.isoformat(),
                    session.expires_at.isoformat(),
                    session.ip_address,
                    session.user_agent,
                ),
            )

        _logger.debug(f"Created session {_short(session.id)} for user: {user_id}")
        return session

    def get(self, session_id: Optional[str], purge_expired: bool = True) -> Optional[Session]:
        """
        Get session by ID.

        Args:
            session_id: Session ID from the cookie
            purge_expired: Delete the row if it turns out to be expired

        Returns:
            Session if found and not expired, None otherwise
        """
        if not _is_well_formed(session_id):
            return None

        with self._db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM sessions WHERE id = ?",
                (session_id,),
            ).fetchone()

        if not row:
            return None

        session = Session(
            id=row["id"],
            user_id=row["user_id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            expires_at=datetime.fromisoformat(row["expires_at"]),
            ip_address=row["ip_address"],
            user_agent=row["user_agent"],
        )

        if not session.is_valid:
            if purge_expired:
                self.destroy(session_id)
            return None

        return session

    def resolve(self, session_id: Optional[str], purge_expired: bool = True) -> Optional[str]:
        """User ID bound to a live session, or None."""
        session = self.get(session_id, purge_expired=purge_expired)
        return session.user_id if session else None

    def destroy(self, session_id: Optional[str]) -> bool:
        """
        Invalidate (delete) a session. Idempotent.

        Returns:
            True if a row was deleted, False if there was nothing to delete
        """
        if not _is_well_formed(session_id):
            return False

        with self._db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM sessions WHERE id = ?",
                (session_id,),
            )
            deleted = cursor.rowcount > 0

        if deleted:
            _logger.debug(f"Destroyed session {_short(session_id)}")
        return deleted

    def destroy_all_for_user(self, user_id: str) -> int:
        """Invalidate all sessions for a user. Returns how many were removed."""
        with self._db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM sessions WHERE user_id = ?",
                (user_id,),
            )
            return cursor.rowcount

    def cleanup_expired(self) -> int:
        """
        Remove expired sessions.

        Returns:
            Number of sessions cleaned up
        """
        with self._db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM sessions WHERE expires_at <= ?",
                (utcnow().isoformat(),),
            )
            count = cursor.rowcount

        if count > 0:
            _logger.info(f"Cleaned up {count} expired sessions")

        return count
