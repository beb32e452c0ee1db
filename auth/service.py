# auth/service.py
"""
Authentication service.

Handles:
- Signup (policy check, user creation, auto-login)
- Login / logout
- Session checks for the API layer

The service is the only writer of session state. It knows nothing about
HTTP; session IDs come in and go out as plain strings.
"""

from __future__ import annotations

import logging
from typing import Optional

from auth.credentials import CredentialStore
from auth.exceptions import (
    InvalidCredentialsError,
    InvalidPasswordError,
    UnauthenticatedError,
)
from auth.models import Session
from auth.password import check_password_policy, hash_password, verify_password
from auth.sessions import SessionManager

_logger = logging.getLogger(__name__)


class AuthService:
    """Signup / login / logout on top of the credential store and session table."""

    def __init__(self, credentials: CredentialStore, sessions: SessionManager):
        self.credentials = credentials
        self.sessions = sessions
        self._dummy_hash: Optional[str] = None

    def signup(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        replaces_session_id: Optional[str] = None,
    ) -> Session:
        """
        Register a user and log them straight in.

        Raises:
            InvalidPasswordError: If password doesn't meet the policy
            InvalidEmailError: If email is empty/malformed
            DuplicateEmailError: If email already registered (any case)

        The session in replaces_session_id, if any, is destroyed once the new
        one is issued.
        """
        ok, error_msg = check_password_policy(password)
        if not ok:
            raise InvalidPasswordError(error_msg)

        user = self.credentials.create_user(email, password)
        return self._issue_session(user.id, ip_address, user_agent, replaces_session_id)

    def login(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        replaces_session_id: Optional[str] = None,
    ) -> Session:
        """
        Authenticate with email and password and open a session.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password; the two
                cases are indistinguishable to the caller.

        The session in replaces_session_id, if any, is destroyed on success.
        """
        user = self.credentials.find_by_email(email)

        # Exactly one bcrypt check per attempt, known email or not
        password_hash = user.password_hash if user else self._get_dummy_hash()
        matches = verify_password(password, password_hash)

        if not user:
            _logger.warning("Login attempt for non-existent user")
            raise InvalidCredentialsError()

        if not matches:
            _logger.warning(f"Invalid password for user: {user.id}")
            raise InvalidCredentialsError()

        _logger.info(f"User authenticated: {user.id}")
        return self._issue_session(user.id, ip_address, user_agent, replaces_session_id)

    def logout(self, session_id: Optional[str]) -> None:
        """Destroy the session. Always succeeds, even for dead sessions."""
        self.sessions.destroy(session_id)

    def check_session(self, session_id: Optional[str]) -> bool:
        """Whether the session currently resolves to a user. Read only."""
        return self.sessions.resolve(session_id, purge_expired=False) is not None

    def require_user_id(self, session_id: Optional[str]) -> str:
        """
        Resolve a session to its user ID.

        Raises:
            UnauthenticatedError: If the session is missing, unknown or expired
        """
        user_id = self.sessions.resolve(session_id)
        if user_id is None:
            raise UnauthenticatedError()
        return user_id

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = hash_password("not-a-real-password")
        return self._dummy_hash

    def _issue_session(
        self,
        user_id: str,
        ip_address: Optional[str],
        user_agent: Optional[str],
        replaces_session_id: Optional[str],
    ) -> Session:
        """Retire the presented session and expired rows, then open a new one."""
        self.sessions.destroy(replaces_session_id)
        self.sessions.cleanup_expired()
        return self.sessions.create(user_id, ip_address=ip_address, user_agent=user_agent)
