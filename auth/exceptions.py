# auth/exceptions.py
"""
Authentication errors.

Each error carries a client-safe message and the HTTP status the API layer
should answer with. Messages never reveal whether an email is registered.
"""

from __future__ import annotations

from typing import Optional


class AuthError(Exception):
    """Base authentication error."""

    status_code = 400
    default_message = "Authentication error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateEmailError(AuthError):
    """User with this email already exists."""

    default_message = "User already exists"


class InvalidEmailError(AuthError):
    """Email is missing or obviously malformed."""

    default_message = "A valid email is required"


class InvalidPasswordError(AuthError):
    """Password doesn't meet the minimum requirements."""

    default_message = "Password must be at least 6 characters"


class InvalidCredentialsError(AuthError):
    """Wrong email or password (deliberately indistinguishable)."""

    status_code = 401
    default_message = "Invalid email or password"


class UnauthenticatedError(AuthError):
    """No session, or the session is unknown / expired / destroyed."""

    status_code = 401
    default_message = "Please login first"
