# auth/__init__.py
"""
Authentication module.

Provides:
- User model with email/password auth
- Server-side sessions carried in an HTTP-only cookie
- Password hashing with bcrypt
"""

from auth.models import User, Session
from auth.credentials import CredentialStore
from auth.sessions import SessionManager
from auth.service import AuthService
from auth.exceptions import (
    AuthError,
    DuplicateEmailError,
    InvalidEmailError,
    InvalidPasswordError,
    InvalidCredentialsError,
    UnauthenticatedError,
)

__all__ = [
    "User",
    "Session",
    "CredentialStore",
    "SessionManager",
    "AuthService",
    "AuthError",
    "DuplicateEmailError",
    "InvalidEmailError",
    "InvalidPasswordError",
    "InvalidCredentialsError",
    "UnauthenticatedError",
]
