# auth/middleware.py
"""
FastAPI session helpers.

Provides:
- Session cookie handling
- Dependencies that resolve the session cookie to a user ID per request

The services live on app.state (see app.main.create_app); nothing here
caches login state beyond the current request.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request, Response

from auth.service import AuthService

# Cookie configuration
SESSION_COOKIE_NAME = "todo_session"


def get_session_id(request: Request) -> Optional[str]:
    """Extract session ID from request cookies."""
    return request.cookies.get(SESSION_COOKIE_NAME)


def set_session_cookie(
    response: Response,
    session_id: str,
    max_age: int,
    secure: bool = False,
) -> None:
    """Set the HTTP-only session cookie on a response."""
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_id,
        max_age=max_age,
        httponly=True,  # Prevent JS access
        samesite="lax",  # CSRF protection
        secure=secure,
    )


def clear_session_cookie(response: Response) -> None:
    """Clear session cookie from response."""
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=True,
        samesite="lax",
    )


def get_auth_service(request: Request) -> AuthService:
    """FastAPI dependency: the application's AuthService."""
    return request.app.state.auth_service


def get_required_user_id(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> str:
    """
    FastAPI dependency: user ID of the logged-in caller.

    Raises UnauthenticatedError (401) if not logged in.
    """
    return auth_service.require_user_id(get_session_id(request))


def client_metadata(request: Request) -> tuple[Optional[str], Optional[str]]:
    """(ip_address, user_agent) for session audit columns."""
    ip_address = request.client.host if request.client else None
    return ip_address, request.headers.get("user-agent")
