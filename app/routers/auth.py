"""
Authentication API endpoints.

Session is carried in an HTTP-only cookie; response bodies never contain
the session ID.
"""

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel

from auth.middleware import (
    clear_session_cookie,
    client_metadata,
    get_auth_service,
    get_session_id,
    set_session_cookie,
)
from auth.service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


# =============================================================================
# Request Schemas
# =============================================================================

class CredentialsRequest(BaseModel):
    email: str
    password: str


# =============================================================================
# Routes
# =============================================================================

@router.post("/signup")
def signup(
    body: CredentialsRequest,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new account and log it in."""
    ip_address, user_agent = client_metadata(request)
    session = auth_service.signup(
        body.email,
        body.password,
        ip_address=ip_address,
        user_agent=user_agent,
        replaces_session_id=get_session_id(request),
    )
    _issue_cookie(request, response, session.id)
    return {"success": True}


@router.post("/login")
def login(
    body: CredentialsRequest,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Login with email/password."""
    ip_address, user_agent = client_metadata(request)
    session = auth_service.login(
        body.email,
        body.password,
        ip_address=ip_address,
        user_agent=user_agent,
        replaces_session_id=get_session_id(request),
    )
    _issue_cookie(request, response, session.id)
    return {"success": True}


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Destroy the current session. Succeeds even if there is none."""
    auth_service.logout(get_session_id(request))
    clear_session_cookie(response)
    return {"success": True}


@router.get("/check")
def check(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Whether the session cookie belongs to a live session."""
    return {"loggedIn": auth_service.check_session(get_session_id(request))}


def _issue_cookie(request: Request, response: Response, session_id: str) -> None:
    config = request.app.state.config
    set_session_cookie(
        response,
        session_id,
        max_age=config.session_ttl_seconds,
        secure=config.cookie_secure,
    )
