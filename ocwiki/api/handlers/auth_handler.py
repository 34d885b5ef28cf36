"""
Authentication Handler

Handles admin login, logout and session lookup.

ARCHITECTURE:
=============
    Handler → AuthService → SessionStore / LoginRateLimiter
          ↘ SecurityUtils ↗

Handlers only translate between HTTP and the service: they read the
cookie, call the service, and set or clear the cookie. Service errors
propagate to the global exception handlers.
"""

from fastapi import APIRouter, Depends, Response

from ocwiki.api.dependencies.auth import ClientId, CurrentAdmin, SessionToken
from ocwiki.api.dependencies.services import get_auth_service
from ocwiki.config.settings import settings
from ocwiki.shared.schemas.auth import LoginRequest, LoginResponse, SessionResponse
from ocwiki.shared.schemas.common import ErrorResponse, MessageResponse
from ocwiki.shared.services.auth_service import AuthService


router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
)
async def login(
    credentials: LoginRequest,
    response: Response,
    client_id: ClientId,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate the admin and set the session cookie.

    Raises:
        401: If credentials are invalid
        429: If the client is locked out
    """
    result = await auth_service.login(
        username=credentials.username,
        password=credentials.password,
        client_id=client_id,
    )

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=result.token,
        max_age=result.expires_in,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return LoginResponse(expires_in=result.expires_in)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    token: SessionToken,
    auth_service: AuthService = Depends(get_auth_service),
):
    """End the current session and clear the cookie."""
    await auth_service.logout(token)
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return MessageResponse(message="Logged out")


@router.get(
    "/session",
    response_model=SessionResponse,
    responses={401: {"model": ErrorResponse}},
)
async def current_session(admin: CurrentAdmin):
    """Return the admin behind the session cookie."""
    return SessionResponse(id=admin.id, username=admin.username)
