"""
Authentication Router

Endpoints:
- POST /api/signup: Create an account and start a session
- POST /api/login: Start a session with username and password
- GET /api/fetch-user: Return the user behind the session cookie
- POST /api/logout: Drop the session cookie

Sessions travel in an HTTP-only, SameSite=Strict cookie named "token",
marked Secure in production and expiring with the token (7 days by
default). Handlers only move data between the request and the auth
service; errors are rendered by the handlers registered in main.py.
"""

import logging

from fastapi import APIRouter, Request, Response

from favlib.config import get_settings
from favlib.dependencies import CurrentUserId, DbSession
from favlib.schemas import (
    AuthResponse,
    CurrentUserResponse,
    MessageResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from favlib.services import auth as auth_service
from favlib.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    tags=["Authentication"],
    responses={
        400: {"model": MessageResponse, "description": "Bad request"},
        401: {"model": MessageResponse, "description": "Unauthorized"},
    },
)


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.token_cookie_name,
        value=token,
        httponly=True,  # Not accessible via JavaScript
        secure=settings.is_production,  # HTTPS only in production
        samesite="strict",
        max_age=settings.token_max_age,
    )


@router.post(
    "/signup",
    response_model=AuthResponse,
    summary="Register a new user",
)
@limiter.limit(settings.rate_limit_auth)
def signup(
    request: Request,
    response: Response,
    user_data: UserCreate,
    db: DbSession,
) -> AuthResponse:
    """
    Register with username, email and password.

    The new user is signed in immediately: the session cookie is set on
    the response.
    """
    result = auth_service.register(
        db,
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
    )
    set_session_cookie(response, result.token)

    return AuthResponse(
        user=UserResponse.model_validate(result.user),
        message="User created successfully.",
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with username and password",
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    response: Response,
    credentials: UserLogin,
    db: DbSession,
) -> AuthResponse:
    result = auth_service.login(
        db,
        username=credentials.username,
        password=credentials.password,
    )
    set_session_cookie(response, result.token)

    return AuthResponse(
        user=UserResponse.model_validate(result.user),
        message="Logged in successfully.",
    )


@router.get(
    "/fetch-user",
    response_model=CurrentUserResponse,
    summary="Get current user",
)
def fetch_user(user_id: CurrentUserId, db: DbSession) -> CurrentUserResponse:
    """
    Return the signed-in user, restoring a session from its cookie.

    401 without a cookie or with an invalid one; 400 if the user in the
    token no longer exists.
    """
    user = auth_service.resolve_user(db, user_id)
    return CurrentUserResponse(user=UserResponse.model_validate(user))


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout user",
)
def logout(response: Response) -> MessageResponse:
    """
    Clear the session cookie.

    The token itself stays valid until it expires; it is simply no
    longer sent by the browser.
    """
    response.delete_cookie(
        key=settings.token_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    logger.info("Session cookie cleared")

    return MessageResponse(message="Logged out successfully.")
