"""
FastAPI Dependencies Module

Reusable dependencies injected into route handlers, including the
session layer that turns the "token" cookie into a user id.

Session resolution per request:
- No cookie: the request is anonymous (user id None)
- Cookie present: the token is verified; a bad or expired token
  rejects the request with 401 before the handler runs
- Verified: the user id is also stored on request.state.user_id,
  where the error handlers pick it up for their log lines

Nothing is cached between requests; every request verifies its own
token.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from favlib.config import get_settings
from favlib.database import get_db
from favlib.exceptions import AuthError
from favlib.services.image_host import ImageHost, get_image_host
from favlib.services.security import verify_session_token

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
DbSession = Annotated[Session, Depends(get_db)]
ImageHostDep = Annotated[ImageHost, Depends(get_image_host)]


# =============================================================================
# Session Dependencies
# =============================================================================
def get_session_token(request: Request) -> str | None:
    """Read the session token from its cookie, if any."""
    return request.cookies.get(settings.token_cookie_name) or None


def get_optional_user_id(
    request: Request,
    token: Annotated[str | None, Depends(get_session_token)],
) -> int | None:
    """
    Resolve the caller's user id, or None for anonymous requests.

    Raises:
        AuthError: 401 if a token was sent but does not verify
    """
    if token is None:
        return None

    user_id = verify_session_token(token)
    request.state.user_id = user_id
    return user_id


def get_current_user_id(
    user_id: Annotated[int | None, Depends(get_optional_user_id)],
) -> int:
    """
    Require an authenticated caller.

    Raises:
        AuthError: 401 if the request carries no session token
    """
    if user_id is None:
        raise AuthError("No token provided.")
    return user_id


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
