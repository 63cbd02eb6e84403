"""
Authentication Service

Registration, login and user resolution.

Every function takes the request's database session and raises a
favlib.exceptions error on failure. Successful signup and login return
an AuthResult: the user plus a fresh session token, which the router
hands to the client as the HTTP-only "token" cookie.

The token is stateless, so there is no way to revoke it before it
expires. A server-side denylist would slot in behind
verify_session_token without changing any caller.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from favlib.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from favlib.models import User
from favlib.services.security import (
    create_session_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    """A signed-in user and the session token issued for them."""

    user: User
    token: str


def register(
    db: Session,
    username: str | None,
    email: str | None,
    password: str | None,
) -> AuthResult:
    """
    Create a user account and sign it in.

    Checks, in order:
    1. All three fields are present
    2. The email is not registered yet
    3. The username is not taken

    Both uniqueness checks run before anything is written.

    Raises:
        ValidationError: If a field is missing or empty
        ConflictError: If the email or username already exists
    """
    if not username or not email or not password:
        raise ValidationError("All fields are required.")

    stmt = select(User.id).where(User.email == email)
    if db.execute(stmt).scalar_one_or_none() is not None:
        raise ConflictError("User already exists.")

    stmt = select(User.id).where(User.username == username)
    if db.execute(stmt).scalar_one_or_none() is not None:
        raise ConflictError("Username is taken, try another name.")

    user = User(
        username=username,
        email=email,
        hashed_password=hash_password(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # A concurrent signup claimed the email or username first.
        db.rollback()
        raise ConflictError("User already exists.") from e
    db.refresh(user)

    logger.info(f"New user registered: {user.username}")

    return AuthResult(user=user, token=create_session_token(user.id))


def login(db: Session, username: str | None, password: str | None) -> AuthResult:
    """
    Authenticate with username and password.

    An unknown username and a wrong password produce the same error so
    the response does not reveal which one was wrong.

    Raises:
        InvalidCredentialsError: If the credentials do not match a user
    """
    if not username or not password:
        raise InvalidCredentialsError()

    stmt = select(User).where(User.username == username)
    user = db.execute(stmt).scalar_one_or_none()

    if user is None:
        logger.warning(f"Login failed: unknown username {username}")
        raise InvalidCredentialsError()

    if not verify_password(password, user.hashed_password):
        logger.warning(f"Login failed: incorrect password for {username}")
        raise InvalidCredentialsError()

    logger.info(f"User logged in: {user.username}")

    return AuthResult(user=user, token=create_session_token(user.id))


def resolve_user(db: Session, user_id: int) -> User:
    """
    Load the user a verified session token points at.

    Raises:
        NotFoundError: If the user no longer exists
    """
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user
