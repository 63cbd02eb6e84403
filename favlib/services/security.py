"""
Security Service

Password hashing and session token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib), 10 rounds
2. Stateless session tokens: HS256 JWTs carrying the user id and expiry
3. Constant-time password verification

Tokens are not stored server-side. A token is valid exactly when its
signature checks out and its expiry has not passed, so logging out only
discards the client's copy.

Usage:
    from favlib.services.security import hash_password, verify_password

    hashed = hash_password("pw123")
    verify_password("pw123", hashed)  # True
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from favlib.config import get_settings
from favlib.exceptions import AuthError

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
BCRYPT_ROUNDS = 10

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt with a random salt.

    Example:
        >>> hashed = hash_password("pw123")
        >>> hashed.startswith("$2b$10$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a stored bcrypt hash.

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------------------------------------------------
# Session Token Configuration
# -------------------------------------------------------------------------
ALGORITHM = "HS256"


def create_session_token(
    user_id: int,
    issued_at: datetime | None = None,
) -> str:
    """
    Create a signed session token for a user.

    Args:
        user_id: Id of the authenticated user
        issued_at: Issue time; defaults to now. The token expires
            settings.token_expire_days after it.

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_session_token(42)
        >>> token.count(".") == 2  # JWT format: header.payload.signature
        True
    """
    issued_at = issued_at or datetime.now(UTC)
    expire = issued_at + timedelta(days=settings.token_expire_days)

    to_encode = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": expire,
    }

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=ALGORITHM,
    )


def verify_session_token(token: str | None) -> int:
    """
    Verify a session token and return the embedded user id.

    Raises:
        AuthError: If the token is missing, malformed, signed with
            another key, or expired
    """
    if not token:
        raise AuthError("No token provided.")

    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
        )
    except JWTError as e:
        logger.warning(f"Session token rejected: {e}")
        raise AuthError("Invalid token") from e

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Session token rejected: missing or malformed subject")
        raise AuthError("Invalid token") from e
