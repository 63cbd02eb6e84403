"""
Pydantic Schemas Package

Schemas define the JSON shapes the API accepts and returns. They are
kept separate from the SQLAlchemy models so the password hash and
internal columns never leak into responses.
"""

from favlib.schemas.book import (
    BookCreate,
    BookCreatedResponse,
    BookListResponse,
    BookOwner,
    BookResponse,
)
from favlib.schemas.user import (
    AuthResponse,
    CurrentUserResponse,
    MessageResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)

__all__ = [
    "AuthResponse",
    "BookCreate",
    "BookCreatedResponse",
    "BookListResponse",
    "BookOwner",
    "BookResponse",
    "CurrentUserResponse",
    "MessageResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
]
