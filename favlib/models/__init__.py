"""
SQLAlchemy Models Package

Model Relationships:
- User -> Book: One-to-Many (a user owns the books they added)

Importing every model here registers it with Base.metadata, which
Alembic and the test fixtures rely on.
"""

from favlib.models.book import Book
from favlib.models.user import User

__all__ = [
    "Book",
    "User",
]
