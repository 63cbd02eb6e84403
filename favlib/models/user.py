"""
User Model

A registered reader. Users own the books they add.

SQLAlchemy 2.0 Features Used:
- mapped_column(): Columns with full type support
- Mapped[]: Type hint wrapper for SQLAlchemy columns
- relationship(): One-to-many link to Book
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from favlib.database import Base
from favlib.models.book import utc_now

if TYPE_CHECKING:
    from favlib.models.book import Book


class User(Base):
    """
    User model representing registered users.

    Table: users

    Indexes:
    - Primary key on id (automatic)
    - username: Unique index for login lookups
    - email: Unique index for duplicate checks

    The password is only ever stored as a bcrypt hash. Response schemas
    never include hashed_password.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
        comment="Unique username used to log in"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="User's email address"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
        comment="When the user registered"
    )

    # Deleting a user is out of scope, so books are not cascaded.
    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="user",
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation."""
        return f"User(id={self.id}, username='{self.username}', email='{self.email}')"
