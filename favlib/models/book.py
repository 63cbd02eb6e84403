"""
Book Model

A book shared to the common list: cover image, bibliographic fields,
the owner's review, and a reference to the user who added it.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from favlib.database import Base

if TYPE_CHECKING:
    from favlib.models.user import User


def utc_now() -> datetime:
    # Python-side default keeps microseconds, so books added within the
    # same second still sort newest first.
    return datetime.now(UTC)


class Book(Base):
    """
    Book model.

    Table: books

    Fields:
    - image: Canonical URL of the hosted cover image (never the raw upload)
    - title, subtitle, author: Bibliographic fields
    - link: External link (store page, publisher, ...)
    - review: The owner's review text
    - user_id: Owner, resolved from the caller's session at creation

    Indexes:
    - created_at: Listing is ordered newest first
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    image: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Hosted cover image URL"
    )

    title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Book title"
    )

    subtitle: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Book subtitle"
    )

    author: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Author name as entered"
    )

    link: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="External link for the book"
    )

    review: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Owner's review"
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        index=True,
        nullable=False,
        comment="User who added the book"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        index=True,
        nullable=False,
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="books",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', user_id={self.user_id})"
