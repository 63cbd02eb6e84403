"""
Book Service

Adds books to the shared list and lists them.

Adding a book is a two-step saga: the cover goes to the image host
first, then the book row is written. The two steps are not
transactional. If the write fails after a successful upload, the hosted
image is left behind and a warning with its URL is logged for
out-of-band cleanup; nothing is rolled back on the image host.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from favlib.exceptions import InternalError, ValidationError
from favlib.models import Book
from favlib.schemas import BookCreate
from favlib.services.auth import resolve_user
from favlib.services.image_host import ImageHost

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("image", "title", "author", "link", "review")


def add_book(
    db: Session,
    image_host: ImageHost,
    book_data: BookCreate,
    user_id: int,
) -> Book:
    """
    Upload the cover and store a new book owned by user_id.

    Steps:
    1. Check the required fields, before paying for an upload
    2. Resolve the owner
    3. Upload the cover image
    4. Persist the book with the hosted URL

    Args:
        db: Database session
        image_host: Where covers are uploaded
        book_data: Fields from the request
        user_id: Verified id from the caller's session

    Raises:
        ValidationError: If a required field is missing
        NotFoundError: If the session's user no longer exists
        UploadError: If the upload fails (nothing is persisted)
        InternalError: If the book cannot be written
    """
    missing = [field for field in REQUIRED_FIELDS if not getattr(book_data, field)]
    if missing:
        raise ValidationError(f"All fields are required. Missing: {', '.join(missing)}.")

    owner = resolve_user(db, user_id)

    image_url = image_host.upload(book_data.image)

    book = Book(
        image=image_url,
        title=book_data.title,
        subtitle=book_data.subtitle or None,
        author=book_data.author,
        link=book_data.link,
        review=book_data.review,
        user=owner,
    )

    try:
        db.add(book)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(
            f"Orphaned hosted image {image_url}: book '{book_data.title}' "
            f"for user {user_id} was not saved ({e})"
        )
        raise InternalError("Could not save the book.") from e

    db.refresh(book)
    logger.info(f"Book added: '{book.title}' by user {owner.username}")
    return book


def list_books(db: Session) -> list[Book]:
    """
    Return every book, newest first, with owners loaded.

    No pagination: the whole table is read on each call.
    """
    stmt = (
        select(Book)
        .options(joinedload(Book.user))
        .order_by(Book.created_at.desc(), Book.id.desc())
    )
    return list(db.execute(stmt).scalars().all())
