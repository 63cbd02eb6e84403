"""
Books Router

Endpoints:
- POST /api/add-book: Upload a cover and add a book (session required)
- GET /api/fetch-books: Every book, newest first, with owner usernames
"""

from fastapi import APIRouter

from favlib.dependencies import CurrentUserId, DbSession, ImageHostDep
from favlib.schemas import (
    BookCreate,
    BookCreatedResponse,
    BookListResponse,
    BookResponse,
    MessageResponse,
)
from favlib.services import books as book_service

router = APIRouter(
    tags=["Books"],
    responses={
        400: {"model": MessageResponse, "description": "Bad request"},
    },
)


@router.post(
    "/add-book",
    response_model=BookCreatedResponse,
    summary="Add a book",
    responses={401: {"model": MessageResponse, "description": "Unauthorized"}},
)
def add_book(
    book_data: BookCreate,
    user_id: CurrentUserId,
    db: DbSession,
    image_host: ImageHostDep,
) -> BookCreatedResponse:
    """
    Add a book to the shared list.

    The session is checked before anything else, so an anonymous
    request never reaches the image host.
    """
    book = book_service.add_book(db, image_host, book_data, user_id)
    return BookCreatedResponse(
        book=BookResponse.model_validate(book),
        message="Book added successfully.",
    )


@router.get(
    "/fetch-books",
    response_model=BookListResponse,
    summary="List all books",
)
def fetch_books(db: DbSession) -> BookListResponse:
    books = book_service.list_books(db)
    return BookListResponse(books=[BookResponse.model_validate(book) for book in books])
