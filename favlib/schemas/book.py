"""
Book Pydantic Schemas

- BookCreate: add-book body; image is a data URI or a remote image URL
- BookResponse: A stored book, with the owner reduced to their username
- BookCreatedResponse / BookListResponse: Endpoint envelopes
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BookCreate(BaseModel):
    """
    Schema for adding a book.

    Presence of the required fields is checked by the book service,
    before the image is uploaded.
    """

    image: str | None = Field(
        default=None,
        description="Cover image as a data URI or remote URL",
        examples=["data:image/png;base64,iVBORw0KGgo..."],
    )
    title: str | None = Field(default=None, max_length=500, examples=["Dune"])
    subtitle: str | None = Field(default=None, max_length=500)
    author: str | None = Field(default=None, max_length=255, examples=["Frank Herbert"])
    link: str | None = Field(default=None, examples=["https://example.com/dune"])
    review: str | None = Field(default=None, examples=["A desert planet classic."])


class BookOwner(BaseModel):
    """Owner as exposed on a book: the username and nothing else."""

    username: str

    model_config = ConfigDict(from_attributes=True)


class BookResponse(BaseModel):
    id: int = Field(..., description="Unique book identifier")
    image: str = Field(..., description="Hosted cover image URL")
    title: str
    subtitle: str | None = None
    author: str
    link: str
    review: str
    user: BookOwner
    created_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "image": "https://res.cloudinary.com/demo/image/upload/v1/Favlib/dune.png",
                "title": "Dune",
                "subtitle": None,
                "author": "Frank Herbert",
                "link": "https://example.com/dune",
                "review": "A desert planet classic.",
                "user": {"username": "alice"},
                "created_at": "2024-01-15T10:30:00Z",
            }
        },
    )


class BookCreatedResponse(BaseModel):
    book: BookResponse
    message: str


class BookListResponse(BaseModel):
    books: list[BookResponse] = Field(..., description="All books, newest first")
