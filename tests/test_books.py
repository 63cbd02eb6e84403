"""
Tests for the Books endpoints

- POST /api/add-book
- GET /api/fetch-books

The image host is the FakeImageHost from conftest, so these tests
never touch the network.
"""

import logging
from unittest.mock import MagicMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from favlib.exceptions import InternalError, NotFoundError, ValidationError
from favlib.models import Book, User
from favlib.schemas import BookCreate
from favlib.services import books as book_service
from favlib.services.security import hash_password
from tests.conftest import COVER_PAYLOAD, FakeImageHost, book_payload


def count_books(db_session: Session) -> int:
    return db_session.execute(select(func.count(Book.id))).scalar_one()


class TestAddBook:
    """Tests for POST /api/add-book"""

    def test_add_book_success(self, auth_client: TestClient, image_host: FakeImageHost):
        response = auth_client.post("/api/add-book", json=book_payload())

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Book added successfully."
        book = data["book"]
        assert book["title"] == "Dune"
        assert book["subtitle"] == "Book One"
        assert book["author"] == "Frank Herbert"
        assert book["user"] == {"username": "alice"}
        assert book["image"].startswith("https://res.cloudinary.com/")
        assert image_host.uploads == [COVER_PAYLOAD]

    def test_add_book_stores_hosted_url_not_payload(
        self, auth_client: TestClient, db_session: Session
    ):
        auth_client.post("/api/add-book", json=book_payload())

        book = db_session.execute(select(Book)).scalar_one()
        assert book.image != COVER_PAYLOAD
        assert book.image.startswith("https://")

    def test_add_book_subtitle_optional(self, auth_client: TestClient):
        payload = book_payload()
        del payload["subtitle"]

        response = auth_client.post("/api/add-book", json=payload)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["book"]["subtitle"] is None

    def test_add_book_without_session(
        self, client: TestClient, image_host: FakeImageHost, db_session: Session
    ):
        response = client.post("/api/add-book", json=book_payload())

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "No token provided."
        assert image_host.uploads == []
        assert count_books(db_session) == 0

    def test_add_book_with_invalid_session(
        self, client: TestClient, image_host: FakeImageHost, db_session: Session
    ):
        client.cookies.set("token", "not-a-token")

        response = client.post("/api/add-book", json=book_payload())

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert image_host.uploads == []
        assert count_books(db_session) == 0

    @pytest.mark.parametrize("field", ["image", "title", "author", "link", "review"])
    def test_add_book_missing_required_field_skips_upload(
        self, auth_client: TestClient, image_host: FakeImageHost, field: str
    ):
        response = auth_client.post("/api/add-book", json=book_payload(**{field: ""}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"].startswith("All fields are required.")
        assert field in response.json()["message"]
        assert image_host.uploads == []

    def test_add_book_upload_failure_persists_nothing(
        self, auth_client: TestClient, image_host: FakeImageHost, db_session: Session
    ):
        image_host.fail_with = "Image upload failed: Invalid image file"

        response = auth_client.post("/api/add-book", json=book_payload())

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Image upload failed: Invalid image file"
        assert count_books(db_session) == 0


class TestFetchBooks:
    """Tests for GET /api/fetch-books"""

    def test_fetch_books_empty(self, client: TestClient):
        response = client.get("/api/fetch-books")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"books": []}

    def test_fetch_books_newest_first(self, auth_client: TestClient):
        auth_client.post("/api/add-book", json=book_payload(title="B1"))
        auth_client.post("/api/add-book", json=book_payload(title="B2"))

        response = auth_client.get("/api/fetch-books")

        books = response.json()["books"]
        assert [book["title"] for book in books] == ["B2", "B1"]

    def test_fetch_books_exposes_only_owner_username(self, auth_client: TestClient):
        auth_client.post("/api/add-book", json=book_payload())

        books = auth_client.get("/api/fetch-books").json()["books"]

        assert books[0]["user"] == {"username": "alice"}

    def test_fetch_books_is_public(self, auth_client: TestClient):
        auth_client.post("/api/add-book", json=book_payload())
        auth_client.cookies.clear()

        response = auth_client.get("/api/fetch-books")

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()["books"]) == 1

    def test_fetch_books_lists_every_owner(
        self, auth_client: TestClient, db_session: Session
    ):
        bob = User(username="bob", email="b@x.com", hashed_password=hash_password("pw456"))
        db_session.add(bob)
        db_session.commit()
        auth_client.post("/api/add-book", json=book_payload(title="Alice's"))
        auth_client.cookies.clear()
        auth_client.post("/api/login", json={"username": "bob", "password": "pw456"})
        auth_client.post("/api/add-book", json=book_payload(title="Bob's"))

        books = auth_client.get("/api/fetch-books").json()["books"]

        assert [(b["title"], b["user"]["username"]) for b in books] == [
            ("Bob's", "bob"),
            ("Alice's", "alice"),
        ]


class TestBookService:
    """Direct tests of the add-book pipeline."""

    def test_unknown_owner_skips_upload(self, db_session: Session):
        image_host = FakeImageHost()

        with pytest.raises(NotFoundError):
            book_service.add_book(db_session, image_host, BookCreate(**book_payload()), 9999)

        assert image_host.uploads == []

    def test_missing_fields_reported_together(self, db_session: Session, sample_user: User):
        with pytest.raises(ValidationError) as exc_info:
            book_service.add_book(
                db_session,
                FakeImageHost(),
                BookCreate(title="Dune"),
                sample_user.id,
            )

        assert "image" in exc_info.value.message
        assert "author" in exc_info.value.message

    def test_persistence_failure_logs_orphaned_image(
        self,
        db_session: Session,
        sample_user: User,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ):
        image_host = FakeImageHost()
        monkeypatch.setattr(
            db_session,
            "commit",
            MagicMock(side_effect=OperationalError("INSERT", {}, Exception("db down"))),
        )
        monkeypatch.setattr(db_session, "rollback", MagicMock())

        with caplog.at_level(logging.WARNING, logger="favlib.services.books"):
            with pytest.raises(InternalError):
                book_service.add_book(
                    db_session, image_host, BookCreate(**book_payload()), sample_user.id
                )

        assert len(image_host.uploads) == 1
        assert "Orphaned hosted image" in caplog.text
        assert "cover1.png" in caplog.text
        db_session.rollback.assert_called_once()
