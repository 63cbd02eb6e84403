"""
Client State Store

One explicitly owned container for the state a Favlib front end shares
across its views: the current user, the book list, per-operation
loading flags and the last error.

The store owns an httpx.Client, so the HTTP-only session cookie set by
signup/login is replayed on later calls exactly like a browser would.
State changes only through the operations below. Each one:
1. raises its loading flag
2. performs one API call
3. on success stores the result
4. on failure stores the server's message in `error` and raises
   StoreError so the caller can react

Nothing guards against overlapping calls; callers should disable their
triggers while a loading flag is up.

Usage:
    store = LibraryStore.connect("http://localhost:5000")
    store.start()  # restore an existing session, if any
    store.login("alice", "pw123")
    store.fetch_books()
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """An API call made by the store failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class LibraryStore:
    """
    Current-user and book-list state backed by the Favlib API.

    Args:
        http: Client whose base URL points at the API server (a
            fastapi.testclient.TestClient works too)
        api_prefix: Path prefix of the API routes
    """

    def __init__(self, http: httpx.Client, api_prefix: str = "/api") -> None:
        self._http = http
        self._api_prefix = api_prefix.rstrip("/")

        self.user: dict[str, Any] | None = None
        self.books: list[dict[str, Any]] = []
        self.error: str | None = None
        self.message: str | None = None

        self.is_signing_up = False
        self.is_logging_in = False
        self.is_logging_out = False
        self.is_checking_auth = False
        self.is_adding_book = False
        self.is_fetching_books = False

    @classmethod
    def connect(cls, base_url: str, timeout: float = 30.0) -> "LibraryStore":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def close(self) -> None:
        self._http.close()

    # -------------------------------------------------------------------------
    # Auth operations
    # -------------------------------------------------------------------------
    def start(self) -> None:
        """Restore the session from the stored cookie; run once at startup."""
        self.fetch_current_user()

    def signup(self, username: str, email: str, password: str) -> dict[str, Any]:
        self.is_signing_up = True
        self.error = None
        try:
            data = self._request(
                "POST",
                "/signup",
                "Error signing up.",
                json={"username": username, "email": email, "password": password},
            )
        finally:
            self.is_signing_up = False

        self.user = data["user"]
        self.message = data.get("message")
        return self.user

    def login(self, username: str, password: str) -> dict[str, Any]:
        self.is_logging_in = True
        self.error = None
        try:
            data = self._request(
                "POST",
                "/login",
                "Error logging in.",
                json={"username": username, "password": password},
            )
        finally:
            self.is_logging_in = False

        self.user = data["user"]
        self.message = data.get("message")
        return self.user

    def fetch_current_user(self) -> dict[str, Any] | None:
        """
        Load the user behind the session cookie.

        On failure (no cookie, expired token) the user is cleared before
        the error is raised.
        """
        self.is_checking_auth = True
        self.error = None
        try:
            data = self._request("GET", "/fetch-user", "Error fetching user.")
        except StoreError:
            self.user = None
            raise
        finally:
            self.is_checking_auth = False

        self.user = data["user"]
        return self.user

    def logout(self) -> None:
        self.is_logging_out = True
        self.error = None
        try:
            data = self._request("POST", "/logout", "Error logging out.")
        finally:
            self.is_logging_out = False

        # The server already expired the cookie; drop any local copy too.
        self._http.cookies.delete("token")
        self.user = None
        self.books = []
        self.message = data.get("message")

    # -------------------------------------------------------------------------
    # Book operations
    # -------------------------------------------------------------------------
    def add_book(
        self,
        image: str,
        title: str,
        author: str,
        link: str,
        review: str,
        subtitle: str | None = None,
    ) -> dict[str, Any]:
        """Add a book and put it at the head of the cached list."""
        self.is_adding_book = True
        self.error = None
        try:
            data = self._request(
                "POST",
                "/add-book",
                "Error adding book.",
                json={
                    "image": image,
                    "title": title,
                    "subtitle": subtitle,
                    "author": author,
                    "link": link,
                    "review": review,
                },
            )
        finally:
            self.is_adding_book = False

        book = data["book"]
        self.books.insert(0, book)
        self.message = data.get("message")
        return book

    def fetch_books(self) -> list[dict[str, Any]]:
        self.is_fetching_books = True
        self.error = None
        try:
            data = self._request("GET", "/fetch-books", "Error fetching books.")
        finally:
            self.is_fetching_books = False

        self.books = data["books"]
        return self.books

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        default_error: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        try:
            response = self._http.request(method, f"{self._api_prefix}{path}", **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e!r}")
            self.error = default_error
            raise StoreError(default_error) from e

        if response.is_success:
            try:
                data = response.json()
            except ValueError:
                data = None
            if isinstance(data, dict):
                return data
            logger.warning(f"{method} {path} returned a non-JSON body")
            self.error = default_error
            raise StoreError(default_error, status_code=response.status_code)

        try:
            message = response.json().get("message") or default_error
        except ValueError:
            message = default_error

        self.error = message
        raise StoreError(message, status_code=response.status_code)
