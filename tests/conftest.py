"""
pytest Fixtures for Favlib Tests

Shared fixtures:
- engine / db_session: SQLite in-memory database, rolled back per test
- image_host: Fake image host recording uploads (no network)
- client: TestClient wired to the test database and fake image host
- sample_user / auth_client: A registered user and a signed-in client
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# Environment variables must be set BEFORE importing the app: settings
# are read once and cached.
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from favlib.database import Base, get_db
from favlib.exceptions import UploadError
from favlib.main import app
from favlib.models import User
from favlib.services.image_host import get_image_host
from favlib.services.security import hash_password

SAMPLE_PASSWORD = "pw123"
COVER_PAYLOAD = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="


class FakeImageHost:
    """Stands in for Cloudinary: remembers payloads, hands out URLs."""

    def __init__(self) -> None:
        self.uploads: list[str] = []
        self.fail_with: str | None = None

    def upload(self, payload: str) -> str:
        if self.fail_with:
            raise UploadError(self.fail_with)
        self.uploads.append(payload)
        return f"https://res.cloudinary.com/test/image/upload/v1/Favlib/cover{len(self.uploads)}.png"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture(scope="session")
def engine():
    """
    SQLite in-memory engine shared by the whole session.

    StaticPool keeps the single connection alive; without it the
    in-memory database would vanish between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Fresh session per test, wrapped in a transaction rolled back afterwards.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def image_host() -> FakeImageHost:
    return FakeImageHost()


@pytest.fixture(scope="function")
def client(db_session: Session, image_host: FakeImageHost) -> Generator[TestClient, None, None]:
    """
    Test client using the test database and the fake image host.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_host] = lambda: image_host

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_user(db_session: Session) -> User:
    """A registered user with password SAMPLE_PASSWORD."""
    user = User(
        username="alice",
        email="a@x.com",
        hashed_password=hash_password(SAMPLE_PASSWORD),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_client(client: TestClient, sample_user: User) -> TestClient:
    """The test client, signed in as sample_user (cookie stored)."""
    response = client.post(
        "/api/login",
        json={"username": sample_user.username, "password": SAMPLE_PASSWORD},
    )
    assert response.status_code == 200
    return client


def book_payload(**overrides) -> dict:
    payload = {
        "image": COVER_PAYLOAD,
        "title": "Dune",
        "subtitle": "Book One",
        "author": "Frank Herbert",
        "link": "https://example.com/dune",
        "review": "Spice, sand and politics.",
    }
    payload.update(overrides)
    return payload
