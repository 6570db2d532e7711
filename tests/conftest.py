"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient

from docboard.config import Settings
from docboard.database import Base, Database, get_db
from docboard.main import create_app
from docboard.models.enums import Role
from docboard.security import PasswordHasher, TokenCodec
from docboard.services.auth import AuthService
from docboard.services.documents import DocumentService

TEST_PASSWORD = "testpass123"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpass123"


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/docboard", "/docboard_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="session")
def settings():
    """Settings for tests: cheap hashing and a cookie the plain-HTTP client will send back."""
    return Settings(
        _env_file=None,
        database_url=SQLALCHEMY_DATABASE_URL,
        jwt_secret="test-secret-key-that-is-long-enough-0123456789",
        bcrypt_rounds=4,
        cookie_secure=False,
        environment="test",
    )


@pytest.fixture(scope="session")
def database(settings):
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    database = Database(SQLALCHEMY_DATABASE_URL)
    database.drop_all()
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture(scope="function", autouse=True)
def db(database):
    """Create a fresh database session for each test with cleanup."""
    session = database.session_factory()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="session")
def app(settings, database):
    return create_app(settings, database)


@pytest.fixture(scope="function")
def client(app, db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def hasher(settings):
    return PasswordHasher(rounds=settings.bcrypt_rounds)


@pytest.fixture(scope="session")
def codec(settings):
    return TokenCodec.from_settings(settings)


@pytest.fixture
def auth_service(db, hasher, codec):
    return AuthService(db, hasher, codec)


@pytest.fixture
def document_service(db):
    return DocumentService(db)


def register(client, name: str, email: str, password: str = TEST_PASSWORD, headers=None, **extra):
    """Register a user through the API and return the response."""
    return client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": password, **extra},
        headers=headers or {},
    )


def login(client, email: str, password: str = TEST_PASSWORD) -> AuthHeaders:
    """Log in and return Bearer headers for the session token.

    The cookie jar is cleared so several users can share one client.
    """
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    token = response.cookies.get("auth-token")
    assert token
    client.cookies.clear()
    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=response.json()["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    response = register(client, "Test User", "test@example.com")
    assert response.status_code == 201
    return login(client, "test@example.com")


@pytest.fixture
def other_auth_headers(client):
    """A second ordinary user."""
    response = register(client, "Other User", "other@example.com")
    assert response.status_code == 201
    return login(client, "other@example.com")


@pytest.fixture
def admin_headers(client, auth_service):
    """Seed the default admin and return its auth headers."""
    admin = auth_service.ensure_default_admin("System Administrator", ADMIN_EMAIL, ADMIN_PASSWORD)
    assert admin is not None and admin.role == Role.ADMIN
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
