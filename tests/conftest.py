"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Every test starts from empty tables.
"""

import os

# Cheapest bcrypt work factor; must be set before the app reads its settings
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from scrooge_bank.main import app
from scrooge_bank.middleware import limiter
from scrooge_bank.models import Base, Role
from scrooge_bank.models.base import get_db
from scrooge_bank.security import hash_secret, issue_credential
from scrooge_bank.services.ledger_store import LedgerStore


# SQLite file database; no external database needed.
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    limiter.reset()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def store(db_session):
    return LedgerStore(db_session)


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    The get_db dependency is overridden so the app uses the
    test session instead of the real database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def threaded_client():
    """
    Test client for concurrent requests.

    Each request gets its own session, as in production, so
    requests issued from several threads never share one.
    """
    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Register through the API; the returned callable gives (user, auth headers)."""
    def register(name="Alice", email="alice@example.com", password="password"):
        response = client.post("/auth/register", json={
            "name": name,
            "email": email,
            "password": password,
        })
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return register


@pytest.fixture
def alice(register_user):
    return register_user()


@pytest.fixture
def bob(register_user):
    return register_user(name="Bob", email="bob@example.com")


@pytest.fixture
def admin_headers(store):
    """Admins cannot be created through the API; insert one directly."""
    with store.atomic():
        admin = store.create_user(
            name="Admin",
            email="admin@example.com",
            password_hash=hash_secret("adminpass"),
            role=Role.ADMIN,
        )
    return {"Authorization": f"Bearer {issue_credential(admin.id, admin.role.value)}"}
