import os

# cheap hashes and plain log lines for the test run; must be set before handyman is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_JSON", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from handyman.db.base import Base, get_db
from handyman.db.models.user import User
from handyman.main import app


@pytest.fixture
def Session():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def client(Session):
    def override_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(Session):
    """Insert a user row directly, bypassing the API."""

    def _make_user(**fields):
        fields.setdefault("name", "Test User")
        fields.setdefault("email", "test@example.com")
        fields.setdefault("password", "secret1")
        db = Session()
        user = User(**fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        db.close()
        return user

    return _make_user


def register(client, name="A", email="a@example.com", password="secret1", **extra):
    return client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password, **extra},
    )


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}
