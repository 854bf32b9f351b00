"""
Shared fixtures for the API and service tests.

Every test gets a fresh in-memory SQLite database; the app's `get_db`
dependency is overridden to hand out sessions bound to it.
See https://fastapi.tiangolo.com/advanced/testing-database
"""

import os

# Must be set before anything from `app` is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db, init_db
from app.main import app
from app.services.users import UserService

DEFAULT_PASSWORD = "segredo123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_user(db_session):
    def _create(name="Maria", email="maria@pizzaria.com", password=DEFAULT_PASSWORD):
        return UserService(db_session).create_user(
            {"name": name, "email": email, "password": password}
        )

    return _create


@pytest.fixture
def login(client):
    def _login(email="maria@pizzaria.com", password=DEFAULT_PASSWORD):
        response = client.post("/api/v1/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.json()
        return response.json()["usuario"]["token"]

    return _login


@pytest.fixture
def auth_headers(create_user, login):
    create_user()
    token = login()
    return {"Authorization": f"Bearer {token}"}
